"""Resource Schemas: Pydantic models for the public shape of every entity.

Invariants:
    - UserData never carries the password hash
    - from_record() constructors are the only way records become response data
    - dump() renders JSON-ready dicts (datetimes as ISO strings)

Design Decisions:
    - Response models separate from records: the wire names (owner, created_at)
      stay stable if storage fields change
"""

from datetime import datetime

from pydantic import BaseModel

from community_api.core.records import (
    CommunityRecord, MemberRecord, RoleRecord, UserRecord,
)


class _Data(BaseModel):

    def dump(self) -> dict:
        return self.model_dump(mode="json")


class UserData(_Data):
    """User as returned by the auth endpoints."""
    id: str
    name: str
    email: str
    created_at: datetime

    @classmethod
    def from_record(cls, user: UserRecord) -> "UserData":
        return cls(
            id=user.id, name=user.name, email=user.email,
            created_at=user.created_at,
        )


class RoleData(_Data):
    id: str
    name: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, role: RoleRecord) -> "RoleData":
        return cls(
            id=role.id, name=role.name,
            created_at=role.created_at, updated_at=role.updated_at,
        )


class CommunityData(_Data):
    """Community with its owner as a bare id."""
    id: str
    name: str
    slug: str
    owner: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, community: CommunityRecord) -> "CommunityData":
        return cls(
            id=community.id, name=community.name, slug=community.slug,
            owner=community.owner_id,
            created_at=community.created_at, updated_at=community.updated_at,
        )


class NamedRef(_Data):
    """{id, name} reference to a related user or role."""
    id: str
    name: str


class JoinedCommunityData(_Data):
    """Community with its owner expanded, for the joined-communities listing."""
    id: str
    name: str
    slug: str
    owner: NamedRef | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_records(
        cls, community: CommunityRecord, owner: UserRecord | None,
    ) -> "JoinedCommunityData":
        return cls(
            id=community.id, name=community.name, slug=community.slug,
            owner=NamedRef(id=owner.id, name=owner.name) if owner else None,
            created_at=community.created_at, updated_at=community.updated_at,
        )


class MemberData(_Data):
    """Membership as returned right after it is created."""
    id: str
    community: str
    user: str
    role: str
    created_at: datetime

    @classmethod
    def from_record(cls, member: MemberRecord) -> "MemberData":
        return cls(
            id=member.id, community=member.community_id,
            user=member.user_id, role=member.role_id,
            created_at=member.created_at,
        )


class MemberDetailData(_Data):
    """Membership with user and role expanded, for community member listings."""
    id: str
    community: str
    user: NamedRef | None
    role: NamedRef | None

    @classmethod
    def from_records(
        cls, member: MemberRecord,
        user: UserRecord | None, role: RoleRecord | None,
    ) -> "MemberDetailData":
        return cls(
            id=member.id,
            community=member.community_id,
            user=NamedRef(id=user.id, name=user.name) if user else None,
            role=NamedRef(id=role.id, name=role.name) if role else None,
        )
