"""Boundary Protocols: contracts between the services and the datastore.

Invariants:
    - Services NEVER import ORM models or sessions; they depend on these
      Protocols only
    - Every method returns plain records (core/records.py), never ORM rows
    - Writes are committed by the implementation, one statement at a time;
      there is no cross-repository transaction

Design Decisions:
    - Protocol over ABC: structural subtyping, tests can pass any fake with the
      same methods (ADR: no inheritance hierarchy)
    - Async methods: implementations do IO
"""

from dataclasses import dataclass
from typing import Protocol

from community_api.core.domain_types import CommunityId, MemberId, RoleId, UserId
from community_api.core.records import (
    CommunityRecord, MemberRecord, RoleRecord, UserRecord,
)


class UserRepository(Protocol):
    """Contract for user persistence."""
    async def find_by_id(self, user_id: UserId) -> UserRecord | None: ...
    async def find_by_email(self, email: str) -> UserRecord | None: ...
    async def create(
        self, user_id: UserId, name: str, email: str, password_hash: str,
    ) -> UserRecord: ...


class RoleRepository(Protocol):
    """Contract for role persistence."""
    async def find_by_id(self, role_id: RoleId) -> RoleRecord | None: ...
    async def find_by_name(self, name: str) -> RoleRecord | None: ...
    async def find_by_names(self, names: list[str]) -> list[RoleRecord]: ...
    async def create(self, role_id: RoleId, name: str) -> RoleRecord: ...
    async def list_page(self, offset: int, limit: int) -> list[RoleRecord]: ...
    async def count(self) -> int: ...


class CommunityRepository(Protocol):
    """Contract for community persistence."""
    async def find_by_id(
        self, community_id: CommunityId,
    ) -> CommunityRecord | None: ...
    async def create(
        self, community_id: CommunityId, name: str, slug: str, owner_id: UserId,
    ) -> CommunityRecord: ...
    async def list_page(
        self, offset: int, limit: int, owner_id: UserId | None = None,
    ) -> list[CommunityRecord]: ...
    async def count(self, owner_id: UserId | None = None) -> int: ...


class MemberRepository(Protocol):
    """Contract for membership persistence."""
    async def find_one(
        self, user_id: UserId, community_id: CommunityId, role_id: RoleId,
    ) -> MemberRecord | None: ...
    async def find_for_user(
        self, user_id: UserId, role_ids: list[RoleId],
        offset: int | None = None, limit: int | None = None,
    ) -> list[MemberRecord]: ...
    async def count_for_user(
        self, user_id: UserId, role_ids: list[RoleId],
    ) -> int: ...
    async def find_in_communities(
        self, user_id: UserId, community_ids: list[CommunityId],
    ) -> list[MemberRecord]: ...
    async def list_for_community(
        self, community_id: CommunityId, offset: int, limit: int,
    ) -> list[MemberRecord]: ...
    async def count_for_community(self, community_id: CommunityId) -> int: ...
    async def create(
        self, member_id: MemberId, community_id: CommunityId,
        user_id: UserId, role_id: RoleId,
    ) -> MemberRecord: ...
    async def delete_many(self, member_ids: list[MemberId]) -> None: ...


@dataclass(frozen=True)
class Repositories:
    """The full set of repositories one request works with."""
    users: UserRepository
    roles: RoleRepository
    communities: CommunityRepository
    members: MemberRepository
