"""SQLAlchemy Repositories: the datastore side of core/repository_protocols.py.

Invariants:
    - Every public method returns records, never ORM instances
    - Each write commits immediately; there is no unit of work spanning calls
    - Listing queries order by (created_at, id) so pages are stable

Design Decisions:
    - One class per entity sharing a single AsyncSession per request
    - build_repositories() is the only constructor services and routes see
"""

from fastapi import Depends
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from community_api.core.domain_types import CommunityId, MemberId, RoleId, UserId
from community_api.core.records import (
    CommunityRecord, MemberRecord, RoleRecord, UserRecord,
)
from community_api.core.repository_protocols import Repositories
from community_api.infrastructure.database import get_db
from community_api.models import Community, Member, Role, User


# ─── Row → record ────────────────────────────────────────────────

def _user_record(row: User) -> UserRecord:
    return UserRecord(
        id=UserId(row.id), name=row.name, email=row.email,
        password=row.password,
        created_at=row.created_at, updated_at=row.updated_at,
    )


def _role_record(row: Role) -> RoleRecord:
    return RoleRecord(
        id=RoleId(row.id), name=row.name,
        created_at=row.created_at, updated_at=row.updated_at,
    )


def _community_record(row: Community) -> CommunityRecord:
    return CommunityRecord(
        id=CommunityId(row.id), name=row.name, slug=row.slug or "",
        owner_id=UserId(row.owner_id),
        created_at=row.created_at, updated_at=row.updated_at,
    )


def _member_record(row: Member) -> MemberRecord:
    return MemberRecord(
        id=MemberId(row.id), community_id=CommunityId(row.community_id),
        user_id=UserId(row.user_id), role_id=RoleId(row.role_id),
        created_at=row.created_at, updated_at=row.updated_at,
    )


class _SqlRepository:

    def __init__(self, db: AsyncSession):
        self._db = db

    async def _persist(self, row):
        self._db.add(row)
        await self._db.commit()
        await self._db.refresh(row)
        return row


# ─── Users ───────────────────────────────────────────────────────

class SqlUserRepository(_SqlRepository):

    async def find_by_id(self, user_id: UserId) -> UserRecord | None:
        row = await self._db.get(User, user_id)
        return _user_record(row) if row else None

    async def find_by_email(self, email: str) -> UserRecord | None:
        result = await self._db.execute(select(User).where(User.email == email))
        row = result.scalar_one_or_none()
        return _user_record(row) if row else None

    async def create(
        self, user_id: UserId, name: str, email: str, password_hash: str,
    ) -> UserRecord:
        row = await self._persist(
            User(id=user_id, name=name, email=email, password=password_hash),
        )
        return _user_record(row)


# ─── Roles ───────────────────────────────────────────────────────

class SqlRoleRepository(_SqlRepository):

    async def find_by_id(self, role_id: RoleId) -> RoleRecord | None:
        row = await self._db.get(Role, role_id)
        return _role_record(row) if row else None

    async def find_by_name(self, name: str) -> RoleRecord | None:
        result = await self._db.execute(
            select(Role).where(Role.name == name)
            .order_by(Role.created_at, Role.id).limit(1),
        )
        row = result.scalar_one_or_none()
        return _role_record(row) if row else None

    async def find_by_names(self, names: list[str]) -> list[RoleRecord]:
        result = await self._db.execute(
            select(Role).where(Role.name.in_(names)),
        )
        return [_role_record(r) for r in result.scalars().all()]

    async def create(self, role_id: RoleId, name: str) -> RoleRecord:
        row = await self._persist(Role(id=role_id, name=name))
        return _role_record(row)

    async def list_page(self, offset: int, limit: int) -> list[RoleRecord]:
        result = await self._db.execute(
            select(Role).order_by(Role.created_at, Role.id)
            .offset(offset).limit(limit),
        )
        return [_role_record(r) for r in result.scalars().all()]

    async def count(self) -> int:
        result = await self._db.execute(select(func.count()).select_from(Role))
        return result.scalar_one()


# ─── Communities ─────────────────────────────────────────────────

class SqlCommunityRepository(_SqlRepository):

    async def find_by_id(
        self, community_id: CommunityId,
    ) -> CommunityRecord | None:
        row = await self._db.get(Community, community_id)
        return _community_record(row) if row else None

    async def create(
        self, community_id: CommunityId, name: str, slug: str, owner_id: UserId,
    ) -> CommunityRecord:
        row = await self._persist(
            Community(id=community_id, name=name, slug=slug, owner_id=owner_id),
        )
        return _community_record(row)

    async def list_page(
        self, offset: int, limit: int, owner_id: UserId | None = None,
    ) -> list[CommunityRecord]:
        query = select(Community)
        if owner_id is not None:
            query = query.where(Community.owner_id == owner_id)
        result = await self._db.execute(
            query.order_by(Community.created_at, Community.id)
            .offset(offset).limit(limit),
        )
        return [_community_record(r) for r in result.scalars().all()]

    async def count(self, owner_id: UserId | None = None) -> int:
        query = select(func.count()).select_from(Community)
        if owner_id is not None:
            query = query.where(Community.owner_id == owner_id)
        result = await self._db.execute(query)
        return result.scalar_one()


# ─── Members ─────────────────────────────────────────────────────

class SqlMemberRepository(_SqlRepository):

    async def find_one(
        self, user_id: UserId, community_id: CommunityId, role_id: RoleId,
    ) -> MemberRecord | None:
        result = await self._db.execute(
            select(Member).where(
                Member.user_id == user_id,
                Member.community_id == community_id,
                Member.role_id == role_id,
            ).limit(1),
        )
        row = result.scalar_one_or_none()
        return _member_record(row) if row else None

    async def find_for_user(
        self, user_id: UserId, role_ids: list[RoleId],
        offset: int | None = None, limit: int | None = None,
    ) -> list[MemberRecord]:
        query = (
            select(Member)
            .where(Member.user_id == user_id, Member.role_id.in_(role_ids))
            .order_by(Member.created_at, Member.id)
        )
        if offset is not None:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        result = await self._db.execute(query)
        return [_member_record(r) for r in result.scalars().all()]

    async def count_for_user(
        self, user_id: UserId, role_ids: list[RoleId],
    ) -> int:
        result = await self._db.execute(
            select(func.count()).select_from(Member)
            .where(Member.user_id == user_id, Member.role_id.in_(role_ids)),
        )
        return result.scalar_one()

    async def find_in_communities(
        self, user_id: UserId, community_ids: list[CommunityId],
    ) -> list[MemberRecord]:
        result = await self._db.execute(
            select(Member).where(
                Member.user_id == user_id,
                Member.community_id.in_(community_ids),
            ),
        )
        return [_member_record(r) for r in result.scalars().all()]

    async def list_for_community(
        self, community_id: CommunityId, offset: int, limit: int,
    ) -> list[MemberRecord]:
        result = await self._db.execute(
            select(Member).where(Member.community_id == community_id)
            .order_by(Member.created_at, Member.id)
            .offset(offset).limit(limit),
        )
        return [_member_record(r) for r in result.scalars().all()]

    async def count_for_community(self, community_id: CommunityId) -> int:
        result = await self._db.execute(
            select(func.count()).select_from(Member)
            .where(Member.community_id == community_id),
        )
        return result.scalar_one()

    async def create(
        self, member_id: MemberId, community_id: CommunityId,
        user_id: UserId, role_id: RoleId,
    ) -> MemberRecord:
        row = await self._persist(
            Member(
                id=member_id, community_id=community_id,
                user_id=user_id, role_id=role_id,
            ),
        )
        return _member_record(row)

    async def delete_many(self, member_ids: list[MemberId]) -> None:
        await self._db.execute(delete(Member).where(Member.id.in_(member_ids)))
        await self._db.commit()


def build_repositories(db: AsyncSession) -> Repositories:
    return Repositories(
        users=SqlUserRepository(db),
        roles=SqlRoleRepository(db),
        communities=SqlCommunityRepository(db),
        members=SqlMemberRepository(db),
    )


async def get_repositories(db: AsyncSession = Depends(get_db)) -> Repositories:
    """FastAPI dependency: repositories bound to the request's DB session."""
    return build_repositories(db)
