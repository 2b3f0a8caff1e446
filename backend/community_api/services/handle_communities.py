"""Community Handlers: creation, listings, and community member listings.

Invariants:
    - The creator becomes the owner and gets a "Community Admin" Member row
    - The "Community Admin" role row is created on first use if absent
    - All listings use core/pagination.py (page size 10, 1-indexed)

Design Decisions:
    - Community, admin role and admin membership are separate commits, not one
      transaction; a failure midway leaves an owner without an admin row, which
      the owner gate does not depend on
    - Joined-communities and member listings resolve related rows one by one
      (N+1): pages are at most 10 rows
    - Role-exists-or-create has no uniqueness guard; concurrent first
      communities may create duplicate admin roles
"""

import logging

from community_api.core.domain_types import (
    CommunityId, MemberId, RoleId, RoleName, UserId, slugify,
)
from community_api.core.errors import (
    MSG_USER_NOT_FOUND, ErrorCode, FieldError, FieldIssue, field_not_found,
)
from community_api.core.outcome import Ok, Outcome
from community_api.core.pagination import PageRequest, page_meta
from community_api.core.records import RoleRecord
from community_api.core.repository_protocols import Repositories
from community_api.infrastructure.snowflake import generate_id
from community_api.schemas.resources import (
    CommunityData, JoinedCommunityData, MemberDetailData,
)

logger = logging.getLogger(__name__)

_JOINED_ROLE_NAMES = [RoleName.MEMBER.value, RoleName.MODERATOR.value]


class CommunityHandlers:
    """Community lifecycle and read models."""

    def __init__(self, repos: Repositories):
        self.repos = repos

    async def _ensure_admin_role(self) -> RoleRecord:
        role = await self.repos.roles.find_by_name(RoleName.ADMIN.value)
        if role:
            return role
        logger.info("Creating missing Community Admin role")
        return await self.repos.roles.create(
            RoleId(generate_id()), RoleName.ADMIN.value,
        )

    async def create_community(self, owner_id: UserId, body: dict) -> Outcome:
        owner = await self.repos.users.find_by_id(owner_id)
        if not owner:
            return field_not_found("user", MSG_USER_NOT_FOUND)

        name = body["name"]
        community = await self.repos.communities.create(
            CommunityId(generate_id()), name, slugify(name), owner.id,
        )
        admin_role = await self._ensure_admin_role()
        await self.repos.members.create(
            MemberId(generate_id()), community.id, owner.id, admin_role.id,
        )
        logger.info(
            "Community created",
            extra={"user_id": owner.id, "community_id": community.id},
        )
        return Ok({"data": CommunityData.from_record(community).dump()})

    async def list_communities(self, page: PageRequest) -> Outcome:
        communities = await self.repos.communities.list_page(
            page.offset, page.limit,
        )
        total = await self.repos.communities.count()
        return Ok({
            "meta": page_meta(total, page),
            "data": [CommunityData.from_record(c).dump() for c in communities],
        })

    async def list_owned(self, owner_id: UserId, page: PageRequest) -> Outcome:
        total = await self.repos.communities.count(owner_id=owner_id)
        communities = await self.repos.communities.list_page(
            page.offset, page.limit, owner_id=owner_id,
        )
        return Ok({
            "meta": page_meta(total, page),
            "data": [CommunityData.from_record(c).dump() for c in communities],
        })

    async def list_joined(self, user_id: UserId, page: PageRequest) -> Outcome:
        roles = await self.repos.roles.find_by_names(_JOINED_ROLE_NAMES)
        if not roles:
            return FieldError((
                FieldIssue(
                    "role", "Community Member role not found.",
                    ErrorCode.RESOURCE_NOT_FOUND,
                ),
                FieldIssue(
                    "role", "Community Admin role not found.",
                    ErrorCode.RESOURCE_NOT_FOUND,
                ),
            ))

        role_ids = [r.id for r in roles]
        memberships = await self.repos.members.find_for_user(
            user_id, role_ids, offset=page.offset, limit=page.limit,
        )
        total = await self.repos.members.count_for_user(user_id, role_ids)

        data = []
        for membership in memberships:
            community = await self.repos.communities.find_by_id(
                membership.community_id,
            )
            if community is None:
                continue
            owner = await self.repos.users.find_by_id(community.owner_id)
            data.append(JoinedCommunityData.from_records(community, owner).dump())

        return Ok({"meta": page_meta(total, page), "data": data})

    async def list_members(
        self, community_id: CommunityId, page: PageRequest,
    ) -> Outcome:
        members = await self.repos.members.list_for_community(
            community_id, page.offset, page.limit,
        )
        total = await self.repos.members.count_for_community(community_id)

        data = []
        for member in members:
            role = await self.repos.roles.find_by_id(member.role_id)
            user = await self.repos.users.find_by_id(member.user_id)
            data.append(MemberDetailData.from_records(member, user, role).dump())

        return Ok({"meta": page_meta(total, page), "data": data})
