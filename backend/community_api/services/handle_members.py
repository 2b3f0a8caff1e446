"""Member Handlers: add a member to a community, remove a user's memberships.

Invariants:
    - add_member runs only after the owner gate; it checks that role and user
      exist and that the (user, community, role) triple is new
    - remove_member deletes every Member row of the target user in every
      community where the caller holds the admin or moderator role

Design Decisions:
    - Duplicate check-then-insert is not atomic and members has no unique
      constraint: concurrent identical requests can both insert
    - Removal scope is the caller's whole admin/moderator set, not the single
      community the gate checked (see DESIGN.md, open question on scoping)
"""

import logging

from community_api.core.domain_types import (
    CommunityId, MemberId, RoleId, RoleName, UserId,
)
from community_api.core.errors import (
    MSG_USER_NOT_FOUND, ErrorCode, GeneralError, field_not_found,
)
from community_api.core.outcome import Ok, Outcome
from community_api.core.repository_protocols import Repositories
from community_api.infrastructure.snowflake import generate_id
from community_api.schemas.resources import MemberData

logger = logging.getLogger(__name__)

_MANAGING_ROLE_NAMES = [RoleName.ADMIN.value, RoleName.MODERATOR.value]


class MemberHandlers:
    """Membership writes."""

    def __init__(self, repos: Repositories):
        self.repos = repos

    async def add_member(self, body: dict) -> Outcome:
        community_id = CommunityId(body["community"])
        role_id = RoleId(body["role"])
        user_id = UserId(body["user"])

        if not await self.repos.roles.find_by_id(role_id):
            return field_not_found("role", "Role not found.")
        if not await self.repos.users.find_by_id(user_id):
            return field_not_found("user", MSG_USER_NOT_FOUND)

        if await self.repos.members.find_one(user_id, community_id, role_id):
            return GeneralError.single(
                "User is already added in the community.",
                ErrorCode.RESOURCE_EXISTS,
            )

        member = await self.repos.members.create(
            MemberId(generate_id()), community_id, user_id, role_id,
        )
        logger.info(
            "Member added",
            extra={"user_id": user_id, "community_id": community_id},
        )
        return Ok({"data": MemberData.from_record(member).dump()})

    async def remove_member(self, caller_id: UserId, target_user_id: UserId) -> Outcome:
        roles = await self.repos.roles.find_by_names(_MANAGING_ROLE_NAMES)
        managed = await self.repos.members.find_for_user(
            caller_id, [r.id for r in roles],
        )
        targets = await self.repos.members.find_in_communities(
            target_user_id, [m.community_id for m in managed],
        )
        if not targets:
            return GeneralError.single(
                "Member not found.", ErrorCode.RESOURCE_NOT_FOUND,
            )

        await self.repos.members.delete_many([t.id for t in targets])
        logger.info(
            f"Removed {len(targets)} membership(s)",
            extra={"user_id": target_user_id},
        )
        return Ok()
