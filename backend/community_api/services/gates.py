"""Authorization Gates: predicates a request must pass before an operation runs.

Invariants:
    - Every gate returns None (continue) or a failure value; gates never raise
      for an authorization outcome
    - Gates read the caller only from the RequestContext they are given
    - Routes chain gates with `or`: first failure wins, later gates never run

Design Decisions:
    - Return failures instead of raising: identical shape to validation
      results, so a route's whole pipeline is one expression
    - require_signed_in takes the failure code from the call site: /auth/*
      answers NOT_SIGNEDIN, resource routes answer NOT_ALLOWED_ACCESS
"""

import logging

from community_api.core.domain_types import CommunityId, RoleName
from community_api.core.errors import (
    ErrorCode, Failure, field_not_found, not_allowed, not_signed_in,
)
from community_api.core.repository_protocols import Repositories
from community_api.core.request_context import RequestContext

logger = logging.getLogger(__name__)


def require_signed_in(
    ctx: RequestContext, code: ErrorCode = ErrorCode.NOT_ALLOWED_ACCESS,
) -> Failure | None:
    """Caller identity must be present on the context."""
    if ctx.is_authenticated:
        return None
    if code == ErrorCode.NOT_SIGNEDIN:
        return not_signed_in()
    return not_allowed()


def require_active_session(ctx: RequestContext) -> Failure | None:
    """A session cookie must be present, verified or not."""
    if ctx.has_session:
        return None
    return not_signed_in()


async def require_community_owner(
    ctx: RequestContext, community_id: CommunityId, repos: Repositories,
) -> Failure | None:
    """Caller must exist and own the community named in the request."""
    user = await repos.users.find_by_id(ctx.caller_id)
    if not user:
        return not_allowed()

    community = await repos.communities.find_by_id(community_id)
    if not community:
        return field_not_found("community", "Community not found.")

    if community.owner_id != user.id:
        logger.info(
            "Owner gate refused caller",
            extra={"user_id": user.id, "community_id": community.id},
        )
        return not_allowed()
    return None


async def require_community_owner_or_moderator(
    ctx: RequestContext, community_id: CommunityId | None, repos: Repositories,
) -> Failure | None:
    """Caller must own the community or hold its moderator role."""
    user = await repos.users.find_by_id(ctx.caller_id)
    if not user:
        return not_allowed()

    community = (
        await repos.communities.find_by_id(community_id) if community_id else None
    )
    if not community:
        return not_allowed()

    if community.owner_id == user.id:
        return None

    moderator = await repos.roles.find_by_name(RoleName.MODERATOR.value)
    if moderator is not None:
        membership = await repos.members.find_one(
            user.id, community.id, moderator.id,
        )
        if membership:
            return None

    logger.info(
        "Owner-or-moderator gate refused caller",
        extra={"user_id": user.id, "community_id": community.id},
    )
    return not_allowed()
