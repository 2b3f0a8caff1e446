"""Member Routes: add a member (owner only), remove a member (owner or moderator).

Invariants:
    - Pipeline order: validate → signed in → ownership gate → handler
    - The gated community comes from the body field `community` on both routes
"""

from fastapi import APIRouter, Depends, Request

from community_api.api.error_handlers import respond
from community_api.api.pipeline import read_body, request_context
from community_api.core.domain_types import CommunityId, UserId
from community_api.core.repository_protocols import Repositories
from community_api.core.request_context import RequestContext
from community_api.core.validation import RequestPayload, validate
from community_api.infrastructure.repositories import get_repositories
from community_api.services.gates import (
    require_community_owner, require_community_owner_or_moderator,
    require_signed_in,
)
from community_api.services.handle_members import MemberHandlers
from community_api.services.rule_sets import ADD_MEMBER_RULES, REMOVE_MEMBER_RULES

router = APIRouter(prefix="/member", tags=["members"])


@router.post("")
async def add_member(
    request: Request,
    ctx: RequestContext = Depends(request_context),
    repos: Repositories = Depends(get_repositories),
):
    body = await read_body(request)
    failure = (
        validate(RequestPayload(body=body), ADD_MEMBER_RULES)
        or require_signed_in(ctx)
        or await require_community_owner(
            ctx, CommunityId(body["community"]), repos,
        )
    )
    if failure:
        return respond(failure)
    return respond(await MemberHandlers(repos).add_member(body))


@router.delete("/{user_id}")
async def remove_member(
    user_id: str,
    request: Request,
    ctx: RequestContext = Depends(request_context),
    repos: Repositories = Depends(get_repositories),
):
    body = await read_body(request)
    community = body.get("community")
    failure = (
        validate(RequestPayload(path={"id": user_id}), REMOVE_MEMBER_RULES)
        or require_signed_in(ctx)
        or await require_community_owner_or_moderator(
            ctx,
            CommunityId(community) if isinstance(community, str) else None,
            repos,
        )
    )
    if failure:
        return respond(failure)
    return respond(
        await MemberHandlers(repos).remove_member(ctx.caller_id, UserId(user_id)),
    )
