"""Community Routes: create, list, my owned, my joined, members of a community.

Invariants:
    - Session-only routes run require_signed_in before validation or IO
    - The members listing is public; its path id is validated before the query
"""

from fastapi import APIRouter, Depends, Query, Request

from community_api.api.error_handlers import respond
from community_api.api.pipeline import read_body, request_context
from community_api.core.domain_types import CommunityId
from community_api.core.pagination import parse_page
from community_api.core.repository_protocols import Repositories
from community_api.core.request_context import RequestContext
from community_api.core.validation import RequestPayload, validate
from community_api.infrastructure.repositories import get_repositories
from community_api.services.gates import require_signed_in
from community_api.services.handle_communities import CommunityHandlers
from community_api.services.rule_sets import (
    CREATE_COMMUNITY_RULES, LIST_MEMBERS_RULES,
)

router = APIRouter(prefix="/community", tags=["communities"])


@router.post("")
async def create_community(
    request: Request,
    ctx: RequestContext = Depends(request_context),
    repos: Repositories = Depends(get_repositories),
):
    body = await read_body(request)
    failure = (
        require_signed_in(ctx)
        or validate(RequestPayload(body=body), CREATE_COMMUNITY_RULES)
    )
    if failure:
        return respond(failure)
    return respond(
        await CommunityHandlers(repos).create_community(ctx.caller_id, body),
    )


@router.get("")
async def list_communities(
    page: str | None = Query(None),
    repos: Repositories = Depends(get_repositories),
):
    return respond(
        await CommunityHandlers(repos).list_communities(parse_page(page)),
    )


@router.get("/me/owner")
async def list_my_owned_communities(
    page: str | None = Query(None),
    ctx: RequestContext = Depends(request_context),
    repos: Repositories = Depends(get_repositories),
):
    failure = require_signed_in(ctx)
    if failure:
        return respond(failure)
    return respond(
        await CommunityHandlers(repos).list_owned(ctx.caller_id, parse_page(page)),
    )


@router.get("/me/member")
async def list_my_joined_communities(
    page: str | None = Query(None),
    ctx: RequestContext = Depends(request_context),
    repos: Repositories = Depends(get_repositories),
):
    failure = require_signed_in(ctx)
    if failure:
        return respond(failure)
    return respond(
        await CommunityHandlers(repos).list_joined(ctx.caller_id, parse_page(page)),
    )


@router.get("/{community_id}/members")
async def list_community_members(
    community_id: str,
    page: str | None = Query(None),
    repos: Repositories = Depends(get_repositories),
):
    failure = validate(
        RequestPayload(path={"id": community_id}), LIST_MEMBERS_RULES,
    )
    if failure:
        return respond(failure)
    return respond(
        await CommunityHandlers(repos).list_members(
            CommunityId(community_id), parse_page(page),
        ),
    )
