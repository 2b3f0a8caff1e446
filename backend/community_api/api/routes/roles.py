"""Role Routes: create and list roles. Neither requires a session."""

from fastapi import APIRouter, Depends, Query, Request

from community_api.api.error_handlers import respond
from community_api.api.pipeline import read_body
from community_api.core.pagination import parse_page
from community_api.core.repository_protocols import Repositories
from community_api.core.validation import RequestPayload, validate
from community_api.infrastructure.repositories import get_repositories
from community_api.services.handle_roles import RoleHandlers
from community_api.services.rule_sets import CREATE_ROLE_RULES

router = APIRouter(prefix="/role", tags=["roles"])


@router.post("")
async def create_role(
    request: Request, repos: Repositories = Depends(get_repositories),
):
    body = await read_body(request)
    failure = validate(RequestPayload(body=body), CREATE_ROLE_RULES)
    if failure:
        return respond(failure)
    return respond(await RoleHandlers(repos).create_role(body))


@router.get("")
async def list_roles(
    page: str | None = Query(None),
    repos: Repositories = Depends(get_repositories),
):
    return respond(await RoleHandlers(repos).list_roles(parse_page(page)))
