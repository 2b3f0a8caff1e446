"""Auth Routes: sign up, sign in, sign out, current user.

Invariants:
    - Sign up / sign in store the session token in the signed cookie under
      "jwt" and also return it as meta.access_token
    - /me and /signout answer NOT_SIGNEDIN for anonymous callers
"""

from fastapi import APIRouter, Depends, Request

from community_api.api.error_handlers import respond
from community_api.api.pipeline import read_body, request_context
from community_api.core.errors import ErrorCode
from community_api.core.outcome import Ok
from community_api.core.repository_protocols import Repositories
from community_api.core.request_context import RequestContext
from community_api.core.validation import RequestPayload, validate
from community_api.infrastructure.repositories import get_repositories
from community_api.services.gates import require_active_session, require_signed_in
from community_api.services.handle_auth import AuthHandlers
from community_api.services.rule_sets import SIGNIN_RULES, SIGNUP_RULES
from community_api.services.session_resolver import SESSION_TOKEN_KEY

router = APIRouter(prefix="/auth", tags=["auth"])


def _store_token(request: Request, outcome) -> None:
    if isinstance(outcome, Ok):
        request.session[SESSION_TOKEN_KEY] = outcome.content["meta"]["access_token"]


@router.post("/signup")
async def signup(
    request: Request, repos: Repositories = Depends(get_repositories),
):
    body = await read_body(request)
    failure = validate(RequestPayload(body=body), SIGNUP_RULES)
    if failure:
        return respond(failure)

    outcome = await AuthHandlers(repos).signup(body)
    _store_token(request, outcome)
    return respond(outcome)


@router.post("/signin")
async def signin(
    request: Request, repos: Repositories = Depends(get_repositories),
):
    body = await read_body(request)
    failure = validate(RequestPayload(body=body), SIGNIN_RULES)
    if failure:
        return respond(failure)

    outcome = await AuthHandlers(repos).signin(body)
    _store_token(request, outcome)
    return respond(outcome)


@router.post("/signout")
async def signout(
    request: Request, ctx: RequestContext = Depends(request_context),
):
    failure = require_active_session(ctx)
    if failure:
        return respond(failure)

    request.session.clear()
    return respond(Ok({"message": "Logged out!"}))


@router.get("/me")
async def me(
    ctx: RequestContext = Depends(request_context),
    repos: Repositories = Depends(get_repositories),
):
    failure = require_signed_in(ctx, ErrorCode.NOT_SIGNEDIN)
    if failure:
        return respond(failure)
    return respond(await AuthHandlers(repos).me(ctx.caller_id))
