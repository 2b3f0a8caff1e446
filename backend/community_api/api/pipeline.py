"""Request Pipeline helpers shared by every route module.

Invariants:
    - read_body never raises: a missing, malformed or non-object JSON body is
      an empty payload, and validation then reports every missing field
    - The RequestContext is built once per request from the session cookie
"""

from fastapi import Request

from community_api.core.request_context import RequestContext
from community_api.services.session_resolver import resolve_request_context


async def read_body(request: Request) -> dict:
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def request_context(request: Request) -> RequestContext:
    """FastAPI dependency: the caller resolved from the session cookie."""
    return resolve_request_context(request.session)
