"""Session Resolver: turns the signed session cookie into a RequestContext.

Invariants:
    - No token in the session is not an error: the caller is anonymous
    - A token that fails verification degrades to anonymous; it never rejects
      the request (authentication is enforced only by an explicit gate)
    - The resulting context is immutable
"""

import logging
from collections.abc import Mapping
from typing import Any

from community_api.core.errors import is_failure
from community_api.core.request_context import RequestContext
from community_api.infrastructure.security import decode_session

logger = logging.getLogger(__name__)

SESSION_TOKEN_KEY = "jwt"


def resolve_request_context(session: Mapping[str, Any]) -> RequestContext:
    token = session.get(SESSION_TOKEN_KEY)
    if not token:
        return RequestContext.anonymous(has_session=bool(session))
    decoded = decode_session(token)
    if is_failure(decoded):
        logger.info("Ignoring session with an unverifiable token")
        return RequestContext.anonymous(has_session=True)
    return RequestContext(caller_id=decoded, has_session=True)
