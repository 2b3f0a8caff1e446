"""Session Resolver: cookie contents → RequestContext."""

import jwt

from community_api.infrastructure.security import encode_session
from community_api.services.session_resolver import (
    SESSION_TOKEN_KEY, resolve_request_context,
)


def test_empty_session_is_anonymous_without_cookie():
    ctx = resolve_request_context({})
    assert not ctx.is_authenticated
    assert not ctx.has_session


def test_valid_token_resolves_caller():
    ctx = resolve_request_context({SESSION_TOKEN_KEY: encode_session("42")})
    assert ctx.caller_id == "42"
    assert ctx.has_session


def test_bad_token_degrades_to_anonymous_with_session():
    forged = jwt.encode({"id": "42"}, "some-other-secret-of-enough-length", algorithm="HS256")
    ctx = resolve_request_context({SESSION_TOKEN_KEY: forged})
    assert ctx.caller_id is None
    assert ctx.has_session


def test_session_without_token_keeps_cookie_flag():
    ctx = resolve_request_context({"other": "value"})
    assert not ctx.is_authenticated
    assert ctx.has_session
