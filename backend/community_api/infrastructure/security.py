"""Identity Codec: password hashing and session token signing.

Invariants:
    - Passwords are hashed with bcrypt at a fixed work factor before they are
      stored; plaintext is never compared directly
    - bcrypt runs in the thread pool, so callers await it like any other IO
    - Session tokens are HS256 JWTs carrying only {"id": <user id>}, no expiry
    - decode_session never raises: a bad token becomes a GeneralError

Design Decisions:
    - PyJWT for signing, bcrypt for hashing: standard primitives, no home-grown
      crypto
    - verify_password maps primitive errors (malformed hash) to a field error
      on `password`; hash_password lets them propagate as unrecoverable
"""

import logging

import bcrypt
import jwt
from starlette.concurrency import run_in_threadpool

from community_api.config import get_settings
from community_api.core.domain_types import UserId
from community_api.core.errors import (
    MSG_USER_NOT_FOUND, ErrorCode, FieldError, GeneralError,
)

logger = logging.getLogger(__name__)


# ─── Passwords ───────────────────────────────────────────────────

_BCRYPT_MAX_BYTES = 72


def _secret_bytes(password: str) -> bytes:
    """bcrypt only reads the first 72 bytes; longer input is cut, not rejected."""
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def _hash_sync(password: str, rounds: int) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_secret_bytes(password), salt).decode("utf-8")


def _check_sync(password: str, hashed: str) -> bool:
    return bcrypt.checkpw(_secret_bytes(password), hashed.encode("utf-8"))


async def hash_password(password: str) -> str:
    return await run_in_threadpool(
        _hash_sync, password, get_settings().bcrypt_rounds,
    )


async def verify_password(password: str, hashed: str) -> bool | FieldError:
    """True/False for a well-formed hash, FieldError if bcrypt rejects it."""
    try:
        return await run_in_threadpool(_check_sync, password, hashed)
    except ValueError as e:
        logger.warning(f"Password check failed on stored hash: {e}")
        return FieldError.single(
            "password", "Password does not match.", ErrorCode.INVALID_INPUT,
        )


# ─── Session tokens ──────────────────────────────────────────────

def encode_session(user_id: UserId) -> str:
    settings = get_settings()
    return jwt.encode(
        {"id": user_id}, settings.jwt_secret, algorithm=settings.jwt_algorithm,
    )


def decode_session(token: str) -> UserId | GeneralError:
    settings = get_settings()
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm],
        )
    except jwt.InvalidTokenError as e:
        logger.info(f"Session token rejected: {e}")
        return GeneralError.single(MSG_USER_NOT_FOUND, ErrorCode.RESOURCE_NOT_FOUND)
    user_id = payload.get("id")
    if not isinstance(user_id, str) or not user_id:
        return GeneralError.single(MSG_USER_NOT_FOUND, ErrorCode.RESOURCE_NOT_FOUND)
    return UserId(user_id)
