"""Identity Codec: password hashing and session token signing."""

import jwt

from community_api.config import get_settings
from community_api.core.errors import ErrorCode, FieldError, GeneralError
from community_api.infrastructure.security import (
    decode_session, encode_session, hash_password, verify_password,
)


async def test_hash_is_not_plaintext_and_verifies():
    hashed = await hash_password("hunter2")
    assert hashed != "hunter2"
    assert await verify_password("hunter2", hashed) is True
    assert await verify_password("wrong", hashed) is False


async def test_malformed_hash_is_field_error_on_password():
    result = await verify_password("hunter2", "not-a-bcrypt-hash")
    assert isinstance(result, FieldError)
    assert result.issues[0].param == "password"
    assert result.issues[0].message == "Password does not match."


def test_session_token_round_trip():
    assert decode_session(encode_session("123")) == "123"


def test_session_token_carries_only_id():
    settings = get_settings()
    payload = jwt.decode(
        encode_session("123"), settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
    )
    assert payload == {"id": "123"}


def test_tampered_token_is_general_error():
    token = encode_session("123")
    result = decode_session(token[:-2] + ("AA" if not token.endswith("AA") else "BB"))
    assert isinstance(result, GeneralError)
    assert result.issues[0].code == ErrorCode.RESOURCE_NOT_FOUND
    assert result.issues[0].message == "User not found."


def test_token_without_id_is_general_error():
    settings = get_settings()
    token = jwt.encode({"sub": "x"}, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    assert isinstance(decode_session(token), GeneralError)


async def test_password_longer_than_72_bytes_uses_first_72():
    hashed = await hash_password("p" * 80)
    assert await verify_password("p" * 80, hashed) is True
    assert await verify_password("p" * 72, hashed) is True
    assert await verify_password("q" * 80, hashed) is False
