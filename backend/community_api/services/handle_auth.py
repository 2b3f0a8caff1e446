"""Auth Handlers: sign up, sign in and current-user lookup.

Invariants:
    - Passwords are hashed before the user row is written; plaintext is never
      stored or compared directly
    - Responses carry UserData (never the hash) and, on sign up / sign in, the
      freshly signed session token under meta.access_token
    - Storing the token in the cookie is the route's job; handlers stay free of
      request objects

Design Decisions:
    - Email check-then-create is not atomic; the UNIQUE constraint on
      users.email backs it, surfacing a race as a DatastoreError
"""

import logging

from community_api.core.domain_types import UserId
from community_api.core.errors import (
    MSG_USER_NOT_FOUND, ErrorCode, FieldError, field_not_found, is_failure,
)
from community_api.core.outcome import Ok, Outcome
from community_api.core.records import UserRecord
from community_api.core.repository_protocols import Repositories
from community_api.infrastructure.security import (
    encode_session, hash_password, verify_password,
)
from community_api.infrastructure.snowflake import generate_id
from community_api.schemas.resources import UserData

logger = logging.getLogger(__name__)


def _signed_in(user: UserRecord) -> Ok:
    return Ok({
        "data": UserData.from_record(user).dump(),
        "meta": {"access_token": encode_session(user.id)},
    })


class AuthHandlers:
    """Account creation and session issuance."""

    def __init__(self, repos: Repositories):
        self.repos = repos

    async def signup(self, body: dict) -> Outcome:
        user_id = UserId(generate_id())
        email = body["email"]

        if await self.repos.users.find_by_email(email):
            return FieldError.single(
                "email",
                "User with this email address already exists.",
                ErrorCode.RESOURCE_EXISTS,
            )

        user = await self.repos.users.create(
            user_id, body["name"], email, await hash_password(body["password"]),
        )
        logger.info("User signed up", extra={"user_id": user.id})
        return _signed_in(user)

    async def signin(self, body: dict) -> Outcome:
        user = await self.repos.users.find_by_email(body["email"])
        if not user:
            return field_not_found("user", MSG_USER_NOT_FOUND)

        matched = await verify_password(body["password"], user.password)
        if is_failure(matched):
            return matched
        if not matched:
            return FieldError.single(
                "password",
                "The credentials you provided are invalid.",
                ErrorCode.INVALID_CREDENTIALS,
            )
        return _signed_in(user)

    async def me(self, user_id: UserId) -> Outcome:
        user = await self.repos.users.find_by_id(user_id)
        if not user:
            return field_not_found("user", MSG_USER_NOT_FOUND)
        return Ok({"data": UserData.from_record(user).dump()})
