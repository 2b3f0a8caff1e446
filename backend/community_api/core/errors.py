"""Error Model: the two failure shapes every pipeline stage can produce.

Invariants:
    - Exactly two failure kinds: FieldError (tied to a request field) and
      GeneralError (authorization, routing, not-signed-in)
    - Failures are immutable values, returned (never raised) by core and services
    - serialize() is the only place a failure is turned into the wire shape
    - code is always drawn from ErrorCode

Design Decisions:
    - Closed union over a subclass hierarchy: the vocabulary is fixed and small,
      one exhaustive match covers it (ADR: no open-ended error subclassing)
    - A failure carries a tuple of issues so a whole validation batch travels
      as one value
    - DatastoreError is the one exception type: storage failures are not
      business outcomes and propagate to the generic dispatcher branch
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(str, Enum):
    """Machine-readable codes shared by both failure kinds."""
    INVALID_INPUT = "INVALID_INPUT"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    RESOURCE_EXISTS = "RESOURCE_EXISTS"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    NOT_SIGNEDIN = "NOT_SIGNEDIN"
    NOT_ALLOWED_ACCESS = "NOT_ALLOWED_ACCESS"


# ─── Messages ────────────────────────────────────────────────────

MSG_NOT_SIGNEDIN = "You need to sign in to proceed."
MSG_NOT_ALLOWED = "You are not authorized to perform this action."
MSG_USER_NOT_FOUND = "User not found."
MSG_ROUTE_NOT_FOUND = "Route not found"


# ─── Issues ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class FieldIssue:
    param: str
    message: str
    code: ErrorCode


@dataclass(frozen=True)
class GeneralIssue:
    message: str
    code: ErrorCode


# ─── Failure kinds ───────────────────────────────────────────────

@dataclass(frozen=True)
class FieldError:
    """One or more issues, each scoped to a request field."""
    issues: tuple[FieldIssue, ...]

    @classmethod
    def single(cls, param: str, message: str, code: ErrorCode) -> "FieldError":
        return cls((FieldIssue(param, message, code),))


@dataclass(frozen=True)
class GeneralError:
    """One or more issues not tied to any field."""
    issues: tuple[GeneralIssue, ...]

    @classmethod
    def single(cls, message: str, code: ErrorCode) -> "GeneralError":
        return cls((GeneralIssue(message, code),))


Failure = FieldError | GeneralError


def serialize(failure: Failure) -> list[dict]:
    """Render a failure as the `errors` list of the response envelope."""
    match failure:
        case FieldError(issues=issues):
            return [
                {"param": i.param, "message": i.message, "code": i.code.value}
                for i in issues
            ]
        case GeneralError(issues=issues):
            return [
                {"message": i.message, "code": i.code.value}
                for i in issues
            ]


def is_failure(value: object) -> bool:
    return isinstance(value, (FieldError, GeneralError))


# ─── Common failures ─────────────────────────────────────────────

def not_signed_in() -> GeneralError:
    return GeneralError.single(MSG_NOT_SIGNEDIN, ErrorCode.NOT_SIGNEDIN)


def not_allowed() -> GeneralError:
    return GeneralError.single(MSG_NOT_ALLOWED, ErrorCode.NOT_ALLOWED_ACCESS)


def field_not_found(param: str, message: str) -> FieldError:
    return FieldError.single(param, message, ErrorCode.RESOURCE_NOT_FOUND)


# ─── Infrastructure ──────────────────────────────────────────────

class DatastoreError(Exception):
    """Datastore operation failed. Unrecoverable for the current request."""

    def __init__(self, message: str, operation: str):
        super().__init__(f"Database {operation} failed: {message}")
        self.operation = operation
