"""Request Validator: declarative per-field rules evaluated against a payload.

Invariants:
    - All functions are PURE: no IO, no async, no side effects
    - Every check of every rule runs (no bail-out), so one response lists
      every violation
    - A failed check without its own message yields SENTINEL_MESSAGE, which is
      dropped from the result
    - validate() returns a single FieldError batch or None

Design Decisions:
    - Rules as frozen data (FieldRule/Check) over decorated models: each
      endpoint's rule set reads as a table in services/rule_sets.py
    - E-mail shape delegated to email-validator (same library pydantic's
      EmailStr relies on), deliverability checks disabled
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from email_validator import EmailNotValidError, validate_email

from community_api.core.errors import ErrorCode, FieldError, FieldIssue

SENTINEL_MESSAGE = "Invalid value"


class _Missing:
    def __repr__(self) -> str:
        return "<missing>"


MISSING: Any = _Missing()


class Location(str, Enum):
    """Where in the request a field lives."""
    BODY = "body"
    PATH = "path"


@dataclass(frozen=True)
class Check:
    predicate: Callable[[Any], bool]
    message: str | None = None


@dataclass(frozen=True)
class FieldRule:
    field: str
    checks: tuple[Check, ...]
    location: Location = Location.BODY


@dataclass(frozen=True)
class RequestPayload:
    """The places a rule can read from. Missing sources are empty."""
    body: Mapping[str, Any] = field(default_factory=dict)
    path: Mapping[str, Any] = field(default_factory=dict)

    def lookup(self, location: Location, name: str) -> Any:
        source = {
            Location.BODY: self.body,
            Location.PATH: self.path,
        }[location]
        return source.get(name, MISSING)


# ─── Checks ──────────────────────────────────────────────────────

def _as_text(value: Any) -> str:
    if value is MISSING or value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def exists(message: str | None = None, *, falsy: bool = False) -> Check:
    """Field must be present; with falsy=True, empty/zero/null also count as missing."""
    if falsy:
        return Check(lambda v: v is not MISSING and bool(v), message)
    return Check(lambda v: v is not MISSING, message)


def is_string(message: str | None = None) -> Check:
    return Check(lambda v: isinstance(v, str), message)


def min_length(minimum: int, message: str | None = None) -> Check:
    return Check(lambda v: len(_as_text(v)) >= minimum, message)


def _looks_like_email(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_email(message: str | None = None) -> Check:
    return Check(_looks_like_email, message)


# ─── Evaluation ──────────────────────────────────────────────────

def _run_rule(rule: FieldRule, payload: RequestPayload) -> list[FieldIssue]:
    value = payload.lookup(rule.location, rule.field)
    return [
        FieldIssue(
            rule.field, check.message or SENTINEL_MESSAGE, ErrorCode.INVALID_INPUT,
        )
        for check in rule.checks
        if not check.predicate(value)
    ]


def validate(
    payload: RequestPayload, rules: tuple[FieldRule, ...],
) -> FieldError | None:
    """Run every rule and merge the results into one FieldError batch."""
    issues = [
        issue
        for rule in rules
        for issue in _run_rule(rule, payload)
        if issue.message.lower() != SENTINEL_MESSAGE.lower()
    ]
    if issues:
        return FieldError(tuple(issues))
    return None
