"""Operation Outcome: success variant paired with the two failure kinds.

Invariants:
    - Every resource operation returns Ok(content) or a Failure, never raises
      for an expected business result (duplicate email, wrong password, ...)
    - Ok.content is the JSON-ready `content` block of the success envelope;
      None means the envelope carries only `status`

Design Decisions:
    - Result value over exceptions for business outcomes: the route reads the
      outcome once and hands it to respond() (ADR: explicit propagation)
"""

from dataclasses import dataclass
from typing import Any

from community_api.core.errors import FieldError, GeneralError


@dataclass(frozen=True)
class Ok:
    content: dict[str, Any] | None = None


Outcome = Ok | FieldError | GeneralError
