"""Request Context: who is calling, resolved once per request.

Invariants:
    - Built exactly once, by the session resolver, and never mutated afterwards
    - caller_id is None for anonymous callers (no cookie, or a token that
      failed verification)
    - Passed by parameter to every later pipeline stage
"""

from dataclasses import dataclass

from community_api.core.domain_types import UserId


@dataclass(frozen=True)
class RequestContext:
    caller_id: UserId | None = None
    has_session: bool = False

    @property
    def is_authenticated(self) -> bool:
        return self.caller_id is not None

    @classmethod
    def anonymous(cls, has_session: bool = False) -> "RequestContext":
        return cls(caller_id=None, has_session=has_session)
