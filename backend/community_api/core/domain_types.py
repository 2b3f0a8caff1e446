"""Domain Types: identifier aliases, well-known role names and slug derivation.

Invariants:
    - Identifiers are opaque strings (snowflake ids rendered in decimal)
    - Role names used as authorization predicates are constants, never literals
      scattered across services
    - slugify() is deterministic: lowercase, every run of whitespace /
      non-word / dash characters collapsed into one "-"

Design Decisions:
    - NewType over wrappers: zero runtime cost, type-checker support
    - str Enum for role names: compares equal to the stored column value
"""

import re
from enum import Enum
from typing import NewType

# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
RoleId = NewType("RoleId", str)
CommunityId = NewType("CommunityId", str)
MemberId = NewType("MemberId", str)


# ─── Enums ───────────────────────────────────────────────────────

class RoleName(str, Enum):
    """Role rows looked up by name. At most one row per name is assumed."""
    ADMIN = "Community Admin"
    MODERATOR = "Community Moderator"
    MEMBER = "Community Member"


# ─── Slugs ───────────────────────────────────────────────────────

_SLUG_SEPARATORS = re.compile(r"[\s\W-]+")


def slugify(name: str) -> str:
    return _SLUG_SEPARATORS.sub("-", name.lower())
