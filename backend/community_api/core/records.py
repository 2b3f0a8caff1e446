"""Records: plain, immutable data shapes the core and services work with.

Invariants:
    - Records never reference ORM classes or sessions
    - UserRecord.password is the stored hash; response builders never emit it
"""

from dataclasses import dataclass
from datetime import datetime

from community_api.core.domain_types import CommunityId, MemberId, RoleId, UserId


@dataclass(frozen=True)
class UserRecord:
    id: UserId
    name: str
    email: str
    password: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class RoleRecord:
    id: RoleId
    name: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class CommunityRecord:
    id: CommunityId
    name: str
    slug: str
    owner_id: UserId
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class MemberRecord:
    id: MemberId
    community_id: CommunityId
    user_id: UserId
    role_id: RoleId
    created_at: datetime
    updated_at: datetime
