"""Service test fixtures: in-memory repositories behind the repository protocols.

Invariants:
    - Fakes hold records in plain dicts; no database, no event loop tricks
    - Each test gets fresh fakes through the `repos` fixture
"""

from datetime import datetime, timezone

import pytest

from community_api.core.records import (
    CommunityRecord, MemberRecord, RoleRecord, UserRecord,
)
from community_api.core.repository_protocols import Repositories

_NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


class FakeUsers:

    def __init__(self):
        self.rows: dict[str, UserRecord] = {}

    async def find_by_id(self, user_id):
        return self.rows.get(user_id)

    async def find_by_email(self, email):
        return next((u for u in self.rows.values() if u.email == email), None)

    async def create(self, user_id, name, email, password_hash):
        self.rows[user_id] = UserRecord(
            user_id, name, email, password_hash, _NOW, _NOW,
        )
        return self.rows[user_id]


class FakeRoles:

    def __init__(self):
        self.rows: dict[str, RoleRecord] = {}

    async def find_by_id(self, role_id):
        return self.rows.get(role_id)

    async def find_by_name(self, name):
        return next((r for r in self.rows.values() if r.name == name), None)

    async def find_by_names(self, names):
        return [r for r in self.rows.values() if r.name in names]

    async def create(self, role_id, name):
        self.rows[role_id] = RoleRecord(role_id, name, _NOW, _NOW)
        return self.rows[role_id]


class FakeCommunities:

    def __init__(self):
        self.rows: dict[str, CommunityRecord] = {}

    async def find_by_id(self, community_id):
        return self.rows.get(community_id)

    async def create(self, community_id, name, slug, owner_id):
        self.rows[community_id] = CommunityRecord(
            community_id, name, slug, owner_id, _NOW, _NOW,
        )
        return self.rows[community_id]


class FakeMembers:

    def __init__(self):
        self.rows: dict[str, MemberRecord] = {}

    async def find_one(self, user_id, community_id, role_id):
        return next(
            (
                m for m in self.rows.values()
                if (m.user_id, m.community_id, m.role_id)
                == (user_id, community_id, role_id)
            ),
            None,
        )

    async def find_for_user(self, user_id, role_ids, offset=None, limit=None):
        return [
            m for m in self.rows.values()
            if m.user_id == user_id and m.role_id in role_ids
        ]

    async def find_in_communities(self, user_id, community_ids):
        return [
            m for m in self.rows.values()
            if m.user_id == user_id and m.community_id in community_ids
        ]

    async def create(self, member_id, community_id, user_id, role_id):
        self.rows[member_id] = MemberRecord(
            member_id, community_id, user_id, role_id, _NOW, _NOW,
        )
        return self.rows[member_id]

    async def delete_many(self, ids):
        for member_id in ids:
            self.rows.pop(member_id, None)


@pytest.fixture
def repos() -> Repositories:
    return Repositories(
        users=FakeUsers(),
        roles=FakeRoles(),
        communities=FakeCommunities(),
        members=FakeMembers(),
    )
