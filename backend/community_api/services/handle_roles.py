"""Role Handlers: unguarded role creation and paginated listing."""

from community_api.core.domain_types import RoleId
from community_api.core.outcome import Ok, Outcome
from community_api.core.pagination import PageRequest, page_meta
from community_api.core.repository_protocols import Repositories
from community_api.infrastructure.snowflake import generate_id
from community_api.schemas.resources import RoleData


class RoleHandlers:

    def __init__(self, repos: Repositories):
        self.repos = repos

    async def create_role(self, body: dict) -> Outcome:
        role = await self.repos.roles.create(RoleId(generate_id()), body["name"])
        return Ok({"data": RoleData.from_record(role).dump()})

    async def list_roles(self, page: PageRequest) -> Outcome:
        roles = await self.repos.roles.list_page(page.offset, page.limit)
        total = await self.repos.roles.count()
        return Ok({
            "meta": page_meta(total, page),
            "data": [RoleData.from_record(r).dump() for r in roles],
        })
