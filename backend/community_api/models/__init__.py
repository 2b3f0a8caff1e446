"""ORM Models: SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - ORM classes never leave infrastructure/: repositories convert them to
      records before returning

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete for create_all
      and Alembic autogenerate
"""

from community_api.models.user import User  # noqa: F401
from community_api.models.role import Role  # noqa: F401
from community_api.models.community import Community  # noqa: F401
from community_api.models.member import Member  # noqa: F401
