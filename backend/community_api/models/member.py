"""Member ORM: join row meaning "this user holds this role in this community".

Invariants:
    - community_id, user_id and role_id are all non-nullable foreign keys
    - The (user, community, role) triple is NOT unique at the storage boundary;
      the add-member operation checks for it before inserting

Design Decisions:
    - No uniqueness constraint on the triple: duplicates from concurrent
      identical requests are operator-correctable
"""

from datetime import datetime

from sqlalchemy import String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from community_api.db.base import Base, utc_now


class Member(Base):
    """Membership of one user in one community with one role."""
    __tablename__ = "members"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    community_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("communities.id"), nullable=False, index=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("users.id"), nullable=False, index=True,
    )
    role_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("roles.id"), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )
