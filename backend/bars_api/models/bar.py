"""
Bars API Backend - Bar SQLAlchemy Model
========================================

What:  ORM model representing the `bars` table.
Why:   The single managed resource: a venue record with descriptive fields.
How:   Inherits from DeclarativeBase; Alembic reads this for migrations.
Who:   Used by BarService for CRUD operations.

Lifecycle:
    1. Created by POST /bars; owner_id bound to the requester
    2. Mutated in place by PATCH /bars/{id} (non-blank fields only)
    3. Removed by DELETE /bars/{id}; no soft delete, no versioning

Invariant:
    owner_id is written once, at insert. The update path strips `owner`
    from the payload, and BAR_FIELDS does not include owner_id.
"""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bars_api.database import Base

if TYPE_CHECKING:
    from bars_api.models.user import User


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Client-writable descriptive columns
BAR_FIELDS = ("name", "city", "address", "price")


class Bar(Base):
    """
    Represents a bar owned by a user.

    Query Patterns:
        - List all bars: SELECT ... ORDER BY created_at
        - List a user's bars: SELECT ... WHERE owner_id = :uid
          → Uses idx_bars_owner_id
        - Get single bar: SELECT ... WHERE id = :uuid (primary key)
    """

    __tablename__ = "bars"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # Free-form ("$$", "cheap", "12"), stored as given
    price: Mapped[str | None] = mapped_column(String(64), nullable=True)

    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    owner: Mapped["User"] = relationship(back_populates="bars")

    __table_args__ = (
        Index("idx_bars_owner_id", "owner_id"),
    )

    def __repr__(self) -> str:
        return f"<Bar(id={self.id}, name='{self.name}', owner_id={self.owner_id})>"
