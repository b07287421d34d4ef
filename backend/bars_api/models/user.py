"""
Bars API Backend - User SQLAlchemy Model
=========================================

What:  ORM model representing the `users` table.
Why:   Bars are owned by users; the bearer token that authenticates a
       request is stored on the user row.
Who:   Used by UserService (accounts), the auth dependency (token lookup)
       and BarService (owner embedding).

Table Design Rationale:
    - email: unique, the sign-in identifier
    - hashed_password: bcrypt hash, never serialized
    - token: opaque bearer token; NULL after sign-out. Unique so a token
      resolves to at most one user.
"""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, List

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bars_api.database import Base

if TYPE_CHECKING:
    from bars_api.models.bar import Bar


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """A registered account that can own bars."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )

    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    # Rotated on every sign-in, cleared on sign-out
    token: Mapped[str | None] = mapped_column(
        String(128),
        nullable=True,
        unique=True,
        index=True,
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

    bars: Mapped[List["Bar"]] = relationship(back_populates="owner")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
