"""
Bars API Backend - Bar Request/Response Schemas
================================================

What:  Pydantic models defining the /bars API contract.
Why:   Request bodies are validated before any handler runs, and responses
       are built from these models so no ORM object reaches the wire.
How:   Bodies are wrapped in a `bar` envelope ({"bar": {...}}), lists in a
       `bars` envelope ({"bars": [...]}).
"""

import uuid
from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator


def _stringify(v: Any) -> Any:
    """Numbers are accepted for free-form fields and stored as text."""
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return str(v)
    return v


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class BarCreate(BaseModel):
    """
    Fields accepted by POST /bars.

    Unknown keys (including `owner`) are ignored: the owner is always the
    authenticated requester.
    """
    name: str = Field(max_length=255, description="Display name of the bar")
    city: Optional[str] = Field(default=None, max_length=255)
    address: Optional[str] = Field(default=None, max_length=255)
    price: Optional[str] = Field(default=None, max_length=64)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must not be blank")
        return v

    @field_validator("price", mode="before")
    @classmethod
    def coerce_price(cls, v: Any) -> Any:
        return _stringify(v)


class BarUpdate(BaseModel):
    """
    Fields accepted by PATCH /bars/{id}.

    Every field is optional; blank values mean "leave unchanged". Extra keys
    are kept so the service can strip `owner` explicitly.
    """
    name: Optional[str] = Field(default=None, max_length=255)
    city: Optional[str] = Field(default=None, max_length=255)
    address: Optional[str] = Field(default=None, max_length=255)
    price: Optional[str] = Field(default=None, max_length=64)

    model_config = {"extra": "allow"}

    @field_validator("price", mode="before")
    @classmethod
    def coerce_price(cls, v: Any) -> Any:
        return _stringify(v)


class BarCreateRequest(BaseModel):
    bar: BarCreate


class BarUpdateRequest(BaseModel):
    bar: BarUpdate


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class OwnerResponse(BaseModel):
    """Embedded owner representation (never includes password or token)."""
    id: uuid.UUID
    email: str

    model_config = {"from_attributes": True}


class BarResponse(BaseModel):
    """
    Plain representation of a bar; `owner` is the owner's id.
    Returned by list, list-mine and create.
    """
    id: uuid.UUID = Field(description="Unique bar identifier (UUID)")
    name: str
    city: Optional[str] = None
    address: Optional[str] = None
    price: Optional[str] = None
    owner: uuid.UUID = Field(description="Id of the user who created the bar")
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def as_utc(cls, v: datetime) -> datetime:
        # SQLite hands back naive values for timezone-aware columns
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


class BarDetailResponse(BarResponse):
    """Returned by GET /bars/{id}: the owner is embedded."""
    owner: OwnerResponse  # type: ignore[assignment]


class BarEnvelope(BaseModel):
    bar: BarResponse


class BarDetailEnvelope(BaseModel):
    bar: BarDetailResponse


class BarListEnvelope(BaseModel):
    bars: List[BarResponse]
