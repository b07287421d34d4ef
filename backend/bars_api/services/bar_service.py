"""
Bars API Backend - Bar Service (Resource Handler)
==================================================

What:  Business logic for the bars resource: list, list-mine, get, create,
       update, delete.
Why:   Keeps ownership rules and blank-field semantics out of the route
       handlers, so they can be tested without HTTP.
How:   Each operation is a linear sequence of awaited session calls.
       Mutating operations run fetch → require_ownership → write, in that
       order, inside the request's session.
Who:   Called by routes/bars.py.

Error Handling Strategy:
    NotFoundError and OwnershipError propagate as-is. SQLAlchemy errors are
    wrapped in DatabaseError (500) with the original type in the context.
    Nothing is retried; the session dependency rolls back on any raise.
"""

import logging
from typing import Any, Dict, List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from bars_api.exceptions import DatabaseError, NotFoundError
from bars_api.helpers import remove_blank_fields, require_ownership
from bars_api.models.bar import BAR_FIELDS, Bar
from bars_api.models.user import User
from bars_api.schemas.bar import (
    BarCreate,
    BarDetailResponse,
    BarResponse,
    BarUpdate,
    OwnerResponse,
)

logger = logging.getLogger(__name__)


def _to_response(bar: Bar) -> BarResponse:
    return BarResponse(
        id=bar.id,
        name=bar.name,
        city=bar.city,
        address=bar.address,
        price=bar.price,
        owner=bar.owner_id,
        created_at=bar.created_at,
        updated_at=bar.updated_at,
    )


def _to_detail(bar: Bar) -> BarDetailResponse:
    return BarDetailResponse(
        id=bar.id,
        name=bar.name,
        city=bar.city,
        address=bar.address,
        price=bar.price,
        owner=OwnerResponse.model_validate(bar.owner),
        created_at=bar.created_at,
        updated_at=bar.updated_at,
    )


class BarService:
    """
    Stateless service; receives the request's session on every call.

    Responsibilities:
        - list_bars():      every bar
        - list_user_bars(): bars owned by the requester
        - get_bar():        one bar with its owner embedded
        - create_bar():     insert, owner forced to the requester
        - update_bar():     ownership-checked merge of non-blank fields
        - delete_bar():     ownership-checked delete
    """

    async def list_bars(self, db: AsyncSession) -> List[BarResponse]:
        try:
            result = await db.execute(select(Bar).order_by(Bar.created_at))
            return [_to_response(bar) for bar in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing bars: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve bars. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def list_user_bars(self, db: AsyncSession, requester: User) -> List[BarResponse]:
        try:
            result = await db.execute(
                select(Bar)
                .where(Bar.owner_id == requester.id)
                .order_by(Bar.created_at)
            )
            return [_to_response(bar) for bar in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing bars for %s: %s", requester.id, str(e))
            raise DatabaseError(
                message="Could not retrieve bars. Please try again.",
                context={"owner_id": str(requester.id), "error_type": type(e).__name__},
            )

    async def get_bar(self, db: AsyncSession, bar_id: UUID) -> BarDetailResponse:
        """
        Fetch one bar and embed its owner.

        Raises:
            NotFoundError: no bar with this id (→ 404)
            DatabaseError: query failed (→ 500)
        """
        try:
            bar = await db.get(Bar, bar_id, options=[joinedload(Bar.owner)])
        except SQLAlchemyError as e:
            logger.error("Database error fetching bar %s: %s", bar_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the bar. Please try again.",
                context={"bar_id": str(bar_id)},
            )

        if bar is None:
            raise NotFoundError(resource="bar", resource_id=str(bar_id))

        return _to_detail(bar)

    async def create_bar(
        self, db: AsyncSession, requester: User, payload: BarCreate
    ) -> BarResponse:
        """
        Insert a bar owned by `requester`.

        Any `owner` sent by the client never reaches this point (BarCreate
        has no such field); owner_id is always the requester's id. Blank
        optional fields are stored as NULL.
        """
        fields = remove_blank_fields(payload.model_dump())
        bar = Bar(**fields, owner_id=requester.id)

        try:
            db.add(bar)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating bar: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the bar. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Bar %s created by %s", bar.id, requester.id)
        return _to_response(bar)

    async def update_bar(
        self,
        db: AsyncSession,
        requester: User,
        bar_id: UUID,
        payload: BarUpdate,
    ) -> None:
        """
        Merge the non-blank fields of `payload` into an existing bar.

        Steps (strictly sequential):
            1. Drop blank fields and any client-supplied `owner`
            2. Fetch the bar (NotFoundError if missing)
            3. require_ownership (OwnershipError if not the owner)
            4. Assign the remaining known fields and flush
        """
        changes: Dict[str, Any] = remove_blank_fields(payload.model_dump(exclude_unset=True))
        changes.pop("owner", None)
        changes.pop("owner_id", None)

        bar = await self._fetch(db, bar_id)
        require_ownership(requester, bar)

        for field in BAR_FIELDS:
            if field in changes:
                setattr(bar, field, changes[field])

        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating bar %s: %s", bar_id, str(e))
            raise DatabaseError(
                message="Could not update the bar. Please try again.",
                context={"bar_id": str(bar_id), "error_type": type(e).__name__},
            )

        logger.info("Bar %s updated by %s: %s", bar_id, requester.id, sorted(changes))

    async def delete_bar(self, db: AsyncSession, requester: User, bar_id: UUID) -> None:
        """
        Delete a bar after the ownership check.

        The delete is only issued when require_ownership returned normally.
        """
        bar = await self._fetch(db, bar_id)
        require_ownership(requester, bar)

        try:
            await db.delete(bar)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting bar %s: %s", bar_id, str(e))
            raise DatabaseError(
                message="Could not delete the bar. Please try again.",
                context={"bar_id": str(bar_id), "error_type": type(e).__name__},
            )

        logger.info("Bar %s deleted by %s", bar_id, requester.id)

    async def _fetch(self, db: AsyncSession, bar_id: UUID) -> Bar:
        try:
            bar = await db.get(Bar, bar_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching bar %s: %s", bar_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the bar. Please try again.",
                context={"bar_id": str(bar_id)},
            )
        if bar is None:
            raise NotFoundError(resource="bar", resource_id=str(bar_id))
        return bar


# Stateless, so one instance serves every request
bar_service = BarService()
