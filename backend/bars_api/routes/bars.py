"""
Bars API Backend - Bars Route Handlers
=======================================

What:  The /bars and /user_bars endpoints.
How:   Extracts path/body parameters, delegates to BarService, wraps results
       in the `bar`/`bars` envelopes. Status codes live here; business
       rules live in the service.

Route Inventory:
    GET    /bars         (public)  list every bar
    GET    /user_bars    (token)   list the requester's bars
    GET    /bars/{id}    (token)   one bar, owner embedded
    POST   /bars         (token)   create, owner = requester
    PATCH  /bars/{id}    (token)   update non-blank fields, owner only
    DELETE /bars/{id}    (token)   delete, owner only
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from bars_api.auth import get_current_user
from bars_api.database import get_db_session
from bars_api.models.user import User
from bars_api.schemas.bar import (
    BarCreateRequest,
    BarDetailEnvelope,
    BarEnvelope,
    BarListEnvelope,
    BarUpdateRequest,
)
from bars_api.schemas.common import ErrorResponse
from bars_api.services.bar_service import bar_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Bars"])

_AUTH_ERRORS = {401: {"description": "Missing or invalid token", "model": ErrorResponse}}
_OWNER_ERRORS = {
    401: {"description": "Missing token, or requester is not the owner", "model": ErrorResponse},
    404: {"description": "Bar not found", "model": ErrorResponse},
}


@router.get(
    "/bars",
    response_model=BarListEnvelope,
    summary="List all bars",
)
async def list_bars(db: AsyncSession = Depends(get_db_session)) -> BarListEnvelope:
    return BarListEnvelope(bars=await bar_service.list_bars(db))


@router.get(
    "/user_bars",
    response_model=BarListEnvelope,
    responses=_AUTH_ERRORS,
    summary="List the bars owned by the requester",
)
async def list_user_bars(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> BarListEnvelope:
    return BarListEnvelope(bars=await bar_service.list_user_bars(db, user))


@router.get(
    "/bars/{bar_id}",
    response_model=BarDetailEnvelope,
    responses={**_AUTH_ERRORS, 404: {"description": "Bar not found", "model": ErrorResponse}},
    summary="Get one bar with its owner embedded",
)
async def get_bar(
    bar_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> BarDetailEnvelope:
    return BarDetailEnvelope(bar=await bar_service.get_bar(db, bar_id))


@router.post(
    "/bars",
    status_code=status.HTTP_201_CREATED,
    response_model=BarEnvelope,
    responses=_AUTH_ERRORS,
    summary="Create a bar owned by the requester",
)
async def create_bar(
    body: BarCreateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> BarEnvelope:
    return BarEnvelope(bar=await bar_service.create_bar(db, user, body.bar))


@router.patch(
    "/bars/{bar_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_OWNER_ERRORS,
    summary="Update a bar (owner only); blank fields are left unchanged",
)
async def update_bar(
    bar_id: UUID,
    body: BarUpdateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await bar_service.update_bar(db, user, bar_id, body.bar)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/bars/{bar_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_OWNER_ERRORS,
    summary="Delete a bar (owner only)",
)
async def delete_bar(
    bar_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await bar_service.delete_bar(db, user, bar_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
