"""
Bars API Backend - Account Route Handlers
==========================================

Route Inventory:
    POST   /sign-up           create an account
    POST   /sign-in           exchange credentials for a bearer token
    PATCH  /change-password   (token) replace the password
    DELETE /sign-out          (token) revoke the current token
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from bars_api.auth import get_current_user
from bars_api.database import get_db_session
from bars_api.models.user import User
from bars_api.schemas.common import ErrorResponse
from bars_api.schemas.user import (
    CredentialsRequest,
    PasswordChangeRequest,
    SignedInUserEnvelope,
    SignedInUserResponse,
    UserEnvelope,
    UserResponse,
)
from bars_api.services.user_service import user_service

router = APIRouter(tags=["Users"])


@router.post(
    "/sign-up",
    status_code=status.HTTP_201_CREATED,
    response_model=UserEnvelope,
    responses={422: {"description": "Invalid or duplicate credentials", "model": ErrorResponse}},
)
async def sign_up(
    body: CredentialsRequest,
    db: AsyncSession = Depends(get_db_session),
) -> UserEnvelope:
    user = await user_service.sign_up(db, body.credentials)
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.post(
    "/sign-in",
    status_code=status.HTTP_201_CREATED,
    response_model=SignedInUserEnvelope,
    responses={401: {"description": "Wrong email or password", "model": ErrorResponse}},
)
async def sign_in(
    body: CredentialsRequest,
    db: AsyncSession = Depends(get_db_session),
) -> SignedInUserEnvelope:
    user = await user_service.sign_in(db, body.credentials)
    return SignedInUserEnvelope(
        user=SignedInUserResponse(id=user.id, email=user.email, token=user.token)
    )


@router.patch(
    "/change-password",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={401: {"description": "Missing token or wrong old password", "model": ErrorResponse}},
)
async def change_password(
    body: PasswordChangeRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await user_service.change_password(db, user, body.passwords)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/sign-out",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
)
async def sign_out(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await user_service.sign_out(db, user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
