"""
Bars API Backend - Bearer Token Authentication
===============================================

What:  FastAPI dependency that turns `Authorization: Bearer <token>` into
       the authenticated User row.
Why:   Protected routes declare `Depends(get_current_user)`; a missing or
       unknown token short-circuits with 401 before the handler runs.
How:   HTTPBearer(auto_error=False) extracts the credentials so the error
       response goes through our own AuthenticationError handler instead of
       FastAPI's default 403.

Usage:
    @router.get("/user_bars")
    async def list_user_bars(user: User = Depends(get_current_user)): ...
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from bars_api.database import get_db_session
from bars_api.exceptions import AuthenticationError
from bars_api.models.user import User
from bars_api.services.user_service import user_service

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> User:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()

    user = await user_service.get_by_token(db, credentials.credentials)
    if user is None:
        logger.info("Rejected unknown bearer token")
        raise AuthenticationError(message="The provided token is invalid or has been revoked")

    return user
