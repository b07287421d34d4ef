"""
Bars API Backend - User Service (Accounts & Tokens)
====================================================

What:  Sign-up, sign-in, change-password, sign-out and token lookup.
Why:   The bars routes need an authenticated requester; this service issues
       the opaque bearer tokens that identify one.
How:   Passwords are hashed with bcrypt. Tokens are random hex strings
       stored on the user row; sign-in rotates the token and sign-out
       clears it, so a signed-out token no longer resolves to anyone.
Who:   Called by routes/users.py and by the auth dependency (auth.py).
"""

import logging
import secrets
from typing import Optional

import bcrypt
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bars_api.config import settings
from bars_api.exceptions import BadCredentialsError, BadParamsError, DatabaseError
from bars_api.models.user import User
from bars_api.schemas.user import Credentials, PasswordChange

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """Hash a password with bcrypt at the configured cost factor."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        logger.warning("Stored password hash could not be parsed")
        return False


def generate_token() -> str:
    return secrets.token_hex(settings.token_bytes)


class UserService:
    """
    Stateless account service.

    Responsibilities:
        - sign_up():          create an account (no token yet)
        - sign_in():          verify credentials, issue a fresh token
        - change_password():  verify the old password, store the new hash
        - sign_out():         invalidate the current token
        - get_by_token():     resolve a bearer token to a user
    """

    async def sign_up(self, db: AsyncSession, credentials: Credentials) -> User:
        """
        Raises:
            BadParamsError: empty password, confirmation mismatch, or the
                            email is already registered (→ 422)
        """
        if not credentials.password:
            raise BadParamsError(message="Password must not be empty", field="password")
        if credentials.password != credentials.password_confirmation:
            raise BadParamsError(
                message="Password and password confirmation do not match",
                field="password_confirmation",
            )

        user = User(
            email=credentials.email.strip().lower(),
            hashed_password=hash_password(credentials.password),
        )
        try:
            db.add(user)
            await db.flush()
        except IntegrityError:
            raise BadParamsError(message="Email is already registered", field="email")
        except SQLAlchemyError as e:
            logger.error("Database error during sign-up: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info("User %s signed up", user.id)
        return user

    async def sign_in(self, db: AsyncSession, credentials: Credentials) -> User:
        """
        Issue a new token for valid credentials.

        Raises:
            BadCredentialsError: unknown email or wrong password (→ 401)
        """
        user = await self._get_by_email(db, credentials.email.strip().lower())
        if user is None or not verify_password(credentials.password, user.hashed_password):
            raise BadCredentialsError()

        user.token = generate_token()
        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error during sign-in: %s", str(e))
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info("User %s signed in", user.id)
        return user

    async def change_password(
        self, db: AsyncSession, user: User, passwords: PasswordChange
    ) -> None:
        if not verify_password(passwords.old, user.hashed_password):
            raise BadCredentialsError()
        if not passwords.new:
            raise BadParamsError(message="New password must not be empty", field="new")

        user.hashed_password = hash_password(passwords.new)
        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error changing password: %s", str(e))
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info("User %s changed password", user.id)

    async def sign_out(self, db: AsyncSession, user: User) -> None:
        user.token = None
        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error during sign-out: %s", str(e))
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info("User %s signed out", user.id)

    async def get_by_token(self, db: AsyncSession, token: str) -> Optional[User]:
        try:
            result = await db.execute(select(User).where(User.token == token))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error resolving token: %s", str(e))
            raise DatabaseError(context={"error_type": type(e).__name__})

    async def _get_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        try:
            result = await db.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error looking up user: %s", str(e))
            raise DatabaseError(context={"error_type": type(e).__name__})


user_service = UserService()
