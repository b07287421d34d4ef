"""
Bars API Backend - Account Request/Response Schemas
====================================================

What:  Pydantic models for sign-up, sign-in, change-password.
How:   Mirrors the envelope style of the bars routes: credentials arrive in
       a `credentials` object, password changes in a `passwords` object,
       and users are returned in a `user` object.
"""

import uuid
from typing import Optional

from pydantic import BaseModel, Field


class Credentials(BaseModel):
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(max_length=128)
    password_confirmation: Optional[str] = Field(default=None, max_length=128)


class CredentialsRequest(BaseModel):
    credentials: Credentials


class PasswordChange(BaseModel):
    old: str = Field(max_length=128)
    new: str = Field(max_length=128)


class PasswordChangeRequest(BaseModel):
    passwords: PasswordChange


class UserResponse(BaseModel):
    id: uuid.UUID
    email: str

    model_config = {"from_attributes": True}


class SignedInUserResponse(UserResponse):
    """Only sign-in ever returns the token."""
    token: str


class UserEnvelope(BaseModel):
    user: UserResponse


class SignedInUserEnvelope(BaseModel):
    user: SignedInUserResponse
