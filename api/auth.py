"""
Auth API routes — register, login.

Route prefix: /auth
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status
from pydantic import AliasChoices, BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import ServerError, ValidationError
from auth.dependencies import app_settings, db_session
from auth.jwt import create_token
from auth.password import hash_password, verify_password
from config.settings import Settings
from database.helpers import create_user, get_user_by_email

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


# ── Request schemas ────────────────────────────────────────────────────
# Every field is optional so missing values get the API's own messages.


class RegisterRequest(BaseModel):
    name: Optional[str] = Field(None, validation_alias=AliasChoices("name", "nome"))
    email: Optional[str] = None
    password: Optional[str] = Field(None, validation_alias=AliasChoices("password", "senha"))
    confirm_password: Optional[str] = Field(
        None, validation_alias=AliasChoices("confirm_password", "confirmSenha")
    )


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = Field(None, validation_alias=AliasChoices("password", "senha"))


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/registro", status_code=status.HTTP_201_CREATED)
async def register(
    req: RegisterRequest,
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """Register a new user."""
    if not req.name:
        raise ValidationError("name is required")
    if not req.email:
        raise ValidationError("email is required")
    if not req.password:
        raise ValidationError("password is required")
    if req.password != req.confirm_password:
        raise ValidationError("passwords do not match")

    if await get_user_by_email(session, req.email) is not None:
        raise ValidationError("email already in use")

    try:
        # bcrypt is CPU-bound; keep it off the event loop.
        password_hash = await asyncio.to_thread(hash_password, req.password)
        user = await create_user(
            session,
            name=req.name,
            email=req.email,
            password_hash=password_hash,
        )
    except (SQLAlchemyError, ValueError):
        logger.exception("Failed to register %s", req.email)
        raise ServerError()

    logger.info("Registered user %s (%s)", req.name, user.user_id)
    return {"msg": "user created successfully"}


@router.post("/login")
async def login(
    req: LoginRequest,
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(app_settings),
) -> Dict[str, Any]:
    """Login with email + password."""
    if not req.email:
        raise ValidationError("email is required")
    if not req.password:
        raise ValidationError("password is required")

    user = await get_user_by_email(session, req.email)
    if user is None:
        raise ValidationError("user not found")

    if not await asyncio.to_thread(verify_password, req.password, user.password_hash):
        raise ValidationError("incorrect password")

    try:
        token = create_token(str(user.user_id), settings.jwt_secret)
    except ValueError:
        logger.exception("Failed to sign token for %s", user.user_id)
        raise ServerError()

    logger.info("Login: %s (%s)", user.name, user.user_id)
    return {"msg": "logged in successfully", "token": token}
