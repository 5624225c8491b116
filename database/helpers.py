"""
Database helper functions — look up users and push/pull their recipes.

Recipe mutations are read-modify-write on the owning user's row and are
always scoped to that user.
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import User


def _to_uuid(value: str | uuid.UUID) -> uuid.UUID:
    return uuid.UUID(value) if isinstance(value, str) else value


def public_user(user: User) -> Dict[str, Any]:
    """Serialize a user without the password hash."""
    return {
        "id": str(user.user_id),
        "name": user.name,
        "email": user.email,
        "recipes": list(user.recipes or []),
        "created_at": user.created_at.isoformat() if user.created_at else None,
    }


async def get_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
    result = await session.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def get_user_by_id(session: AsyncSession, user_id: str | uuid.UUID) -> Optional[User]:
    return await session.get(User, _to_uuid(user_id))


async def create_user(
    session: AsyncSession,
    *,
    name: str,
    email: str,
    password_hash: str,
) -> User:
    """Persist a new user with an empty recipe list."""
    user = User(
        user_id=uuid.uuid4(),
        name=name,
        email=email,
        password_hash=password_hash,
        recipes=[],
    )
    session.add(user)
    await session.commit()
    return user


async def push_recipe(
    session: AsyncSession,
    user_id: str | uuid.UUID,
    fields: Dict[str, Any],
) -> Dict[str, Any]:
    """
    Append a recipe with a fresh id to the user's list and return it.

    Raises ``LookupError`` when the user no longer exists.
    """
    user = await get_user_by_id(session, user_id)
    if user is None:
        raise LookupError(f"user {user_id} not found")

    recipe = {"id": str(uuid.uuid4()), **fields}
    # Reassign so the JSON column is marked dirty.
    user.recipes = [*(user.recipes or []), recipe]
    await session.commit()
    return recipe


async def pull_recipe(
    session: AsyncSession,
    user_id: str | uuid.UUID,
    recipe_id: str | uuid.UUID,
) -> int:
    """Remove matching recipes from the user's own list; return how many went."""
    rid = str(_to_uuid(recipe_id))
    user = await get_user_by_id(session, user_id)
    if user is None:
        return 0

    current: List[Dict[str, Any]] = list(user.recipes or [])
    kept = [r for r in current if r.get("id") != rid]
    removed = len(current) - len(kept)
    if removed:
        user.recipes = kept
        await session.commit()
    return removed
