"""
REST API routes — welcome, profile and the caller's recipes.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, Depends, Path, Request
from pydantic import AliasChoices, BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import NotFoundError, PersistenceError, ValidationError
from auth.dependencies import db_session, get_current_user_id
from database.helpers import get_user_by_id, public_user, pull_recipe, push_recipe

logger = logging.getLogger(__name__)

router = APIRouter()

SAVE_FAILED = "error saving recipe"


class RecipeRequest(BaseModel):
    title: Optional[str] = Field(None, validation_alias=AliasChoices("title", "titulo"))
    prep_time: Optional[Union[int, str]] = Field(
        None, validation_alias=AliasChoices("prep_time", "tempo_de_preparo")
    )
    tools: Optional[List[str]] = Field(
        None, validation_alias=AliasChoices("tools", "instrumentos_utilizados")
    )
    ingredients: Optional[List[str]] = Field(
        None, validation_alias=AliasChoices("ingredients", "ingredientes")
    )
    steps: Optional[List[str]] = Field(None, validation_alias=AliasChoices("steps", "receita"))

    def is_complete(self) -> bool:
        """Scalars must be truthy, lists present, and steps non-empty."""
        return bool(
            self.title
            and self.prep_time
            and self.tools is not None
            and self.ingredients is not None
            and self.steps
        )


async def recipe_body(
    request: Request,
    user_id: str = Depends(get_current_user_id),
) -> RecipeRequest:
    """Parse the recipe body only once the caller is authenticated."""
    try:
        # pydantic's ValidationError is a ValueError, like bad JSON.
        return RecipeRequest.model_validate(await request.json())
    except ValueError:
        raise ValidationError(SAVE_FAILED)


@router.get("/")
async def welcome() -> Dict[str, str]:
    return {"msg": "welcome to the recipes API"}


@router.get("/usuario")
async def get_profile(
    session: AsyncSession = Depends(db_session),
    user_id: str = Depends(get_current_user_id),
) -> Dict[str, Any]:
    """Return the caller's user document without the password hash."""
    user = await get_user_by_id(session, user_id)
    if user is None:
        raise NotFoundError("user not found")
    return public_user(user)


@router.get("/receitas")
async def list_recipes(
    session: AsyncSession = Depends(db_session),
    user_id: str = Depends(get_current_user_id),
) -> List[Dict[str, Any]]:
    user = await get_user_by_id(session, user_id)
    if user is None:
        raise NotFoundError("user not found")
    return public_user(user)["recipes"]


@router.post("/receitas")
async def add_recipe(
    req: RecipeRequest = Depends(recipe_body),
    session: AsyncSession = Depends(db_session),
    user_id: str = Depends(get_current_user_id),
) -> Dict[str, str]:
    """Append a recipe to the caller's list."""
    if not req.is_complete():
        raise ValidationError(SAVE_FAILED)

    try:
        recipe = await push_recipe(session, user_id, req.model_dump())
    except (SQLAlchemyError, LookupError):
        logger.exception("Failed to save recipe for user %s", user_id)
        raise PersistenceError(SAVE_FAILED)

    logger.info("Saved recipe %s for user %s", recipe["id"], user_id)
    return {"msg": "recipe saved successfully"}


@router.delete("/receitas/{idReceita}")
async def delete_recipe(
    recipe_id: str = Path(..., alias="idReceita"),
    session: AsyncSession = Depends(db_session),
    user_id: str = Depends(get_current_user_id),
) -> Dict[str, str]:
    """Remove a recipe from the caller's own list; succeeds even if nothing matched."""
    try:
        removed = await pull_recipe(session, user_id, recipe_id)
    except (SQLAlchemyError, ValueError):
        logger.exception("Failed to delete recipe %s for user %s", recipe_id, user_id)
        raise PersistenceError("deletion failed")

    logger.info("Deleted %d recipe(s) with id %s for user %s", removed, recipe_id, user_id)
    return {"msg": "deleted successfully"}
