"""
Recipes router - katalog receptur aktualnej sesji.
"""

from fastapi import APIRouter, Depends, HTTPException
from typing import List, Dict, Any

from dotcraft.crafting.session import CraftingSession
from api.routers.crafting import get_session


router = APIRouter()


@router.get("/recipes")
async def get_recipes(session: CraftingSession = Depends(get_session)) -> List[Dict[str, Any]]:
    """
    Zwraca receptury w kolejności katalogu (kolejność dopasowania).
    """
    return [recipe.to_dict() for recipe in session.catalog]


@router.get("/recipes/{recipe_id}")
async def get_recipe(
    recipe_id: str,
    session: CraftingSession = Depends(get_session),
) -> Dict[str, Any]:
    """
    Zwraca szczegóły receptury.
    """
    try:
        return session.catalog.get(recipe_id).to_dict()
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Recipe '{recipe_id}' not found")
