"""
Crafting router - operacje na sesji składania.
"""

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel
from typing import List, Dict, Any, Optional

from dotcraft.crafting.session import CraftingSession


router = APIRouter()


def get_session(request: Request) -> CraftingSession:
    """Dependency - sesja należąca do aplikacji."""
    session = getattr(request.app.state, "session", None)
    if session is None:
        raise HTTPException(status_code=503, detail="Crafting session not initialized")
    return session


# ═══════════════════════════════════════════════════════════════════════════
# REQUEST/RESPONSE MODELS
# ═══════════════════════════════════════════════════════════════════════════

class ToggleRequest(BaseModel):
    """Kliknięcie pola siatki."""
    x: int
    y: int


class CreditRequest(BaseModel):
    """Zasilenie puli (pickup / nagroda)."""
    amount: int
    source: str = "pickup"


class SalvageRequest(BaseModel):
    """Zniszczona broń."""
    recipe_id: str


# ═══════════════════════════════════════════════════════════════════════════
# ENDPOINTS
# ═══════════════════════════════════════════════════════════════════════════

@router.get("/session")
async def get_state(session: CraftingSession = Depends(get_session)) -> Dict[str, Any]:
    """Zwraca stan siatki i puli."""
    return session.snapshot()


@router.post("/session/toggle")
async def toggle(
    request: ToggleRequest,
    session: CraftingSession = Depends(get_session),
) -> Dict[str, Any]:
    """
    Kładzie albo cofa kropkę.

    Returns:
        changed: czy stan się zmienił (False = poza siatką / pusta pula)
    """
    changed = session.toggle_cell(request.x, request.y)
    return {"changed": changed, "state": session.snapshot()}


@router.post("/session/confirm")
async def confirm(session: CraftingSession = Depends(get_session)) -> Dict[str, Any]:
    """
    Skanuje siatkę i składa broń albo zwraca kropki.
    """
    result = session.confirm()
    payload = result.to_dict()
    if result.crafted:
        payload["recipe"] = session.catalog.get(payload["recipe_id"]).to_dict()
    payload["state"] = session.snapshot()
    return payload


@router.post("/session/reset")
async def reset(session: CraftingSession = Depends(get_session)) -> Dict[str, Any]:
    """Zwraca kropki i czyści siatkę bez skanowania."""
    result = session.reset()
    return {**result.to_dict(), "state": session.snapshot()}


@router.post("/session/credit")
async def credit(
    request: CreditRequest,
    session: CraftingSession = Depends(get_session),
) -> Dict[str, Any]:
    """Dodaje kropki do puli. amount <= 0 jest odrzucane (accepted=False)."""
    accepted = session.credit_pool(request.amount, source=request.source)
    return {"accepted": accepted, "pool": session.pool_count()}


@router.post("/session/salvage")
async def salvage(
    request: SalvageRequest,
    session: CraftingSession = Depends(get_session),
) -> Dict[str, Any]:
    """Oddaje kropki zniszczonej broni."""
    try:
        credited = session.salvage_weapon(request.recipe_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Recipe '{request.recipe_id}' not found")
    return {"credited": credited, "pool": session.pool_count()}


@router.get("/session/near-misses")
async def near_misses(session: CraftingSession = Depends(get_session)) -> List[Dict[str, Any]]:
    """
    Kształty, które pasują strukturalnie, ale siatka ma nadmiarowe kropki.
    """
    outcomes = session.engine.find_near_misses(session.grid, session.catalog)
    return [
        {
            "recipe_id": outcome.recipe.id,
            "anchor": outcome.anchor.to_list(),
            "required": outcome.recipe.size,
            "on_grid": session.occupied_count(),
        }
        for outcome in outcomes
    ]


@router.get("/session/events")
async def events(
    event_type: Optional[str] = None,
    session: CraftingSession = Depends(get_session),
) -> List[Dict[str, Any]]:
    """
    Zwraca log zdarzeń sesji (opcjonalnie filtrowany po typie).
    """
    log = session.event_log
    if event_type is None:
        return [e.to_dict() for e in log.events]
    return [e.to_dict() for e in log.events if e.event_type.name == event_type.upper()]
