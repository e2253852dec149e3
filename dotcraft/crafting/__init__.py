"""
System składania broni na siatce kropek.

Moduł zawiera:
- Recipe / RecipeCatalog: Receptury (kształty + dane broni)
- MatchEngine: Skanowanie siatki z regułą czystości
- CraftingSession: Stan panelu (toggle / confirm / reset)
- Crafted / Refunded: Wyniki zwracane hostowi

Użycie:
    from dotcraft.crafting import CraftingSession, RecipeCatalog
    from dotcraft.core import ConfigLoader

    loader = ConfigLoader("data/")
    session = CraftingSession.from_config(loader)

    session.toggle_cell(0, 0)
    result = session.confirm()
"""

from .recipe import (
    Recipe,
    RecipeCatalog,
    WeaponStats,
    DamageType,
    AttackType,
)
from .results import MatchOutcome, CraftResult, Crafted, Refunded
from .match_engine import MatchEngine
from .session import CraftingSession

__all__ = [
    # Data
    "Recipe",
    "RecipeCatalog",
    "WeaponStats",
    "DamageType",
    "AttackType",
    # Results
    "MatchOutcome",
    "CraftResult",
    "Crafted",
    "Refunded",
    # Engine
    "MatchEngine",
    "CraftingSession",
]
