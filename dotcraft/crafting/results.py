"""
Wyniki dopasowania i składania.

MatchOutcome - wewnętrzny wynik skanowania siatki (MatchEngine).
CraftResult  - wynik zwracany hostowi przez CraftingSession.confirm():

    Crafted(recipe_id, anchor)   - broń złożona, kropki zużyte
    Refunded(units_returned)     - brak dopasowania, kropki wróciły do puli

Oba warianty to zwykłe wartości - żadna ścieżka nie rzuca wyjątku.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, TYPE_CHECKING

from ..core.grid_coord import GridCoord

if TYPE_CHECKING:
    from .recipe import Recipe


@dataclass(frozen=True)
class MatchOutcome:
    """
    Wynik skanowania siatki.

    Attributes:
        recipe: Zwycięska receptura (None = brak dopasowania)
        anchor: Kotwica zwycięskiego dopasowania
        cells: Pozycje absolutne pól zajętych przez kształt
    """
    recipe: Optional["Recipe"] = None
    anchor: Optional[GridCoord] = None
    cells: Tuple[GridCoord, ...] = ()

    @property
    def matched(self) -> bool:
        return self.recipe is not None

    @classmethod
    def no_match(cls) -> "MatchOutcome":
        return cls()


class CraftResult:
    """Bazowa klasa wyniku confirm()."""

    crafted: bool = False

    def to_dict(self) -> Dict[str, Any]:
        raise NotImplementedError


@dataclass(frozen=True)
class Crafted(CraftResult):
    """
    Udane składanie.

    Attributes:
        recipe_id: ID złożonej receptury
        anchor: Kotwica dopasowania
        consumed: Ile kropek zużyto (== rozmiar receptury)
    """
    recipe_id: str
    anchor: GridCoord
    consumed: int = 0
    crafted: bool = field(default=True, init=False, repr=False, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "result": "crafted",
            "recipe_id": self.recipe_id,
            "anchor": self.anchor.to_list(),
            "consumed": self.consumed,
        }


@dataclass(frozen=True)
class Refunded(CraftResult):
    """
    Brak dopasowania - wszystkie kropki wróciły do puli.

    Attributes:
        units_returned: Ile kropek wróciło (0 dla pustej siatki)
    """
    units_returned: int
    crafted: bool = field(default=False, init=False, repr=False, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "result": "refunded",
            "units_returned": self.units_returned,
        }
