"""
System logowania zdarzeń panelu składania do formatu JSON.

Każda operacja sesji (położenie kropki, cofnięcie, zasilenie puli,
składanie, zwrot) jest zapisywana z pełnym kontekstem. Log służy
do debugowania receptur i może być odtworzony przez host (UI).

Zamiast ticka symulacji każde zdarzenie dostaje numer kolejny `seq` -
sesja nie ma zegara, tylko dyskretne wywołania.

TYPY ZDARZEŃ:
═══════════════════════════════════════════════════════════════════

    SESSION_START
    ─────────────────────────────────────────────────────────────
    Utworzenie sesji.
    Data: grid_size, pool, recipes

    DOT_PLACED / DOT_PLACED_FREE
    ─────────────────────────────────────────────────────────────
    Kropka położona na polu (FREE = buff, pula nie ruszona).
    Data: pos [x, y], pool_after

    DOT_REMOVED
    ─────────────────────────────────────────────────────────────
    Cofnięcie kropki z pola.
    Data: pos [x, y], refunded, pool_after

    PLACE_REJECTED
    ─────────────────────────────────────────────────────────────
    Brak kropek w puli.
    Data: pos [x, y]

    POOL_CREDITED / CREDIT_REJECTED
    ─────────────────────────────────────────────────────────────
    Zasilenie puli z zewnątrz (pickup, nagroda).
    Data: amount, source, pool_after

    MATCH_IMPURE
    ─────────────────────────────────────────────────────────────
    Kształt pasuje strukturalnie, ale na siatce leżą inne kropki.
    Data: recipe_id, anchor [x, y], required, on_grid

    WEAPON_CRAFTED
    ─────────────────────────────────────────────────────────────
    Udane składanie.
    Data: recipe_id, anchor [x, y], consumed

    CRAFT_REFUNDED / GRID_RESET
    ─────────────────────────────────────────────────────────────
    Brak dopasowania (lub porzucenie panelu) - kropki wracają.
    Data: units_returned, pool_after

    WEAPON_SALVAGED
    ─────────────────────────────────────────────────────────────
    Zniszczona broń oddaje kropki do puli.
    Data: recipe_id, amount, pool_after

FORMAT LOGU:
═══════════════════════════════════════════════════════════════════

{
    "metadata": {
        "version": "1.0",
        "grid": {"size": 5},
        "initial_pool": 10,
        "timestamp": "2024-01-01T12:00:00"
    },
    "events": [
        {"seq": 0, "type": "SESSION_START", "data": {...}},
        {"seq": 1, "type": "DOT_PLACED", "data": {"pos": [0, 0], "pool_after": 9}},
        ...
    ]
}
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional
from datetime import datetime
import json
from pathlib import Path


class EventType(Enum):
    """Typ zdarzenia w sesji składania."""

    SESSION_START = auto()

    # Siatka
    DOT_PLACED = auto()
    DOT_PLACED_FREE = auto()
    DOT_REMOVED = auto()
    PLACE_REJECTED = auto()

    # Pula
    POOL_CREDITED = auto()
    CREDIT_REJECTED = auto()

    # Składanie
    MATCH_IMPURE = auto()
    WEAPON_CRAFTED = auto()
    CRAFT_REFUNDED = auto()
    GRID_RESET = auto()
    WEAPON_SALVAGED = auto()


@dataclass
class CraftEvent:
    """
    Pojedyncze zdarzenie w sesji.

    Attributes:
        seq (int): Numer kolejny zdarzenia
        event_type (EventType): Typ zdarzenia
        recipe_id (Optional[str]): ID receptury (jeśli dotyczy)
        data (Dict): Dodatkowe dane specyficzne dla typu zdarzenia
    """
    seq: int
    event_type: EventType
    recipe_id: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serializuje zdarzenie do słownika."""
        result = {
            "seq": self.seq,
            "type": self.event_type.name,
        }

        if self.recipe_id:
            result["recipe_id"] = self.recipe_id
        if self.data:
            result["data"] = self.data

        return result


class CraftingLog:
    """
    Logger zdarzeń sesji składania.

    Attributes:
        events (List[CraftEvent]): Lista wszystkich zdarzeń
        metadata (Dict): Metadane sesji

    Example:
        >>> log = CraftingLog(grid_size=5, initial_pool=3)
        >>> log.log_place(x=0, y=0, pool_after=2)
        >>> log.get_event_count()
        1
        >>> log.save("output/crafting.json")
    """

    def __init__(self, grid_size: int = 5, initial_pool: int = 0):
        self.events: List[CraftEvent] = []
        self.metadata: Dict[str, Any] = {
            "version": "1.0",
            "grid": {"size": grid_size},
            "initial_pool": initial_pool,
            "timestamp": datetime.now().isoformat(),
        }

    # ─────────────────────────────────────────────────────────────────────────
    # LOGOWANIE OGÓLNE
    # ─────────────────────────────────────────────────────────────────────────

    def log(self, event: CraftEvent) -> None:
        """Dodaje zdarzenie do logu."""
        self.events.append(event)

    def log_event(
        self,
        event_type: EventType,
        recipe_id: Optional[str] = None,
        **data: Any,
    ) -> CraftEvent:
        """
        Tworzy i loguje zdarzenie z kolejnym numerem seq.

        Returns:
            CraftEvent: Utworzone zdarzenie
        """
        event = CraftEvent(
            seq=len(self.events),
            event_type=event_type,
            recipe_id=recipe_id,
            data=dict(data),
        )
        self.log(event)
        return event

    # ─────────────────────────────────────────────────────────────────────────
    # POMOCNICZE METODY LOGOWANIA
    # ─────────────────────────────────────────────────────────────────────────

    def log_session_start(self, pool: int, recipes: List[str]) -> None:
        self.log_event(
            EventType.SESSION_START,
            grid_size=self.metadata["grid"]["size"],
            pool=pool,
            recipes=recipes,
        )

    def log_place(self, x: int, y: int, pool_after: int, free: bool = False) -> None:
        """Loguje położenie kropki."""
        event_type = EventType.DOT_PLACED_FREE if free else EventType.DOT_PLACED
        self.log_event(event_type, pos=[x, y], pool_after=pool_after)

    def log_remove(self, x: int, y: int, refunded: int, pool_after: int) -> None:
        """Loguje cofnięcie kropki."""
        self.log_event(
            EventType.DOT_REMOVED,
            pos=[x, y],
            refunded=refunded,
            pool_after=pool_after,
        )

    def log_place_rejected(self, x: int, y: int) -> None:
        self.log_event(EventType.PLACE_REJECTED, pos=[x, y])

    def log_credit(self, amount: int, pool_after: int, source: str = "pickup") -> None:
        """Loguje zasilenie puli."""
        self.log_event(
            EventType.POOL_CREDITED,
            amount=amount,
            source=source,
            pool_after=pool_after,
        )

    def log_credit_rejected(self, amount: int, source: str = "pickup") -> None:
        self.log_event(EventType.CREDIT_REJECTED, amount=amount, source=source)

    def log_impure_match(
        self,
        recipe_id: str,
        anchor_x: int,
        anchor_y: int,
        required: int,
        on_grid: int,
    ) -> None:
        """Loguje dopasowanie strukturalne odrzucone przez regułę czystości."""
        self.log_event(
            EventType.MATCH_IMPURE,
            recipe_id=recipe_id,
            anchor=[anchor_x, anchor_y],
            required=required,
            on_grid=on_grid,
        )

    def log_crafted(
        self,
        recipe_id: str,
        anchor_x: int,
        anchor_y: int,
        consumed: int,
    ) -> None:
        """Loguje udane składanie broni."""
        self.log_event(
            EventType.WEAPON_CRAFTED,
            recipe_id=recipe_id,
            anchor=[anchor_x, anchor_y],
            consumed=consumed,
        )

    def log_refund(self, units_returned: int, pool_after: int, reset: bool = False) -> None:
        """Loguje zwrot kropek (brak dopasowania lub reset panelu)."""
        event_type = EventType.GRID_RESET if reset else EventType.CRAFT_REFUNDED
        self.log_event(event_type, units_returned=units_returned, pool_after=pool_after)

    def log_salvage(self, recipe_id: str, amount: int, pool_after: int) -> None:
        self.log_event(
            EventType.WEAPON_SALVAGED,
            recipe_id=recipe_id,
            amount=amount,
            pool_after=pool_after,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # SERIALIZACJA
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        """Serializuje cały log do słownika."""
        return {
            "metadata": self.metadata,
            "events": [e.to_dict() for e in self.events],
        }

    def save(self, filepath: str) -> None:
        """
        Zapisuje log do pliku JSON.

        Args:
            filepath: Ścieżka do pliku (katalogi są tworzone)
        """
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Zwraca log jako string JSON (indent=None = compact)."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    # ─────────────────────────────────────────────────────────────────────────
    # STATYSTYKI
    # ─────────────────────────────────────────────────────────────────────────

    def get_event_count(self) -> int:
        """Zwraca liczbę zdarzeń."""
        return len(self.events)

    def get_events_by_type(self, event_type: EventType) -> List[CraftEvent]:
        """Filtruje zdarzenia po typie."""
        return [e for e in self.events if e.event_type == event_type]

    def get_events_for_recipe(self, recipe_id: str) -> List[CraftEvent]:
        """Filtruje zdarzenia dla receptury."""
        return [e for e in self.events if e.recipe_id == recipe_id]

    def get_last_event(self) -> Optional[CraftEvent]:
        return self.events[-1] if self.events else None
