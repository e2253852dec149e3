"""
CraftingSession - stan panelu składania broni.

Łączy DotGrid + ResourcePool + RecipeCatalog + MatchEngine
za dwiema operacjami gracza: toggle_cell i confirm.

ODPOWIEDZIALNOŚCI:
═══════════════════════════════════════════════════════════════════════════

    1. toggle_cell(x, y)
       - puste pole: pobierz kropkę z puli (albo odrzuć gdy pula == 0)
       - zajęte pole: cofnij kropkę do puli (zawsze się udaje)

    2. confirm()
       - dopasowanie: zużyj pola, powiadom listenery -> Crafted
       - brak: zwróć wszystkie kropki do puli -> Refunded

    3. reset()
       - porzucenie panelu: zwrot jak przy braku dopasowania, bez skanu

    4. credit_pool(amount) / salvage_weapon(recipe_id)
       - zasilenie puli z zewnątrz (pickup, zniszczona broń)

STAN:
═══════════════════════════════════════════════════════════════════════════

    Sesja zawsze jest "Idle". confirm() to jeden atomowy krok,
    po którym siatka jest pusta (zużyta albo zwrócona).

    Niezmiennik: pool + opłacone pola siatki jest stałe poza
    udanym składaniem (jedyna operacja niszcząca kropki).

WSPÓŁBIEŻNOŚĆ:
═══════════════════════════════════════════════════════════════════════════

    Sesja jest synchroniczna i jednowątkowa. Host wielowątkowy
    musi chronić całą sesję jednym lockiem.

Użycie:
    >>> session = CraftingSession(catalog, initial_dots=3)
    >>> session.on_crafted(lambda recipe: spawn_weapon(recipe))
    >>> for x in range(3):
    ...     session.toggle_cell(x, 0)
    >>> session.confirm()
    Crafted(recipe_id='line3', anchor=GridCoord(x=0, y=0), consumed=3)
"""

from __future__ import annotations
import logging
from typing import Any, Callable, Dict, List, Optional, Set, TYPE_CHECKING

from ..core.grid_coord import GridCoord
from ..core.dot_grid import DotGrid, DEFAULT_GRID_SIZE
from ..core.resource_pool import ResourcePool
from ..core.rng import GameRNG
from ..events.event_logger import CraftingLog
from .match_engine import MatchEngine
from .recipe import Recipe, RecipeCatalog
from .results import CraftResult, Crafted, Refunded

if TYPE_CHECKING:
    from ..core.config_loader import ConfigLoader


logger = logging.getLogger(__name__)

CraftedCallback = Callable[[Recipe], None]
ResultCallback = Callable[[CraftResult], None]


class CraftingSession:
    """
    Sesja składania - jedyny właściciel siatki i puli.

    Attributes:
        catalog (RecipeCatalog): Katalog receptur (niemutowalna konfiguracja)
        grid (DotGrid): Siatka kropek
        pool (ResourcePool): Pula kropek
        engine (MatchEngine): Silnik dopasowania
        event_log (CraftingLog): Log zdarzeń sesji
        consumption_chance (float): Szansa, że położenie kropki kosztuje
            (1.0 = zawsze; < 1.0 wymaga rng)
        rng (Optional[GameRNG]): Generator dla consumption_chance

    Note:
        Host nie powinien modyfikować grid/pool bezpośrednio -
        tylko przez metody sesji.
    """

    def __init__(
        self,
        catalog: RecipeCatalog,
        initial_dots: int = 0,
        grid_size: int = DEFAULT_GRID_SIZE,
        consumption_chance: float = 1.0,
        rng: Optional[GameRNG] = None,
        event_log: Optional[CraftingLog] = None,
    ):
        """
        Args:
            catalog: Katalog receptur
            initial_dots: Początkowy stan puli
            grid_size: Wymiar siatki
            consumption_chance: Szansa pobrania kropki przy położeniu
            rng: Generator losowości (wymagany gdy consumption_chance < 1.0)
            event_log: Log zdarzeń (domyślnie nowy)

        Raises:
            ValueError: Dla niepoprawnej konfiguracji
        """
        if not 0.0 <= consumption_chance <= 1.0:
            raise ValueError(
                f"consumption_chance must be in [0, 1], got {consumption_chance}"
            )
        if consumption_chance < 1.0 and rng is None:
            raise ValueError("consumption_chance < 1.0 requires an rng")

        self.catalog = catalog
        self.grid = DotGrid(grid_size)
        self.pool = ResourcePool(initial_dots)
        self.event_log = event_log or CraftingLog(grid_size=grid_size, initial_pool=initial_dots)
        self.engine = MatchEngine(event_log=self.event_log)
        self.consumption_chance = consumption_chance
        self.rng = rng

        # Pola położone za darmo (buff) - nie oddają kropki przy zwrocie
        self._free_cells: Set[GridCoord] = set()

        self._crafted_listeners: List[CraftedCallback] = []
        self._result_listeners: List[ResultCallback] = []

        self.event_log.log_session_start(pool=initial_dots, recipes=catalog.ids())

    @classmethod
    def from_config(cls, loader: "ConfigLoader", **overrides: Any) -> "CraftingSession":
        """
        Tworzy sesję z plików konfiguracyjnych.

        Args:
            loader: ConfigLoader z defaults.yaml i recipes.yaml
            **overrides: Nadpisania sekcji `crafting` (np. initial_dots=0)

        Example:
            >>> session = CraftingSession.from_config(ConfigLoader("data/"))
        """
        config = dict(loader.get_crafting_config())
        config.update(overrides)

        consumption_chance = float(config.get("consumption_chance", 1.0))
        rng = None
        if consumption_chance < 1.0:
            rng = GameRNG(int(config.get("seed") or 0))

        return cls(
            catalog=RecipeCatalog.from_config(loader),
            initial_dots=int(config.get("initial_dots", 0)),
            grid_size=int(config.get("grid_size", DEFAULT_GRID_SIZE)),
            consumption_chance=consumption_chance,
            rng=rng,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # LISTENERY (zamiast globalnego singletona)
    # ─────────────────────────────────────────────────────────────────────────

    def on_crafted(self, callback: CraftedCallback) -> None:
        """
        Rejestruje callback wołany z recepturą po udanym składaniu.

        Typowo: host tworzy broń w świecie gry. Wyjątki z callbacka
        nie są łapane - stan sesji jest już zatwierdzony.
        """
        self._crafted_listeners.append(callback)

    def on_result(self, callback: ResultCallback) -> None:
        """Rejestruje callback wołany z każdym wynikiem confirm()/reset()."""
        self._result_listeners.append(callback)

    # ─────────────────────────────────────────────────────────────────────────
    # OPERACJE GRACZA
    # ─────────────────────────────────────────────────────────────────────────

    def toggle_cell(self, x: int, y: int) -> bool:
        """
        Kładzie albo cofa kropkę na polu (x, y).

        Returns:
            bool: True jeśli stan się zmienił.
                  False dla pola poza siatką lub pustej puli.
        """
        if not self.grid.is_valid(x, y):
            return False

        pos = GridCoord(x, y)

        if self.grid.is_occupied(x, y):
            # Cofnięcie zawsze się udaje
            refunded = 0 if pos in self._free_cells else 1
            self._free_cells.discard(pos)
            self.pool.deposit(refunded)
            self.grid.set_occupied(x, y, False)
            self.event_log.log_remove(x, y, refunded=refunded, pool_after=self.pool.count)
            logger.debug("Removed dot at (%d, %d), pool=%d", x, y, self.pool.count)
            return True

        if not self.pool.has(1):
            self.event_log.log_place_rejected(x, y)
            logger.debug("Not enough dots to place at (%d, %d)", x, y)
            return False

        free = self.rng is not None and not self.rng.roll_consumption(self.consumption_chance)
        if free:
            self._free_cells.add(pos)
        else:
            self.pool.withdraw(1)

        self.grid.set_occupied(x, y, True)
        self.event_log.log_place(x, y, pool_after=self.pool.count, free=free)
        logger.debug("Placed dot at (%d, %d), pool=%d", x, y, self.pool.count)
        return True

    def confirm(self) -> CraftResult:
        """
        Skanuje siatkę i zatwierdza transakcję.

        Returns:
            CraftResult: Crafted(recipe_id, anchor) albo Refunded(units_returned)
        """
        outcome = self.engine.try_craft(self.grid, self.catalog)

        if not outcome.matched:
            return self._refund(reset=False)

        consumed = self.engine.commit_crafted(self.grid, outcome)
        for cell in outcome.cells:
            self._free_cells.discard(cell)

        recipe = outcome.recipe
        result = Crafted(recipe_id=recipe.id, anchor=outcome.anchor, consumed=consumed)
        self.event_log.log_crafted(recipe.id, outcome.anchor.x, outcome.anchor.y, consumed)
        logger.info("Crafted %s at (%d, %d)", recipe.id, outcome.anchor.x, outcome.anchor.y)

        for callback in self._crafted_listeners:
            callback(recipe)
        self._notify(result)
        return result

    def reset(self) -> Refunded:
        """
        Zwraca wszystkie kropki i czyści siatkę bez skanowania.

        Używane gdy gracz zamyka panel bez zatwierdzenia.
        """
        return self._refund(reset=True)

    def _refund(self, reset: bool) -> Refunded:
        returned = self.engine.commit_refund(self.grid, self.pool, self._free_cells)
        self._free_cells.clear()

        result = Refunded(units_returned=returned)
        self.event_log.log_refund(returned, pool_after=self.pool.count, reset=reset)
        logger.info("Refunded %d dots, pool=%d", returned, self.pool.count)

        self._notify(result)
        return result

    def _notify(self, result: CraftResult) -> None:
        for callback in self._result_listeners:
            callback(result)

    # ─────────────────────────────────────────────────────────────────────────
    # ZASILANIE PULI
    # ─────────────────────────────────────────────────────────────────────────

    def credit_pool(self, amount: int, source: str = "pickup") -> bool:
        """
        Dodaje kropki do puli (pickup, nagroda za pokój).

        Bezpieczne między dowolnymi toggle - nie dotyka siatki.

        Returns:
            bool: False dla amount <= 0 (bez zmian)
        """
        if not self.pool.credit(amount):
            self.event_log.log_credit_rejected(amount, source=source)
            logger.warning("Rejected pool credit of %d dots from %s", amount, source)
            return False

        self.event_log.log_credit(amount, pool_after=self.pool.count, source=source)
        return True

    def salvage_weapon(self, recipe_id: str) -> bool:
        """
        Oddaje kropki zniszczonej broni do puli.

        Args:
            recipe_id: Receptura, z której powstała broń

        Returns:
            bool: True jeśli pula została zasilona
                  (False gdy broń nie oddaje kropek)

        Raises:
            KeyError: Dla nieznanej receptury
        """
        recipe = self.catalog.get(recipe_id)
        if recipe.drop_dot_count <= 0:
            return False

        self.pool.credit(recipe.drop_dot_count)
        self.event_log.log_salvage(recipe.id, recipe.drop_dot_count, pool_after=self.pool.count)
        return True

    # ─────────────────────────────────────────────────────────────────────────
    # ZAPYTANIA
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def grid_size(self) -> int:
        return self.grid.size

    def pool_count(self) -> int:
        """Liczba kropek do wydania."""
        return self.pool.count

    def cell_state(self, x: int, y: int) -> bool:
        """Czy na polu leży kropka (False poza siatką)."""
        return self.grid.is_occupied(x, y)

    def occupied_count(self) -> int:
        """Liczba kropek na siatce."""
        return self.grid.occupied_count()

    def snapshot(self) -> Dict[str, Any]:
        """
        Zwraca stan sesji jako zwykły słownik (dla API / UI).

        Returns:
            Dict: grid_size, pool, occupied, cells [y][x], free_cells
        """
        return {
            "grid_size": self.grid.size,
            "pool": self.pool.count,
            "occupied": self.grid.occupied_count(),
            "cells": self.grid.to_rows(),
            "free_cells": sorted(pos.to_list() for pos in self._free_cells),
        }

    def __repr__(self) -> str:
        return (
            f"CraftingSession(pool={self.pool.count}, "
            f"occupied={self.grid.occupied_count()}, recipes={len(self.catalog)})"
        )
