"""
MatchEngine - skanowanie siatki i dopasowanie receptur.

ALGORYTM:
═══════════════════════════════════════════════════════════════════════════

    total = liczba zajętych pól
    if total == 0: brak dopasowania

    for y in range(N):                  # kotwice w kolejności row-major
        for x in range(N):
            for recipe in catalog:      # receptury w kolejności katalogu
                if pusty kształt: pomiń
                if nie pasuje strukturalnie: dalej
                if recipe.size != total:
                    # kształt jest, ale obok leżą inne kropki
                    zaloguj "impure", dalej
                return (recipe, anchor)  # pierwsze czyste dopasowanie wygrywa

    brak dopasowania

DOPASOWANIE STRUKTURALNE:
═══════════════════════════════════════════════════════════════════════════

    Dla każdego offsetu (dx, dy) kształtu pole (x+dx, y+dy) musi:
    - leżeć w granicach siatki (bez zawijania, bez przycinania)
    - być zajęte

REGUŁA CZYSTOŚCI:
═══════════════════════════════════════════════════════════════════════════

    Rozmiar kształtu == liczba WSZYSTKICH kropek na siatce.
    Żadna kropka nie może zostać "na boku" - cała siatka musi
    być jedną instancją jednej receptury.

COMMIT:
═══════════════════════════════════════════════════════════════════════════

    Dopasowanie  -> pola kształtu czyszczone, kropki NIE wracają do puli
    Brak         -> każda kropka wraca do puli, siatka czyszczona
"""

from __future__ import annotations
import logging
from typing import AbstractSet, List, Optional, TYPE_CHECKING

from ..core.grid_coord import GridCoord
from ..core.dot_grid import DotGrid
from ..core.resource_pool import ResourcePool
from .recipe import Recipe, RecipeCatalog
from .results import MatchOutcome

if TYPE_CHECKING:
    from ..events.event_logger import CraftingLog


logger = logging.getLogger(__name__)


class MatchEngine:
    """
    Bezstanowy silnik dopasowania.

    Attributes:
        event_log: Opcjonalny CraftingLog - trafiają tam odrzucone
                   dopasowania (MATCH_IMPURE) do diagnostyki receptur

    Example:
        >>> engine = MatchEngine()
        >>> outcome = engine.try_craft(grid, catalog)
        >>> if outcome.matched:
        ...     engine.commit_crafted(grid, outcome)
        ... else:
        ...     engine.commit_refund(grid, pool)
    """

    def __init__(self, event_log: Optional["CraftingLog"] = None):
        self.event_log = event_log

    # ─────────────────────────────────────────────────────────────────────────
    # DOPASOWANIE
    # ─────────────────────────────────────────────────────────────────────────

    @staticmethod
    def structural_match(grid: DotGrid, recipe: Recipe, anchor: GridCoord) -> bool:
        """
        Sprawdza czy kształt receptury pasuje w danej kotwicy.

        Args:
            grid: Siatka
            recipe: Receptura
            anchor: Pozycja traktowana jako offset (0, 0)

        Returns:
            bool: True jeśli każde pole kształtu jest w granicach i zajęte.
                  Pusty kształt nigdy nie pasuje.
        """
        if not recipe.is_craftable:
            return False

        for offset in recipe.shape:
            target = anchor + offset
            if not grid.is_valid(target.x, target.y):
                return False
            if not grid.is_occupied(target.x, target.y):
                return False

        return True

    def try_craft(self, grid: DotGrid, catalog: RecipeCatalog) -> MatchOutcome:
        """
        Szuka pierwszego czystego dopasowania na siatce.

        Nie modyfikuje siatki - commit robi wywołujący.

        Returns:
            MatchOutcome: Zwycięska (receptura, kotwica) albo no_match()
        """
        total_occupied = grid.occupied_count()
        if total_occupied == 0:
            return MatchOutcome.no_match()

        for anchor in grid.iter_anchors():
            for recipe in catalog:
                if not recipe.is_craftable:
                    continue

                if not self.structural_match(grid, recipe, anchor):
                    continue

                if recipe.size != total_occupied:
                    self._report_impure(recipe, anchor, total_occupied)
                    continue

                logger.debug(
                    "Matched %s at (%d, %d), %d dots",
                    recipe.id, anchor.x, anchor.y, total_occupied,
                )
                return MatchOutcome(
                    recipe=recipe,
                    anchor=anchor,
                    cells=tuple(recipe.cells_at(anchor)),
                )

        return MatchOutcome.no_match()

    def find_near_misses(self, grid: DotGrid, catalog: RecipeCatalog) -> List[MatchOutcome]:
        """
        Zwraca wszystkie dopasowania strukturalne odrzucone przez regułę czystości.

        Diagnostyka dla UI ("kształt włóczni jest, ale leżą dodatkowe
        kropki"). Nie loguje zdarzeń i nie modyfikuje siatki.

        Returns:
            List[MatchOutcome]: W kolejności skanowania
        """
        total_occupied = grid.occupied_count()
        result = []

        for anchor in grid.iter_anchors():
            for recipe in catalog:
                if recipe.size == total_occupied:
                    continue
                if self.structural_match(grid, recipe, anchor):
                    result.append(MatchOutcome(
                        recipe=recipe,
                        anchor=anchor,
                        cells=tuple(recipe.cells_at(anchor)),
                    ))

        return result

    def _report_impure(self, recipe: Recipe, anchor: GridCoord, total_occupied: int) -> None:
        """Loguje dopasowanie strukturalne z nadmiarowymi kropkami."""
        logger.warning(
            "Shape %s matches at (%d, %d) but grid is impure: needs %d dots, grid has %d",
            recipe.id, anchor.x, anchor.y, recipe.size, total_occupied,
        )
        if self.event_log is not None:
            self.event_log.log_impure_match(
                recipe.id, anchor.x, anchor.y,
                required=recipe.size,
                on_grid=total_occupied,
            )

    # ─────────────────────────────────────────────────────────────────────────
    # COMMIT
    # ─────────────────────────────────────────────────────────────────────────

    @staticmethod
    def commit_crafted(grid: DotGrid, outcome: MatchOutcome) -> int:
        """
        Zużywa pola zwycięskiego kształtu.

        Kropki NIE wracają do puli - zostały przetworzone w broń.
        Po regule czystości oznacza to wyczyszczenie całej siatki.

        Returns:
            int: Liczba zużytych pól
        """
        if not outcome.matched:
            return 0

        consumed = 0
        for cell in outcome.cells:
            if grid.is_occupied(cell.x, cell.y):
                grid.set_occupied(cell.x, cell.y, False)
                consumed += 1
        return consumed

    @staticmethod
    def commit_refund(
        grid: DotGrid,
        pool: ResourcePool,
        free_cells: Optional[AbstractSet[GridCoord]] = None,
    ) -> int:
        """
        Zwraca każdą kropkę z siatki do puli i czyści siatkę.

        Args:
            grid: Siatka
            pool: Pula do zasilenia
            free_cells: Pola położone za darmo (buff) - czyszczone bez zwrotu

        Returns:
            int: Liczba kropek, które wróciły do puli
        """
        free = free_cells or frozenset()
        returned = 0

        for pos in grid.occupied_positions():
            grid.set_occupied(pos.x, pos.y, False)
            if pos not in free:
                returned += 1

        pool.deposit(returned)
        return returned
