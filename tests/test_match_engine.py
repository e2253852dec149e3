"""
Testy dla MatchEngine.

Testuje:
- Dopasowanie strukturalne (granice, puste pola, puste kształty)
- Regułę czystości
- Kolejność: kotwice row-major, potem kolejność katalogu
- Commit (zużycie / zwrot)
- Near-misses i log MATCH_IMPURE
"""

import logging

import pytest

from dotcraft.core.grid_coord import GridCoord
from dotcraft.core.dot_grid import DotGrid
from dotcraft.core.resource_pool import ResourcePool
from dotcraft.crafting.recipe import Recipe, RecipeCatalog
from dotcraft.crafting.match_engine import MatchEngine
from dotcraft.events.event_logger import CraftingLog, EventType


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

LINE3 = Recipe("line3", shape=((0, 0), (1, 0), (2, 0)))
COLUMN3 = Recipe("column3", shape=((0, 0), (0, 1), (0, 2)))
PAIR = Recipe("pair", shape=((0, 0), (1, 0)))
EMPTY = Recipe("nothing", shape=())


def fill(grid: DotGrid, *cells) -> DotGrid:
    for x, y in cells:
        grid.set_occupied(x, y, True)
    return grid


@pytest.fixture
def grid() -> DotGrid:
    return DotGrid(5)


@pytest.fixture
def engine() -> MatchEngine:
    return MatchEngine(event_log=CraftingLog())


# ═══════════════════════════════════════════════════════════════════════════
# STRUCTURAL MATCH
# ═══════════════════════════════════════════════════════════════════════════

def test_structural_match_translation_invariant(grid):
    """Ten sam kształt pasuje w dowolnym miejscu siatki."""
    fill(grid, (2, 3), (3, 3), (4, 3))
    assert MatchEngine.structural_match(grid, LINE3, GridCoord(2, 3))
    assert not MatchEngine.structural_match(grid, LINE3, GridCoord(1, 3))


def test_structural_match_out_of_bounds_never_matches(grid):
    """Offset poza siatką = brak dopasowania, nawet gdy reszta jest zajęta."""
    fill(grid, (3, 0), (4, 0))
    assert not MatchEngine.structural_match(grid, LINE3, GridCoord(3, 0))


def test_structural_match_negative_offsets(grid):
    arrow = Recipe("arrow", shape=((0, 0), (-1, 1), (1, 1)))
    fill(grid, (1, 0), (0, 1), (2, 1))

    assert MatchEngine.structural_match(grid, arrow, GridCoord(1, 0))
    # kotwica (0, 0) -> offset (-1, 1) wypada poza siatkę
    assert not MatchEngine.structural_match(grid, arrow, GridCoord(0, 0))


def test_structural_match_empty_shape(grid):
    fill(grid, (0, 0))
    assert not MatchEngine.structural_match(grid, EMPTY, GridCoord(0, 0))


# ═══════════════════════════════════════════════════════════════════════════
# TRY CRAFT
# ═══════════════════════════════════════════════════════════════════════════

def test_empty_grid_no_match(grid, engine):
    outcome = engine.try_craft(grid, RecipeCatalog([LINE3]))
    assert not outcome.matched
    assert outcome.recipe is None


def test_empty_catalog_no_match(grid, engine):
    fill(grid, (0, 0), (1, 0), (2, 0))
    assert not engine.try_craft(grid, RecipeCatalog()).matched


def test_pure_match(grid, engine):
    fill(grid, (1, 1), (2, 1), (3, 1))
    outcome = engine.try_craft(grid, RecipeCatalog([PAIR, LINE3]))

    assert outcome.matched
    assert outcome.recipe is LINE3
    assert outcome.anchor == GridCoord(1, 1)
    assert outcome.cells == (GridCoord(1, 1), GridCoord(2, 1), GridCoord(3, 1))


def test_try_craft_does_not_mutate(grid, engine):
    fill(grid, (0, 0), (1, 0), (2, 0))
    engine.try_craft(grid, RecipeCatalog([LINE3]))
    assert grid.occupied_count() == 3


def test_impure_match_rejected(grid, engine):
    """Kształt jest, ale dodatkowa kropka psuje czystość."""
    fill(grid, (0, 0), (1, 0), (2, 0), (4, 4))
    outcome = engine.try_craft(grid, RecipeCatalog([LINE3]))

    assert not outcome.matched
    impure = engine.event_log.get_events_by_type(EventType.MATCH_IMPURE)
    assert len(impure) == 1
    assert impure[0].recipe_id == "line3"
    assert impure[0].data == {"anchor": [0, 0], "required": 3, "on_grid": 4}


def test_impure_match_logs_warning(grid, engine, caplog):
    fill(grid, (0, 0), (1, 0), (2, 0), (4, 4))
    with caplog.at_level(logging.WARNING, logger="dotcraft.crafting.match_engine"):
        engine.try_craft(grid, RecipeCatalog([LINE3]))
    assert "impure" in caplog.text


def test_impure_does_not_stop_scan(grid, engine):
    """Odrzucenie przez czystość nie kończy skanu - dalsze receptury są sprawdzane."""
    fill(grid, (0, 0), (1, 0), (2, 0))
    outcome = engine.try_craft(grid, RecipeCatalog([PAIR, LINE3]))

    assert outcome.recipe is LINE3
    assert len(engine.event_log.get_events_by_type(EventType.MATCH_IMPURE)) == 1


def test_catalog_order_breaks_ties(grid, engine):
    """Dwie receptury z tym samym kształtem - wygrywa pierwsza w katalogu."""
    twin = Recipe("line3_twin", shape=((2, 0), (1, 0), (0, 0)))
    fill(grid, (0, 2), (1, 2), (2, 2))

    assert engine.try_craft(grid, RecipeCatalog([LINE3, twin])).recipe is LINE3
    assert engine.try_craft(grid, RecipeCatalog([twin, LINE3])).recipe is twin


def test_row_major_anchor_wins_over_catalog_order(grid, engine):
    """Wcześniejsza kotwica wygrywa, nawet dla receptury dalej w katalogu."""
    # ten sam kształt zakotwiczony inaczej: "anchored_late" ma kotwicę na końcu
    anchored_late = Recipe("anchored_late", shape=((0, 0), (-1, 0), (-2, 0)))
    fill(grid, (0, 1), (1, 1), (2, 1))
    outcome = engine.try_craft(grid, RecipeCatalog([anchored_late, LINE3]))

    # LINE3 pasuje w (0, 1), anchored_late dopiero w (2, 1)
    assert outcome.recipe is LINE3
    assert outcome.anchor == GridCoord(0, 1)


def test_empty_shape_skipped(grid, engine):
    fill(grid, (0, 0), (1, 0))
    outcome = engine.try_craft(grid, RecipeCatalog([EMPTY, PAIR]))
    assert outcome.recipe is PAIR


def test_boundary_shape_never_matches(engine):
    """Kształt szerszy niż siatka nigdy nie pasuje."""
    small = fill(DotGrid(2), (0, 0), (1, 0))
    assert not engine.try_craft(small, RecipeCatalog([LINE3])).matched


def test_larger_grid(engine):
    grid = fill(DotGrid(9), (6, 8), (7, 8), (8, 8))
    outcome = engine.try_craft(grid, RecipeCatalog([COLUMN3, LINE3]))
    assert outcome.recipe is LINE3
    assert outcome.anchor == GridCoord(6, 8)


# ═══════════════════════════════════════════════════════════════════════════
# NEAR MISSES
# ═══════════════════════════════════════════════════════════════════════════

def test_find_near_misses(grid, engine):
    fill(grid, (0, 0), (1, 0), (2, 0), (4, 4))
    misses = engine.find_near_misses(grid, RecipeCatalog([PAIR, LINE3]))

    found = [(m.recipe.id, m.anchor.as_tuple()) for m in misses]
    assert found == [("pair", (0, 0)), ("line3", (0, 0)), ("pair", (1, 0))]
    # diagnostyka nie loguje zdarzeń
    assert engine.event_log.get_event_count() == 0


# ═══════════════════════════════════════════════════════════════════════════
# COMMIT
# ═══════════════════════════════════════════════════════════════════════════

def test_commit_crafted_clears_without_refund(grid, engine):
    fill(grid, (0, 0), (1, 0), (2, 0))
    outcome = engine.try_craft(grid, RecipeCatalog([LINE3]))

    assert engine.commit_crafted(grid, outcome) == 3
    assert grid.occupied_count() == 0


def test_commit_crafted_no_match_is_noop(grid, engine):
    fill(grid, (0, 0))
    outcome = engine.try_craft(grid, RecipeCatalog([LINE3]))
    assert engine.commit_crafted(grid, outcome) == 0
    assert grid.occupied_count() == 1


def test_commit_refund_returns_everything(grid):
    pool = ResourcePool(1)
    fill(grid, (0, 0), (3, 2), (4, 4))

    assert MatchEngine.commit_refund(grid, pool) == 3
    assert pool.count == 4
    assert grid.occupied_count() == 0


def test_commit_refund_skips_free_cells(grid):
    pool = ResourcePool(0)
    fill(grid, (0, 0), (1, 0))

    returned = MatchEngine.commit_refund(grid, pool, free_cells={GridCoord(1, 0)})
    assert returned == 1
    assert pool.count == 1
    assert grid.occupied_count() == 0
