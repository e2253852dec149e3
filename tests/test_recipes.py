"""
Testy dla Recipe i RecipeCatalog.

Testuje:
- Parsowanie receptury z YAML (kształt, staty broni)
- Normalizację kształtu (duplikaty)
- Walidację
- Kolejność i wyszukiwanie w katalogu
"""

import pytest

from dotcraft.core.grid_coord import GridCoord
from dotcraft.crafting.recipe import (
    AttackType,
    DamageType,
    Recipe,
    RecipeCatalog,
    WeaponStats,
)


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def hammer_data():
    """War Hammer - kształt T, obrażenia obuchowe."""
    return {
        "name": "War Hammer",
        "shape": [[0, 0], [1, 0], [2, 0], [1, 1], [1, 2]],
        "damage_type": "blunt",
        "base_damage": 22,
        "attack_rate": 0.9,
        "max_durability": 25,
        "drop_dot_count": 2,
    }


# ═══════════════════════════════════════════════════════════════════════════
# RECIPE
# ═══════════════════════════════════════════════════════════════════════════

def test_recipe_from_dict(hammer_data):
    recipe = Recipe.from_dict("hammer", hammer_data)

    assert recipe.id == "hammer"
    assert recipe.name == "War Hammer"
    assert recipe.size == 5
    assert recipe.shape[3] == GridCoord(1, 1)
    assert recipe.weapon.damage_type == DamageType.BLUNT
    assert recipe.weapon.attack_type == AttackType.MELEE
    assert recipe.weapon.base_damage == 22.0
    assert recipe.weapon.max_durability == 25
    assert recipe.drop_dot_count == 2


def test_recipe_shape_duplicates_dropped():
    """Rozmiar = liczba UNIKALNYCH offsetów."""
    recipe = Recipe.from_dict("dup", {"shape": [[0, 0], [1, 0], [0, 0]]})
    assert recipe.size == 2
    assert recipe.shape == (GridCoord(0, 0), GridCoord(1, 0))


def test_recipe_empty_shape_not_craftable():
    recipe = Recipe.from_dict("blank", {})
    assert recipe.size == 0
    assert recipe.is_craftable is False
    assert recipe.name == "blank"


def test_recipe_invalid_data():
    with pytest.raises(ValueError):
        Recipe.from_dict("bad", {"shape": [[0, 0], [1]]})
    with pytest.raises(ValueError):
        Recipe.from_dict("bad", {"shape": "0,0"})
    with pytest.raises(ValueError):
        Recipe.from_dict("bad", {"shape": [[0, 0]], "damage_type": "fire"})
    with pytest.raises(ValueError):
        Recipe("")


def test_recipe_cells_at():
    recipe = Recipe("arrow", shape=((0, 0), (-1, 1)))
    assert recipe.cells_at(GridCoord(2, 2)) == [GridCoord(2, 2), GridCoord(1, 3)]


def test_recipe_to_dict(hammer_data):
    data = Recipe.from_dict("hammer", hammer_data).to_dict()

    assert data["shape"][0] == [0, 0]
    assert data["size"] == 5
    assert data["weapon"]["damage_type"] == "blunt"


def test_weapon_stats_defaults():
    stats = WeaponStats.from_dict({"attack_type": "RANGED"})
    assert stats.attack_type == AttackType.RANGED
    assert stats.base_damage == WeaponStats().base_damage


# ═══════════════════════════════════════════════════════════════════════════
# CATALOG
# ═══════════════════════════════════════════════════════════════════════════

def test_catalog_order_and_lookup():
    catalog = RecipeCatalog.from_list([
        {"id": "b", "shape": [[0, 0]]},
        {"id": "a", "shape": [[0, 0], [1, 0]]},
        {"id": "z"},
    ])

    assert catalog.ids() == ["b", "a", "z"]
    assert [r.id for r in catalog] == ["b", "a", "z"]
    assert len(catalog) == 3
    assert "a" in catalog
    assert catalog.has("z")
    assert catalog.get("a").size == 2
    assert [r.id for r in catalog.craftable()] == ["b", "a"]


def test_catalog_unknown_id():
    with pytest.raises(KeyError):
        RecipeCatalog().get("missing")


def test_catalog_duplicate_id():
    with pytest.raises(ValueError):
        RecipeCatalog([Recipe("x"), Recipe("x")])


def test_catalog_entry_without_id():
    with pytest.raises(ValueError):
        RecipeCatalog.from_list([{"shape": [[0, 0]]}])
