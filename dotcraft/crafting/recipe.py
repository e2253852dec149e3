"""
Receptura (Recipe) i katalog receptur (RecipeCatalog).

Receptura = nazwa + kształt (zbiór offsetów względem kotwicy)
+ dane broni, która powstaje po udanym składaniu.

Kształt:
    Offsety są względne - ten sam kształt pasuje w dowolnym
    miejscu siatki (niezmienniczość względem przesunięcia).

    shape: [[0, 0], [1, 0], [2, 0]]        # poziomy odcinek 3
    shape: [[0, 0], [0, 1], [-1, 1], [1, 1]]  # "T" do góry nogami

    Offsety mogą być ujemne - kotwica nie musi być lewym górnym
    polem kształtu. Rozmiar receptury = liczba UNIKALNYCH offsetów.

FLOW:
═══════════════════════════════════════════════════════════════════════════

    1. Recipe loaded from YAML (ConfigLoader merge weapon_defaults)
    2. RecipeCatalog keeps recipes in file order
    3. MatchEngine iterates the catalog at every anchor
    4. Winning recipe id + WeaponStats go to the host (weapon spawn)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any, Iterable, Iterator, Tuple, TYPE_CHECKING
from enum import Enum, auto

from ..core.grid_coord import GridCoord

if TYPE_CHECKING:
    from ..core.config_loader import ConfigLoader


# ═══════════════════════════════════════════════════════════════════════════
# WEAPON DATA
# ═══════════════════════════════════════════════════════════════════════════

class DamageType(Enum):
    """Typ obrażeń broni (słabości przeciwników)."""

    SLASH = auto()
    PIERCE = auto()
    BLUNT = auto()

    @classmethod
    def from_string(cls, s: str) -> "DamageType":
        """
        Konwertuje string na DamageType.

        Raises:
            ValueError: Dla nieznanego typu
        """
        try:
            return cls[s.upper()]
        except KeyError:
            raise ValueError(f"Unknown damage type: {s!r}") from None


class AttackType(Enum):
    """Sposób ataku broni."""

    MELEE = auto()    # Kolizja w łuku przed graczem
    RANGED = auto()   # Wystrzeliwuje pocisk

    @classmethod
    def from_string(cls, s: str) -> "AttackType":
        try:
            return cls[s.upper()]
        except KeyError:
            raise ValueError(f"Unknown attack type: {s!r}") from None


@dataclass(frozen=True)
class WeaponStats:
    """
    Statystyki broni powstającej z receptury.

    Panel składania ich nie używa - przekazuje je hostowi,
    który tworzy broń w świecie gry.

    Attributes:
        damage_type: Typ obrażeń
        attack_type: Walka wręcz / dystansowa
        base_damage: Obrażenia bazowe
        attack_rate: Odstęp między atakami (sekundy)
        projectile_speed: Prędkość pocisku (tylko RANGED)
        max_durability: Liczba ataków do zniszczenia broni
    """

    damage_type: DamageType = DamageType.SLASH
    attack_type: AttackType = AttackType.MELEE
    base_damage: float = 10.0
    attack_rate: float = 0.5
    projectile_speed: float = 10.0
    max_durability: int = 20

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WeaponStats":
        """Tworzy WeaponStats z (zmerge'owanych) danych YAML."""
        defaults = cls()
        damage_type = data.get("damage_type")
        attack_type = data.get("attack_type")
        return cls(
            damage_type=DamageType.from_string(damage_type) if damage_type else defaults.damage_type,
            attack_type=AttackType.from_string(attack_type) if attack_type else defaults.attack_type,
            base_damage=float(data.get("base_damage", defaults.base_damage)),
            attack_rate=float(data.get("attack_rate", defaults.attack_rate)),
            projectile_speed=float(data.get("projectile_speed", defaults.projectile_speed)),
            max_durability=int(data.get("max_durability", defaults.max_durability)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "damage_type": self.damage_type.name.lower(),
            "attack_type": self.attack_type.name.lower(),
            "base_damage": self.base_damage,
            "attack_rate": self.attack_rate,
            "projectile_speed": self.projectile_speed,
            "max_durability": self.max_durability,
        }


# ═══════════════════════════════════════════════════════════════════════════
# RECIPE
# ═══════════════════════════════════════════════════════════════════════════

def _normalize_shape(offsets: Iterable[Any]) -> Tuple[GridCoord, ...]:
    """Parsuje offsety i usuwa duplikaty, zachowując kolejność."""
    seen = set()
    result = []
    for raw in offsets:
        offset = GridCoord.from_value(raw)
        if offset in seen:
            continue
        seen.add(offset)
        result.append(offset)
    return tuple(result)


@dataclass(frozen=True)
class Recipe:
    """
    Niemutowalna definicja receptury.

    Attributes:
        id: Unikalny identyfikator
        name: Wyświetlana nazwa
        shape: Unikalne offsety kształtu (kolejność z definicji)
        weapon: Statystyki powstającej broni
        drop_dot_count: Ile kropek wraca do puli po zniszczeniu broni
        description: Opis dla UI

    Note:
        Receptura z pustym kształtem jest poprawna jako dane,
        ale nigdy nie zostanie dopasowana (is_craftable == False).
    """

    id: str
    name: str = ""
    shape: Tuple[GridCoord, ...] = ()
    weapon: WeaponStats = field(default_factory=WeaponStats)
    drop_dot_count: int = 0
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Recipe id must be non-empty")
        if self.drop_dot_count < 0:
            raise ValueError(f"drop_dot_count must be >= 0, got {self.drop_dot_count}")
        # frozen=True - normalizacja przez object.__setattr__
        object.__setattr__(self, "shape", _normalize_shape(self.shape))
        if not self.name:
            object.__setattr__(self, "name", self.id)

    @property
    def size(self) -> int:
        """Liczba kropek wymagana przez kształt."""
        return len(self.shape)

    @property
    def is_craftable(self) -> bool:
        """Czy receptura może zostać dopasowana (niepusty kształt)."""
        return self.size > 0

    def cells_at(self, anchor: GridCoord) -> List[GridCoord]:
        """Pozycje absolutne kształtu dla danej kotwicy (bez walidacji granic)."""
        return [anchor + offset for offset in self.shape]

    @classmethod
    def from_dict(cls, recipe_id: str, data: Dict[str, Any]) -> "Recipe":
        """
        Tworzy Recipe z danych YAML.

        Raises:
            ValueError: Jeśli kształt zawiera niepoprawne współrzędne
        """
        shape = data.get("shape") or []
        if not isinstance(shape, (list, tuple)):
            raise ValueError(f"Recipe '{recipe_id}': shape must be a list of [dx, dy]")

        return cls(
            id=recipe_id,
            name=data.get("name") or recipe_id,
            shape=_normalize_shape(shape),
            weapon=WeaponStats.from_dict(data),
            drop_dot_count=int(data.get("drop_dot_count", 0)),
            description=data.get("description", ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serializacja dla API / UI."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "shape": [offset.to_list() for offset in self.shape],
            "size": self.size,
            "weapon": self.weapon.to_dict(),
            "drop_dot_count": self.drop_dot_count,
        }


# ═══════════════════════════════════════════════════════════════════════════
# CATALOG
# ═══════════════════════════════════════════════════════════════════════════

class RecipeCatalog:
    """
    Uporządkowana lista receptur.

    Kolejność ma znaczenie: przy tej samej kotwicy wygrywa
    receptura, która jest wcześniej w katalogu.

    Example:
        >>> catalog = RecipeCatalog([
        ...     Recipe("line3", shape=((0, 0), (1, 0), (2, 0))),
        ... ])
        >>> catalog.get("line3").size
        3
    """

    def __init__(self, recipes: Optional[Iterable[Recipe]] = None):
        self._recipes: List[Recipe] = []
        self._by_id: Dict[str, Recipe] = {}
        for recipe in recipes or []:
            self.add(recipe)

    def add(self, recipe: Recipe) -> None:
        """
        Dodaje recepturę na koniec katalogu.

        Raises:
            ValueError: Jeśli receptura o tym id już istnieje
        """
        if recipe.id in self._by_id:
            raise ValueError(f"Duplicate recipe id: {recipe.id}")
        self._recipes.append(recipe)
        self._by_id[recipe.id] = recipe

    def get(self, recipe_id: str) -> Recipe:
        """Raises KeyError jeśli receptura nie istnieje."""
        if recipe_id not in self._by_id:
            raise KeyError(f"Recipe '{recipe_id}' not found")
        return self._by_id[recipe_id]

    def has(self, recipe_id: str) -> bool:
        return recipe_id in self._by_id

    def ids(self) -> List[str]:
        """ID receptur w kolejności katalogu."""
        return [r.id for r in self._recipes]

    def craftable(self) -> List[Recipe]:
        """Receptury z niepustym kształtem."""
        return [r for r in self._recipes if r.is_craftable]

    def __iter__(self) -> Iterator[Recipe]:
        return iter(self._recipes)

    def __len__(self) -> int:
        return len(self._recipes)

    def __contains__(self, recipe_id: object) -> bool:
        return recipe_id in self._by_id

    # ─────────────────────────────────────────────────────────────────────────
    # ŁADOWANIE
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def from_list(cls, recipes_data: List[Dict[str, Any]]) -> "RecipeCatalog":
        """
        Tworzy katalog z listy słowników (format recipes.yaml).

        Każdy wpis musi mieć pole `id`.
        """
        catalog = cls()
        for data in recipes_data:
            recipe_id = data.get("id")
            if not recipe_id:
                raise ValueError(f"Recipe entry without id: {data!r}")
            catalog.add(Recipe.from_dict(recipe_id, data))
        return catalog

    @classmethod
    def from_config(cls, loader: "ConfigLoader") -> "RecipeCatalog":
        """Tworzy katalog z recipes.yaml (z uzupełnionymi defaults)."""
        return cls.from_list(loader.load_all_recipes())

    def __repr__(self) -> str:
        return f"RecipeCatalog({self.ids()})"
