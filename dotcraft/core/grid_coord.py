"""
Współrzędne siatki kwadratowej (GridCoord).

Jedna klasa obsługuje dwa przypadki:
- pozycję absolutną na siatce (0 <= x, y < N)
- offset względem kotwicy w kształcie receptury (może być ujemny)

Układ osi:
    (0,0) to lewy górny róg siatki.
    x rośnie w prawo, y rośnie w dół.

    y=0:  (0,0) (1,0) (2,0) (3,0) (4,0)
    y=1:  (0,1) (1,1) (2,1) (3,1) (4,1)
    ...

Przykład użycia:
    >>> anchor = GridCoord(1, 2)
    >>> anchor + GridCoord(2, -1)
    GridCoord(x=3, y=1)
    >>> GridCoord.from_value([0, 4])
    GridCoord(x=0, y=4)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, List, Tuple


@dataclass(frozen=True)
class GridCoord:
    """
    Współrzędna (x, y) na siatce kwadratowej.

    Niemutowalna - może być kluczem w słowniku lub elementem zbioru.

    Attributes:
        x (int): Kolumna
        y (int): Wiersz
    """
    x: int
    y: int

    def __add__(self, other: GridCoord) -> GridCoord:
        """Przesuwa współrzędną o offset."""
        if not isinstance(other, GridCoord):
            return NotImplemented
        return GridCoord(self.x + other.x, self.y + other.y)

    def __sub__(self, other: GridCoord) -> GridCoord:
        """Offset między dwoma pozycjami."""
        if not isinstance(other, GridCoord):
            return NotImplemented
        return GridCoord(self.x - other.x, self.y - other.y)

    def as_tuple(self) -> Tuple[int, int]:
        """Zwraca krotkę (x, y)."""
        return (self.x, self.y)

    def to_list(self) -> List[int]:
        """Zwraca [x, y] - format używany w logach JSON i YAML."""
        return [self.x, self.y]

    @classmethod
    def from_value(cls, value: Any) -> GridCoord:
        """
        Parsuje współrzędną z danych YAML/JSON.

        Akceptowane formy:
            [x, y], (x, y), {"x": .., "y": ..}, GridCoord

        Raises:
            ValueError: Jeśli wartość nie jest parą liczb całkowitych
        """
        if isinstance(value, GridCoord):
            return value

        if isinstance(value, dict):
            if "x" not in value or "y" not in value:
                raise ValueError(f"Coordinate dict needs 'x' and 'y': {value!r}")
            x, y = value["x"], value["y"]
        elif isinstance(value, (list, tuple)) and len(value) == 2:
            x, y = value
        else:
            raise ValueError(f"Cannot parse coordinate from {value!r}")

        # bool jest podklasą int - nie chcemy True/False jako współrzędnych
        for v in (x, y):
            if isinstance(v, bool) or not isinstance(v, int):
                raise ValueError(f"Coordinate components must be integers: {value!r}")

        return cls(x, y)

    def __repr__(self) -> str:
        return f"GridCoord(x={self.x}, y={self.y})"
