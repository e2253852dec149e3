"""
Siatka kropek (DotGrid) - logiczna warstwa panelu składania broni.

DotGrid przechowuje tylko zajętość pól:
- True  = na polu leży kropka (dot)
- False = pole puste

Siatka NIE wie, do której receptury należy kropka - zajętość
jest anonimowa, liczy się tylko ile kropek leży i gdzie.

Kolejność skanowania (row-major):
    for y in range(size):       # wiersz - pętla zewnętrzna
        for x in range(size):   # kolumna - pętla wewnętrzna

    Ta kolejność decyduje, która kotwica wygrywa przy dopasowaniu
    receptur, więc wszystkie iteracje po siatce jej używają.

Przykład użycia:
    >>> grid = DotGrid(size=5)
    >>> grid.set_occupied(0, 0, True)
    True
    >>> grid.is_occupied(0, 0)
    True
    >>> grid.occupied_count()
    1
    >>> grid.set_occupied(9, 9, True)  # poza siatką - no-op
    False
"""

from __future__ import annotations
from typing import Iterator, List

from .grid_coord import GridCoord


DEFAULT_GRID_SIZE = 5


class DotGrid:
    """
    Kwadratowa macierz boolowska N x N.

    Attributes:
        size (int): Wymiar siatki (N)
        _cells (List[List[bool]]): Macierz zajętości, indeksowana [y][x]

    Note:
        - Odczyt poza granicami zwraca False
        - Zapis poza granicami jest ignorowany (zwraca False)
        - Algorytm dopasowania działa dla dowolnego N >= 1
    """

    def __init__(self, size: int = DEFAULT_GRID_SIZE):
        """
        Tworzy pustą siatkę.

        Args:
            size: Wymiar siatki

        Raises:
            ValueError: Jeśli size < 1
        """
        if size < 1:
            raise ValueError(f"Grid size must be >= 1, got {size}")
        self.size = size
        self._cells: List[List[bool]] = [[False] * size for _ in range(size)]

    # ─────────────────────────────────────────────────────────────────────────
    # WALIDACJA POZYCJI
    # ─────────────────────────────────────────────────────────────────────────

    def is_valid(self, x: int, y: int) -> bool:
        """
        Sprawdza czy pozycja leży w granicach [0, size).

        Example:
            >>> DotGrid(5).is_valid(4, 0)
            True
            >>> DotGrid(5).is_valid(-1, 0)
            False
        """
        return 0 <= x < self.size and 0 <= y < self.size

    def is_valid_coord(self, pos: GridCoord) -> bool:
        """Wersja is_valid dla GridCoord."""
        return self.is_valid(pos.x, pos.y)

    # ─────────────────────────────────────────────────────────────────────────
    # ODCZYT / ZAPIS
    # ─────────────────────────────────────────────────────────────────────────

    def is_occupied(self, x: int, y: int) -> bool:
        """
        Sprawdza czy na polu leży kropka.

        Returns:
            bool: False także dla pozycji poza siatką
        """
        return self.is_valid(x, y) and self._cells[y][x]

    def set_occupied(self, x: int, y: int, state: bool) -> bool:
        """
        Ustawia stan pola.

        Args:
            x, y: Pozycja
            state: True = kropka, False = puste

        Returns:
            bool: True jeśli zapis się odbył, False dla pozycji poza siatką
        """
        if not self.is_valid(x, y):
            return False
        self._cells[y][x] = bool(state)
        return True

    def clear(self) -> None:
        """Opróżnia całą siatkę (bez zwrotu zasobów - to robi wywołujący)."""
        for row in self._cells:
            for x in range(self.size):
                row[x] = False

    # ─────────────────────────────────────────────────────────────────────────
    # ZAPYTANIA
    # ─────────────────────────────────────────────────────────────────────────

    def occupied_count(self) -> int:
        """Liczba zajętych pól na całej siatce."""
        return sum(sum(1 for cell in row if cell) for row in self._cells)

    def iter_anchors(self) -> Iterator[GridCoord]:
        """
        Iteruje po wszystkich pozycjach w kolejności row-major.

        Yields:
            GridCoord: (0,0), (1,0), ..., (size-1,0), (0,1), ...
        """
        for y in range(self.size):
            for x in range(self.size):
                yield GridCoord(x, y)

    def occupied_positions(self) -> List[GridCoord]:
        """Zajęte pozycje w kolejności row-major."""
        return [pos for pos in self.iter_anchors() if self._cells[pos.y][pos.x]]

    def to_rows(self) -> List[List[bool]]:
        """
        Kopia macierzy jako lista wierszy (indeks [y][x]).

        Przydatne dla API i snapshotów - modyfikacja kopii
        nie wpływa na siatkę.
        """
        return [list(row) for row in self._cells]

    # ─────────────────────────────────────────────────────────────────────────
    # DEBUG / VISUALIZACJA
    # ─────────────────────────────────────────────────────────────────────────

    def debug_print(self) -> str:
        """
        Zwraca tekstową reprezentację siatki do debugowania.

        Legenda:
            . = puste pole
            X = kropka
        """
        lines = []
        for row in self._cells:
            lines.append(" ".join("X" if cell else "." for cell in row))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"DotGrid(size={self.size}, occupied={self.occupied_count()})"
