"""
Deterministyczny generator liczb losowych (RNG).

Panel składania jest w pełni deterministyczny, z jednym wyjątkiem:
opcjonalny buff "oszczędne kropki" daje szansę, że położenie
kropki na siatce nic nie kosztuje. Ten rzut musi być powtarzalny:
- ten sam seed = te same darmowe kropki
- testy mogą sprawdzać konkretne sekwencje

Jak używać:
    - Każda sesja składania ma WŁASNĄ instancję GameRNG
    - NIE używaj globalnego random - jest współdzielony

Przykład użycia:
    >>> rng = GameRNG(seed=12345)
    >>> rng.roll_chance(1.0)
    True
    >>> rng.roll_chance(0.0)
    False
"""

from __future__ import annotations
import random


class GameRNG:
    """
    Deterministyczny generator losowości dla sesji składania.

    Attributes:
        seed (int): Ziarno użyte do inicjalizacji
        _rng (random.Random): Wewnętrzny generator

    Example:
        >>> rng1 = GameRNG(42)
        >>> rng2 = GameRNG(42)
        >>> rng1.random() == rng2.random()  # ten sam seed = te same wyniki
        True
    """

    def __init__(self, seed: int):
        """
        Args:
            seed: Ziarno losowości. Ten sam seed = te same wyniki.
        """
        self.seed = seed
        self._rng = random.Random(seed)

    def random(self) -> float:
        """Zwraca losową liczbę z przedziału [0.0, 1.0)."""
        return self._rng.random()

    def roll_chance(self, chance: float) -> bool:
        """
        Rzuca kością na szansę (0.0 - 1.0).

        Args:
            chance: Szansa na sukces (0.0 = 0%, 1.0 = 100%)

        Returns:
            bool: True jeśli sukces
        """
        return self.random() < chance

    def roll_consumption(self, consumption_chance: float) -> bool:
        """
        Sprawdza czy położenie kropki kosztuje kropkę z puli.

        Args:
            consumption_chance: 1.0 = zawsze kosztuje, 0.5 = co druga (średnio)

        Returns:
            bool: True jeśli kropka jest pobierana z puli

        Note:
            Dla consumption_chance >= 1.0 nie zużywa stanu RNG,
            więc sesja bez buffa nie przesuwa sekwencji losowości.
        """
        if consumption_chance >= 1.0:
            return True
        return self.roll_chance(consumption_chance)

    # ─────────────────────────────────────────────────────────────────────────
    # STAN
    # ─────────────────────────────────────────────────────────────────────────

    def get_state(self) -> tuple:
        """Zwraca aktualny stan RNG (do zapisania/odtworzenia)."""
        return self._rng.getstate()

    def set_state(self, state: tuple) -> None:
        """Ustawia stan RNG z get_state()."""
        self._rng.setstate(state)

    def __repr__(self) -> str:
        return f"GameRNG(seed={self.seed})"
