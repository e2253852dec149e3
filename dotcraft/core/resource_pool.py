"""
Pula zasobów (ResourcePool) - licznik kropek do wydania.

Kropki (dots) są walutą panelu składania:
- gracz zbiera je z pickupów i zniszczonych broni
- każda kropka położona na siatce jest pobierana z puli
- cofnięcie kropki lub nieudane składanie zwraca ją do puli

Niezmiennik:
    count >= 0 zawsze.
    count + zajęte pola siatki jest stałe dla każdej sekwencji
    operacji, która nie przechodzi przez udane składanie broni.
"""

from __future__ import annotations


class ResourcePool:
    """
    Nieujemny licznik kropek.

    Attributes:
        count (int): Aktualna liczba kropek do wydania

    Example:
        >>> pool = ResourcePool(2)
        >>> pool.withdraw()
        True
        >>> pool.withdraw(5)  # za mało - brak zmian
        False
        >>> pool.count
        1
    """

    def __init__(self, initial: int = 0):
        """
        Args:
            initial: Początkowa liczba kropek

        Raises:
            ValueError: Jeśli initial < 0
        """
        if initial < 0:
            raise ValueError(f"Initial pool count must be >= 0, got {initial}")
        self.count = initial

    def deposit(self, amount: int = 1) -> int:
        """
        Dodaje kropki do puli (zwrot z siatki).

        Args:
            amount: Ile kropek dodać

        Returns:
            int: Nowy stan puli

        Raises:
            ValueError: Jeśli amount < 0
        """
        if amount < 0:
            raise ValueError(f"amount must be >= 0, got {amount}")
        self.count += amount
        return self.count

    def withdraw(self, amount: int = 1) -> bool:
        """
        Warunkowo pobiera kropki z puli.

        Returns:
            bool: True jeśli pobrano, False jeśli za mało (bez zmian)
        """
        if amount < 0:
            raise ValueError(f"amount must be >= 0, got {amount}")
        if self.count < amount:
            return False
        self.count -= amount
        return True

    def credit(self, amount: int) -> bool:
        """
        Zasilenie puli z zewnątrz (pickup, nagroda, zniszczona broń).

        W odróżnieniu od deposit() niedodatnia wartość nie jest
        błędem programisty, tylko odrzuconym żądaniem.

        Returns:
            bool: False dla amount <= 0 (bez zmian)
        """
        if amount <= 0:
            return False
        self.count += amount
        return True

    def has(self, amount: int = 1) -> bool:
        """Czy w puli jest co najmniej amount kropek."""
        return self.count >= amount

    def __repr__(self) -> str:
        return f"ResourcePool(count={self.count})"
