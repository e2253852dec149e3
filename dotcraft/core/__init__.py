"""
Core module - podstawowe komponenty panelu składania.

Zawiera:
- GridCoord: Współrzędne (x, y) i offsety kształtów
- DotGrid: Siatka N x N z zajętością pól
- ResourcePool: Licznik kropek do wydania
- GameRNG: Deterministyczny generator losowości
- ConfigLoader: Wczytywanie konfiguracji z defaults
"""

from .grid_coord import GridCoord
from .dot_grid import DotGrid, DEFAULT_GRID_SIZE
from .resource_pool import ResourcePool
from .rng import GameRNG
from .config_loader import ConfigLoader

__all__ = [
    "GridCoord", "DotGrid", "DEFAULT_GRID_SIZE", "ResourcePool",
    "GameRNG", "ConfigLoader",
]
