"""
Loader konfiguracji z automatycznym uzupełnianiem wartości domyślnych.

System data-driven wczytuje definicje z plików YAML:
- defaults.yaml: ustawienia panelu składania + domyślne staty broni
- recipes.yaml: katalog receptur (kształty + dane broni)

Logika merge (uzupełniania defaults):
    1. Wczytaj weapon_defaults z defaults.yaml
    2. Wczytaj konkretną recepturę (np. "spear")
    3. Dla każdego klucza w defaults, którego brak w recepturze:
       - Użyj wartości z defaults
    4. Receptura może nadpisać defaults

Przykład:
    defaults.yaml:
        crafting:
            grid_size: 5
            initial_dots: 10
        weapon_defaults:
            base_damage: 10
            max_durability: 20

    recipes.yaml:
        recipes:
          - id: spear
            shape: [[0, 0], [1, 0], [2, 0]]
            base_damage: 14   # nadpisuje default
            # max_durability nie podane -> 20 z defaults

Kolejność receptur:
    recipes.yaml trzyma receptury jako LISTĘ, nie mapę - kolejność
    w pliku to kolejność w katalogu, a ta rozstrzyga remisy przy
    dopasowaniu.

Użycie:
    >>> loader = ConfigLoader("data/")
    >>> spear = loader.load_recipe("spear")
    >>> spear["max_durability"]  # z defaults
    20
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, List, Optional
import yaml
import copy


class ConfigLoader:
    """
    Ładuje konfigurację z plików YAML z automatycznym merge defaults.

    Attributes:
        data_path (Path): Ścieżka do folderu data/
        _defaults (Dict): Cache wczytanych defaults
        _recipes (List): Cache surowych receptur (w kolejności z pliku)
    """

    def __init__(self, data_path: str = "data/"):
        """
        Args:
            data_path: Ścieżka do folderu z plikami YAML
        """
        self.data_path = Path(data_path)
        self._defaults: Optional[Dict] = None
        self._recipes: Optional[List[Dict]] = None

    # ─────────────────────────────────────────────────────────────────────────
    # WCZYTYWANIE PLIKÓW
    # ─────────────────────────────────────────────────────────────────────────

    def _load_yaml(self, filename: str) -> Dict:
        """
        Wczytuje plik YAML.

        Raises:
            FileNotFoundError: Jeśli plik nie istnieje
        """
        filepath = self.data_path / filename
        with open(filepath, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}

    def get_defaults(self) -> Dict:
        """Zwraca zawartość defaults.yaml (cache'owane)."""
        if self._defaults is None:
            self._defaults = self._load_yaml("defaults.yaml")
        return self._defaults

    def get_crafting_config(self) -> Dict:
        """
        Zwraca ustawienia panelu składania.

        Returns:
            Dict: grid_size, initial_dots, consumption_chance, seed
        """
        return self.get_defaults().get("crafting", {})

    def get_weapon_defaults(self) -> Dict:
        """Zwraca domyślne staty broni (sekcja weapon_defaults)."""
        return self.get_defaults().get("weapon_defaults", {})

    # ─────────────────────────────────────────────────────────────────────────
    # ŁADOWANIE RECEPTUR
    # ─────────────────────────────────────────────────────────────────────────

    def _get_all_recipes_raw(self) -> List[Dict]:
        """Zwraca surowe definicje receptur w kolejności z pliku."""
        if self._recipes is None:
            data = self._load_yaml("recipes.yaml")
            recipes = data.get("recipes", [])
            if not isinstance(recipes, list):
                raise ValueError("recipes.yaml: 'recipes' must be a list")
            self._recipes = recipes
        return self._recipes

    def _merge_recipe(self, raw: Dict) -> Dict:
        """Zwraca recepturę z uzupełnionymi weapon_defaults."""
        result = self._deep_merge(self.get_weapon_defaults(), raw)
        # Nazwa domyślnie = id
        result.setdefault("name", result.get("id"))
        return result

    def load_recipe(self, recipe_id: str) -> Dict:
        """
        Wczytuje definicję receptury z uzupełnionymi defaults.

        Args:
            recipe_id: ID receptury (pole `id` w recipes.yaml)

        Returns:
            Dict: Pełna definicja receptury

        Raises:
            KeyError: Jeśli receptura nie istnieje
        """
        for raw in self._get_all_recipes_raw():
            if raw.get("id") == recipe_id:
                return self._merge_recipe(raw)
        raise KeyError(f"Recipe '{recipe_id}' not found in recipes.yaml")

    def load_all_recipes(self) -> List[Dict]:
        """
        Wczytuje wszystkie receptury.

        Returns:
            List[Dict]: Definicje w kolejności katalogu
        """
        return [self._merge_recipe(raw) for raw in self._get_all_recipes_raw()]

    def get_recipe_ids(self) -> list[str]:
        """Zwraca listę ID receptur w kolejności katalogu."""
        return [raw.get("id") for raw in self._get_all_recipes_raw()]

    # ─────────────────────────────────────────────────────────────────────────
    # HELPERY
    # ─────────────────────────────────────────────────────────────────────────

    @staticmethod
    def _deep_merge(base: Dict, override: Dict) -> Dict:
        """
        Głęboko łączy dwa słowniki.

        Override nadpisuje wartości w base.
        Nested dicts są merge'owane rekurencyjnie.
        """
        result = copy.deepcopy(base)

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = ConfigLoader._deep_merge(result[key], value)
            else:
                result[key] = copy.deepcopy(value)

        return result

    def reload(self) -> None:
        """
        Czyści cache i wymusza ponowne wczytanie plików.

        Przydatne podczas edycji plików YAML w runtime.
        """
        self._defaults = None
        self._recipes = None
