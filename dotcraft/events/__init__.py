"""
Events module - logowanie zdarzeń sesji do formatu JSON.

Zawiera:
- CraftEvent: Dataclass reprezentująca zdarzenie
- EventType: Enum typów zdarzeń
- CraftingLog: Klasa logująca zdarzenia
"""

from .event_logger import CraftEvent, EventType, CraftingLog

__all__ = ["CraftEvent", "EventType", "CraftingLog"]
