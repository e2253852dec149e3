"""
Testy dla CraftingLog.

Testuje:
- Numerację seq
- Serializację zdarzeń (to_dict, to_json, save)
- Filtry
- Przebieg zdarzeń pełnej sesji
"""

import json

import pytest

from dotcraft.crafting.recipe import Recipe, RecipeCatalog
from dotcraft.crafting.session import CraftingSession
from dotcraft.events.event_logger import CraftEvent, CraftingLog, EventType


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def log() -> CraftingLog:
    return CraftingLog(grid_size=5, initial_pool=3)


# ═══════════════════════════════════════════════════════════════════════════
# LOG
# ═══════════════════════════════════════════════════════════════════════════

def test_seq_is_monotonic(log):
    log.log_place(0, 0, pool_after=2)
    log.log_remove(0, 0, refunded=1, pool_after=3)
    log.log_place_rejected(1, 1)

    assert [e.seq for e in log.events] == [0, 1, 2]


def test_event_to_dict_omits_empty_fields():
    event = CraftEvent(seq=4, event_type=EventType.CRAFT_REFUNDED)
    assert event.to_dict() == {"seq": 4, "type": "CRAFT_REFUNDED"}


def test_crafted_event(log):
    log.log_crafted("spear", 1, 2, consumed=4)
    assert log.events[0].to_dict() == {
        "seq": 0,
        "type": "WEAPON_CRAFTED",
        "recipe_id": "spear",
        "data": {"anchor": [1, 2], "consumed": 4},
    }


def test_free_place_has_own_type(log):
    log.log_place(0, 0, pool_after=3, free=True)
    assert log.events[0].event_type == EventType.DOT_PLACED_FREE


def test_filters(log):
    log.log_credit(2, pool_after=5)
    log.log_impure_match("spear", 0, 0, required=4, on_grid=5)
    log.log_refund(5, pool_after=10)

    assert len(log.get_events_by_type(EventType.POOL_CREDITED)) == 1
    assert [e.seq for e in log.get_events_for_recipe("spear")] == [1]
    assert log.get_last_event().event_type == EventType.CRAFT_REFUNDED
    assert log.get_event_count() == 3


def test_to_json_roundtrip(log):
    log.log_credit(1, pool_after=4, source="room_reward")
    data = json.loads(log.to_json())

    assert data["metadata"]["grid"] == {"size": 5}
    assert data["metadata"]["initial_pool"] == 3
    assert data["events"][0]["data"]["source"] == "room_reward"


def test_save_creates_directories(log, tmp_path):
    log.log_place(2, 2, pool_after=2)
    path = tmp_path / "nested" / "log.json"
    log.save(str(path))

    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved["events"][0]["type"] == "DOT_PLACED"


# ═══════════════════════════════════════════════════════════════════════════
# SESSION FLOW
# ═══════════════════════════════════════════════════════════════════════════

def test_session_event_flow():
    """Pełna sesja zostawia czytelny ślad zdarzeń."""
    catalog = RecipeCatalog([Recipe("pair", shape=((0, 0), (1, 0)))])
    session = CraftingSession(catalog, initial_dots=2)

    session.toggle_cell(0, 0)
    session.toggle_cell(1, 0)
    session.confirm()
    session.credit_pool(1, source="pickup")

    types = [e.event_type for e in session.event_log.events]
    assert types == [
        EventType.SESSION_START,
        EventType.DOT_PLACED,
        EventType.DOT_PLACED,
        EventType.WEAPON_CRAFTED,
        EventType.POOL_CREDITED,
    ]
    assert session.event_log.events[0].data["recipes"] == ["pair"]
