"""Tests for special events: definitions, progress and engine handling."""
import random

import pytest

from tycoon.action import (
    AdvanceDay,
    CheckSpecialEventsProgress,
    CompleteSpecialEvent,
    StartSpecialEvent,
    TriggerSeasonalEvents,
    UpdateSpecialEventProgress,
)
from tycoon.business import Business
from tycoon.engine import GameEngine
from tycoon.special_event import EventProgress, EventRequirements, BusinessCount
from tycoon.state import ERROR, INFO, SUCCESS, GameState

# 2023-11-14, in every timezone
NOW = 1_700_000_000.0


class _NoEventsRng(random.Random):
    def random(self) -> float:
        return 0.99


def _make_engine() -> GameEngine:
    return GameEngine(rng=_NoEventsRng(0), clock=lambda: NOW)


def _make_state(engine: GameEngine, **counts: int) -> GameState:
    state = engine.new_state()
    state.initialized = True
    for btype, n in counts.items():
        for i in range(n):
            state.businesses.append(
                Business(id=f"{btype}_{i}", type=btype, last_collected_day=0, purchased_on_day=0)
            )
    return state


def _start(engine: GameEngine, state: GameState, event_id: str) -> GameState:
    return engine.transition(state, StartSpecialEvent(event_id))


# ── Definitions ──────────────────────────────────────────────────────


def test_requirement_targets_skip_zero():
    reqs = EventRequirements(
        business_counts=(BusinessCount("retail_store", 3),),
        revenue_target=50000,
    )
    assert reqs.targets() == {"revenue": 50000}
    assert reqs.build().describe() == "retail_store >= 3 AND progress.revenue >= 50000"


def test_progress_get_and_add():
    progress = EventProgress()
    progress.add("green_investment", 10)
    progress.add("green_investment", 5)
    assert progress.get("green_investment") == 15
    with pytest.raises(KeyError):
        progress.get("vibes")


# ── Starting ─────────────────────────────────────────────────────────


def test_start_event():
    engine = _make_engine()
    state = _start(engine, _make_state(engine), "black_friday_rush")
    assert len(state.active_special_events) == 1
    event = state.active_special_events[0]
    assert event.id == "black_friday_rush"
    assert event.name == "Black Friday Rush"
    assert event.start_day == 1
    assert event.end_day == 6
    assert event.target_business_types == ("retail_store", "ecommerce_platform")
    assert state.notifications[-1].type == SUCCESS
    assert state.notifications[-1].message.startswith("Special Event Started: Black Friday Rush!")


def test_start_event_already_active():
    engine = _make_engine()
    state = _start(engine, _make_state(engine), "black_friday_rush")
    again = _start(engine, state, "black_friday_rush")
    assert len(again.active_special_events) == 1
    assert again.notifications[-1].type == INFO


def test_start_unknown_event():
    engine = _make_engine()
    state = _start(engine, _make_state(engine), "alien_invasion")
    assert state.active_special_events == []
    assert state.notifications[-1].message == "Event not found!"


# ── Progress ─────────────────────────────────────────────────────────


def test_update_progress():
    engine = _make_engine()
    state = _start(engine, _make_state(engine), "black_friday_rush")
    state = engine.transition(
        state, UpdateSpecialEventProgress("black_friday_rush", "revenue", 1200)
    )
    state = engine.transition(
        state, UpdateSpecialEventProgress("black_friday_rush", "revenue", 300)
    )
    assert state.active_special_events[0].progress.revenue == 1500


def test_update_progress_ignored_cases():
    engine = _make_engine()
    state = _start(engine, _make_state(engine), "black_friday_rush")
    assert engine.transition(
        state, UpdateSpecialEventProgress("black_friday_rush", "vibes", 5)
    ) is state
    assert engine.transition(
        state, UpdateSpecialEventProgress("food_festival_frenzy", "revenue", 5)
    ) is state
    assert engine.transition(
        state, UpdateSpecialEventProgress("black_friday_rush", "revenue", -5)
    ) is state


def test_check_without_events_returns_same_state():
    engine = _make_engine()
    state = _make_state(engine)
    assert engine.transition(state, CheckSpecialEventsProgress()) is state


def test_check_undecided_event_returns_same_state():
    engine = _make_engine()
    state = _start(engine, _make_state(engine, retail_store=1), "black_friday_rush")
    assert engine.transition(state, CheckSpecialEventsProgress()) is state


# ── Completion and expiry ────────────────────────────────────────────


def test_event_completes_with_rewards():
    engine = _make_engine()
    state = _start(engine, _make_state(engine, retail_store=3), "black_friday_rush")
    state = engine.transition(
        state, UpdateSpecialEventProgress("black_friday_rush", "revenue", 50000)
    )
    state = engine.transition(state, CheckSpecialEventsProgress())

    assert state.active_special_events == []
    assert state.money == 10000 + 25000
    assert [t.id for t in state.special_event_rewards] == ["premium_inventory"]
    token = state.special_event_rewards[0]
    assert token.type == "upgrade"
    assert token.from_event == "black_friday_rush"
    assert token.date_awarded == 1_700_000_000_000

    done = state.completed_special_events[0]
    assert done.completed_day == 1
    assert done.completed_year == 2023
    assert done.progress.completed is True

    messages = [n.message for n in state.notifications]
    assert "Congratulations! You completed the Black Friday Rush challenge!" in messages
    assert messages[-1].startswith("Rewards earned: Cash Bonus: $25,000, Premium Inventory")


def test_experience_reward():
    engine = _make_engine()
    state = _make_state(engine, tech_startup=2, mobile_app_studio=1)
    state = _start(engine, state, "tech_innovation_expo")
    state = engine.transition(
        state, UpdateSpecialEventProgress("tech_innovation_expo", "investment", 200000)
    )
    state = engine.transition(state, CheckSpecialEventsProgress())
    assert state.experience == 5000
    assert state.money == 10000 + 100000


def test_event_expires():
    engine = _make_engine()
    state = _start(engine, _make_state(engine), "black_friday_rush")
    for _ in range(5):
        state = engine.transition(state, AdvanceDay())
    assert state.day == 6
    assert engine.transition(state, CheckSpecialEventsProgress()) is state

    state = engine.transition(state, AdvanceDay())
    state = engine.transition(state, CheckSpecialEventsProgress())
    assert state.active_special_events == []
    assert state.completed_special_events == []
    assert state.notifications[-1].message == (
        "The Black Friday Rush special event has ended without completion."
    )


def test_expired_event_does_not_complete():
    engine = _make_engine()
    state = _start(engine, _make_state(engine, retail_store=3), "black_friday_rush")
    state = engine.transition(
        state, UpdateSpecialEventProgress("black_friday_rush", "revenue", 50000)
    )
    state.day = 7
    state = engine.transition(state, CheckSpecialEventsProgress())
    assert state.completed_special_events == []
    assert state.money == 10000


def test_complete_special_event_directly():
    engine = _make_engine()
    state = _start(engine, _make_state(engine), "real_estate_boom")
    state = engine.transition(state, CompleteSpecialEvent("real_estate_boom"))
    assert state.money == 10000 + 80000
    assert state.completed_special_events[0].id == "real_estate_boom"


def test_complete_inactive_event():
    engine = _make_engine()
    state = engine.transition(_make_state(engine), CompleteSpecialEvent("real_estate_boom"))
    assert state.notifications[-1].type == ERROR
    assert state.notifications[-1].message == "Event not found or already completed!"


# ── Seasonal triggers ────────────────────────────────────────────────


def test_seasonal_trigger():
    engine = _make_engine()
    state = engine.transition(_make_state(engine), TriggerSeasonalEvents(month=11, year=2024))
    assert [e.id for e in state.active_special_events] == ["black_friday_rush"]

    again = engine.transition(state, TriggerSeasonalEvents(month=11, year=2024))
    assert again is state


def test_seasonal_trigger_no_match():
    engine = _make_engine()
    state = _make_state(engine)
    assert engine.transition(state, TriggerSeasonalEvents(month=2, year=2024)) is state


def test_seasonal_trigger_once_per_year():
    engine = _make_engine()
    state = _start(engine, _make_state(engine), "black_friday_rush")
    state = engine.transition(state, CompleteSpecialEvent("black_friday_rush"))
    assert state.completed_special_events[0].completed_year == 2023

    assert engine.transition(state, TriggerSeasonalEvents(month=11, year=2023)) is state
    next_year = engine.transition(state, TriggerSeasonalEvents(month=11, year=2024))
    assert [e.id for e in next_year.active_special_events] == ["black_friday_rush"]
