"""Tests for engine module."""
import random
from dataclasses import replace

import pytest

from tycoon.action import (
    Action,
    AddNotification,
    AdvanceDay,
    ClearAllNotifications,
    ClearNotification,
    CloseTutorial,
    CollectAllRevenue,
    CollectRevenue,
    HireStaff,
    InitializeGame,
    LoadSavedGame,
    PurchaseBusiness,
    PurchaseUpgrade,
    ResetGame,
    SellBusiness,
)
from tycoon.business import Business, BusinessDef
from tycoon.codec import state_to_dict
from tycoon.content import define_catalog
from tycoon.definition import Catalog, GameConfig
from tycoon.effect import Effect, EffectType
from tycoon.engine import GAME_OVER_MESSAGE, GameEngine, transition
from tycoon.state import ERROR, INFO, SUCCESS, GameState

NOW = 1_700_000_000.0


class _FixedRng(random.Random):
    """Every draw returns the same value."""

    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


def _make_engine(roll: float = 0.99, **config) -> GameEngine:
    """Stock catalog, no market events unless *roll* says so, frozen clock."""
    return GameEngine(config=GameConfig(**config), rng=_FixedRng(roll), clock=lambda: NOW)


def _make_state(engine: GameEngine, money: int | None = None) -> GameState:
    state = engine.transition(engine.new_state(), InitializeGame())
    state.notifications = []
    if money is not None:
        state.money = money
    return state


def _last(state: GameState):
    return state.notifications[-1]


# ── Purchase ─────────────────────────────────────────────────────────


def test_purchase_coffee_shop():
    engine = _make_engine()
    state = _make_state(engine)
    new = engine.transition(state, PurchaseBusiness("coffee_shop"))

    assert new.money == 5000
    assert len(new.businesses) == 1
    shop = new.businesses[0]
    assert shop.type == "coffee_shop"
    assert shop.level == 1
    assert shop.purchased_on_day == 1
    assert shop.last_collected_day == 1
    assert shop.id == "coffee_shop_1700000000000"
    assert _last(new).type == SUCCESS
    assert _last(new).message == "Purchased a new Coffee Shop!"


def test_transition_does_not_mutate_input():
    engine = _make_engine()
    state = _make_state(engine)
    engine.transition(state, PurchaseBusiness("coffee_shop"))
    assert state.money == 10000
    assert state.businesses == []
    assert state.notifications == []


def test_purchase_insufficient_funds():
    engine = _make_engine()
    state = _make_state(engine, money=1000)
    new = engine.transition(state, PurchaseBusiness("coffee_shop"))
    assert new.money == 1000
    assert new.businesses == []
    assert _last(new).type == ERROR
    assert _last(new).message == "Not enough money to purchase this business!"


def test_purchase_unknown_business():
    engine = _make_engine()
    new = engine.transition(_make_state(engine), PurchaseBusiness("moon_base"))
    assert new.businesses == []
    assert _last(new).type == ERROR


def test_purchase_ids_unique_within_same_millisecond():
    engine = _make_engine()
    state = _make_state(engine, money=20000)
    state = engine.transition(state, PurchaseBusiness("coffee_shop"))
    state = engine.transition(state, PurchaseBusiness("coffee_shop"))
    ids = [b.id for b in state.businesses]
    assert ids == ["coffee_shop_1700000000000", "coffee_shop_1700000000000_2"]


def test_locked_business_allowed_by_default():
    engine = _make_engine()
    new = engine.transition(_make_state(engine, money=100000), PurchaseBusiness("restaurant"))
    assert len(new.businesses) == 1


def test_enforce_unlocks():
    engine = _make_engine(enforce_unlocks=True)
    new = engine.transition(_make_state(engine, money=100000), PurchaseBusiness("restaurant"))
    assert new.businesses == []
    assert _last(new).message == "Restaurant unlocks at level 3!"


# ── Collection ───────────────────────────────────────────────────────


def test_same_day_collection_refused():
    engine = _make_engine()
    state = engine.transition(_make_state(engine), PurchaseBusiness("coffee_shop"))
    new = engine.transition(state, CollectRevenue(state.businesses[0].id))
    assert new.money == 5000
    assert _last(new).type == ERROR
    assert "just purchased today" in _last(new).message


def test_collect_next_day():
    engine = _make_engine()
    state = engine.transition(_make_state(engine), PurchaseBusiness("coffee_shop"))
    state = engine.transition(state, AdvanceDay())
    assert state.day == 2
    assert state.money == 5000

    new = engine.transition(state, CollectRevenue(state.businesses[0].id))
    assert new.money == 5500
    assert new.stats.total_revenue == 500
    assert new.businesses[0].last_collected_day == 2
    assert _last(new).type == INFO
    assert _last(new).message == "Collected $500 from Coffee Shop!"


def test_collect_twice_same_day_refused():
    engine = _make_engine()
    state = engine.transition(_make_state(engine), PurchaseBusiness("coffee_shop"))
    state = engine.transition(state, AdvanceDay())
    business_id = state.businesses[0].id
    state = engine.transition(state, CollectRevenue(business_id))
    new = engine.transition(state, CollectRevenue(business_id))
    assert new.money == 5500
    assert _last(new).message == "You've already collected revenue from this business today!"


def test_collect_unknown_business():
    engine = _make_engine()
    new = engine.transition(_make_state(engine), CollectRevenue("nope"))
    assert _last(new).message == "Business not found!"


def test_collect_all_without_businesses():
    engine = _make_engine()
    new = engine.transition(_make_state(engine), CollectAllRevenue())
    assert _last(new).type == ERROR


def test_collect_all_nothing_eligible_is_info():
    engine = _make_engine()
    state = engine.transition(_make_state(engine), PurchaseBusiness("coffee_shop"))
    new = engine.transition(state, CollectAllRevenue())
    assert new.money == state.money
    assert _last(new).type == INFO


def test_collect_all():
    engine = _make_engine()
    state = _make_state(engine, money=20000)
    state = engine.transition(state, PurchaseBusiness("coffee_shop"))
    state = engine.transition(state, PurchaseBusiness("coffee_shop"))
    state = engine.transition(state, AdvanceDay())
    new = engine.transition(state, CollectAllRevenue())
    assert new.money == state.money + 1000
    assert new.stats.total_revenue == 1000
    assert all(b.last_collected_day == 2 for b in new.businesses)
    assert _last(new).message == "Collected $1000 from 2 businesses!"
    assert new.collectable_businesses() == []


# ── Revenue multipliers ──────────────────────────────────────────────


def _owned_shop_state(engine: GameEngine, money: int = 100000) -> GameState:
    state = _make_state(engine, money=money)
    state.businesses.append(
        Business(id="shop", type="coffee_shop", last_collected_day=0, purchased_on_day=0)
    )
    return state


def test_revenue_staff_effects():
    engine = _make_engine()
    state = _owned_shop_state(engine)
    state = engine.transition(state, HireStaff("marketer"))
    state = engine.transition(state, HireStaff("consultant"))
    state = engine.transition(state, HireStaff("manager"))
    # marketer +0.15, consultant +0.05; efficiency does not touch revenue
    assert engine.compute_revenue(state, state.businesses[0]) == 600


def test_revenue_upgrade_effect():
    engine = _make_engine()
    state = engine.transition(_owned_shop_state(engine), PurchaseUpgrade("marketing", "shop"))
    assert engine.compute_revenue(state, state.businesses[0]) == 625

    state = engine.transition(state, PurchaseUpgrade("automation", "shop"))
    assert engine.compute_revenue(state, state.businesses[0]) == 625


def _boosted_catalog() -> Catalog:
    """Stock catalog where the marketer and equipment are worth +100% each."""
    stock = define_catalog()
    return Catalog(
        businesses=stock.businesses,
        staff=[
            replace(s, effect=Effect.revenue(1.0)) if s.id == "marketer" else s
            for s in stock.staff
        ],
        upgrades=[
            replace(u, effect=Effect(EffectType.PRODUCTIVITY, 1.0)) if u.id == "equipment" else u
            for u in stock.upgrades
        ],
        market_events=stock.market_events,
        special_events=stock.special_events,
    )


def test_acquired_effects_are_snapshots():
    engine = _make_engine()
    state = engine.transition(_owned_shop_state(engine), HireStaff("marketer"))
    state = engine.transition(state, PurchaseUpgrade("equipment", "shop"))

    boosted = GameEngine(_boosted_catalog(), rng=_FixedRng(0.99), clock=lambda: NOW)
    collected = boosted.transition(state, CollectRevenue("shop"))
    # marketer +0.15 and equipment +0.2 as they were when acquired
    assert collected.money - state.money == 675

    fresh = boosted.transition(_owned_shop_state(boosted), HireStaff("marketer"))
    fresh = boosted.transition(fresh, PurchaseUpgrade("equipment", "shop"))
    assert boosted.compute_revenue(fresh, fresh.businesses[0]) == 1500


def test_revenue_market_event():
    engine = _make_engine(roll=0.05)
    state = engine.transition(_owned_shop_state(engine), AdvanceDay())
    assert [m.type for m in state.market_events] == ["economic_boom"]
    assert engine.compute_revenue(state, state.businesses[0]) == 650


# ── Staff and upgrades ───────────────────────────────────────────────


def test_hire_manager_and_pay_salary():
    engine = _make_engine()
    state = engine.transition(_make_state(engine), HireStaff("manager"))
    assert state.money == 7000
    assert state.stats.total_expenses == 3000
    assert state.staff[0].salary == 1000
    assert state.staff[0].hired_at == NOW

    state = engine.transition(state, AdvanceDay())
    assert state.money == 6000
    assert state.stats.total_expenses == 4000


def test_hire_insufficient_funds():
    engine = _make_engine()
    new = engine.transition(_make_state(engine, money=2999), HireStaff("manager"))
    assert new.staff == []
    assert _last(new).message == "Not enough money to hire this staff member!"


def test_duplicate_staff_allowed_by_default():
    engine = _make_engine()
    state = _make_state(engine, money=100000)
    state = engine.transition(state, HireStaff("manager"))
    state = engine.transition(state, HireStaff("manager"))
    assert len(state.staff) == 2
    assert state.staff[0].id != state.staff[1].id


def test_enforce_unique_staff():
    engine = _make_engine(enforce_unique_staff=True)
    state = _make_state(engine, money=100000)
    state = engine.transition(state, HireStaff("manager"))
    state = engine.transition(state, HireStaff("manager"))
    assert len(state.staff) == 1
    assert _last(state).type == ERROR


def test_purchase_upgrade():
    engine = _make_engine()
    state = engine.transition(_owned_shop_state(engine, money=6000), PurchaseUpgrade("equipment", "shop"))
    assert state.money == 1000
    assert state.stats.total_expenses == 5000
    assert [u.type for u in state.businesses[0].upgrades] == ["equipment"]
    assert _last(state).message == "Purchased Better Equipment upgrade!"


def test_purchase_upgrade_errors():
    engine = _make_engine()
    state = _owned_shop_state(engine, money=100)
    assert _last(engine.transition(state, PurchaseUpgrade("equipment", "shop"))).message == (
        "Not enough money for this upgrade!"
    )
    assert _last(engine.transition(state, PurchaseUpgrade("equipment", "x"))).message == (
        "Business not found!"
    )
    assert _last(engine.transition(state, PurchaseUpgrade("laser", "shop"))).type == ERROR


def test_enforce_unique_upgrades():
    engine = _make_engine(enforce_unique_upgrades=True)
    state = engine.transition(_owned_shop_state(engine), PurchaseUpgrade("training", "shop"))
    state = engine.transition(state, PurchaseUpgrade("training", "shop"))
    assert len(state.businesses[0].upgrades) == 1


# ── Selling ──────────────────────────────────────────────────────────


def test_sell_business_includes_upgrades():
    engine = _make_engine()
    state = engine.transition(_owned_shop_state(engine, money=5000), PurchaseUpgrade("equipment", "shop"))
    assert state.money == 0
    assert engine.sell_value(state.businesses[0]) == 10000

    state = engine.transition(state, SellBusiness("shop"))
    assert state.money == 10000
    assert state.businesses == []
    assert _last(state).message == "Sold Coffee Shop for $10000!"


def test_sell_unknown_business():
    engine = _make_engine()
    new = engine.transition(_make_state(engine), SellBusiness("ghost"))
    assert _last(new).message == "Business not found!"


# ── Advancing days ───────────────────────────────────────────────────


def test_day_increments_by_one():
    engine = _make_engine()
    state = engine.transition(_make_state(engine), PurchaseBusiness("coffee_shop"))
    for expected in range(2, 12):
        state = engine.transition(state, AdvanceDay())
        assert state.day == expected


def test_experience_only_with_businesses():
    engine = _make_engine()
    state = engine.transition(_make_state(engine), AdvanceDay())
    assert state.experience == 0

    state = engine.transition(state, PurchaseBusiness("coffee_shop"))
    state = engine.transition(state, AdvanceDay())
    assert state.experience == 150


def test_level_up():
    engine = _make_engine()
    state = _owned_shop_state(engine)
    state.experience = 990
    state = engine.transition(state, AdvanceDay())
    assert state.level == 2
    assert state.experience == 140
    assert state.experience_to_next_level == 1500


def test_multiple_level_ups_in_one_day():
    engine = _make_engine()
    state = _owned_shop_state(engine)
    state.experience = 3000
    state = engine.transition(state, AdvanceDay())
    assert state.level == 3
    assert state.experience == 650
    assert state.experience_to_next_level == 2250


def test_advance_day_keeps_only_error_notifications():
    engine = _make_engine()
    state = _owned_shop_state(engine)
    state = engine.transition(state, AddNotification(INFO, "hello"))
    state = engine.transition(state, AddNotification(ERROR, "broken"))
    state = engine.transition(state, AdvanceDay())
    assert [n.message for n in state.notifications] == ["broken"]


def test_net_worth_updated():
    engine = _make_engine()
    state = engine.transition(_make_state(engine), PurchaseBusiness("coffee_shop"))
    state = engine.transition(state, AdvanceDay())
    assert state.stats.net_worth == 10000


# ── Market events ────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "roll, expected",
    [
        (0.0, ["economic_boom"]),
        (0.1, ["economic_boom"]),
        (0.12, ["tax_cut"]),
        (0.2, ["new_trend"]),
        (0.5, []),
    ],
)
def test_market_roll(roll, expected):
    engine = _make_engine(roll=roll)
    state = engine.transition(_owned_shop_state(engine), AdvanceDay())
    assert [m.type for m in state.market_events] == expected


def test_market_event_lifecycle():
    engine = _make_engine(roll=0.05)
    state = engine.transition(_owned_shop_state(engine), AdvanceDay())
    boom = state.market_events[0]
    assert boom.active
    assert boom.remaining_days == 5
    assert boom.started_at == 1
    assert boom.name == "Economic Boom"

    engine.rng = _FixedRng(0.99)
    for _ in range(4):
        state = engine.transition(state, AdvanceDay())
    assert state.market_events[0].remaining_days == 1
    assert state.market_events[0].active

    state = engine.transition(state, AdvanceDay())
    assert state.market_events[0].active is False
    assert state.market_events[0].remaining_days == 0

    state = engine.transition(state, AdvanceDay())
    assert state.market_events == []


# ── Bankruptcy ───────────────────────────────────────────────────────


def test_bankruptcy_without_businesses():
    engine = _make_engine(roll=0.0)
    state = _make_state(engine, money=-1)
    state = engine.transition(state, AdvanceDay())
    assert state.game_over is True
    assert state.market_events == []
    assert len(state.notifications) == 1
    assert state.notifications[0].type == ERROR
    assert state.notifications[0].message == GAME_OVER_MESSAGE
    assert state.day == 2


def test_salaries_can_bankrupt():
    engine = _make_engine()
    state = _make_state(engine, money=3000)
    state = engine.transition(state, HireStaff("manager"))
    assert state.money == 0
    state = engine.transition(state, AdvanceDay())
    assert state.money == -1000
    assert state.game_over


def test_negative_money_covered_by_businesses_is_not_bankrupt():
    engine = _make_engine()
    state = _owned_shop_state(engine, money=-1000)
    state = engine.transition(state, AdvanceDay())
    assert state.game_over is False


def test_game_over_is_terminal():
    engine = _make_engine()
    state = engine.transition(_make_state(engine, money=-1), AdvanceDay())
    assert state.game_over

    refused = engine.transition(state, PurchaseBusiness("coffee_shop"))
    assert refused.businesses == []
    assert refused.money == -1
    assert refused.game_over
    assert _last(refused).type == ERROR

    later = engine.transition(state, AdvanceDay())
    assert later.game_over
    assert later.day == state.day + 1
    assert later.money == state.money
    assert later.notifications == state.notifications


# ── Lifecycle and notifications ──────────────────────────────────────


def test_initialize_fresh():
    engine = _make_engine()
    state = engine.transition(engine.new_state(), InitializeGame(show_tutorial=False))
    assert state.initialized
    assert state.money == 10000
    assert state.day == 1
    assert state.experience_to_next_level == 1000
    assert state.show_tutorial is False


def test_initialize_from_saved_document():
    engine = _make_engine()
    saved = _make_state(engine, money=42)
    saved.day = 9
    state = engine.transition(engine.new_state(), InitializeGame(saved=state_to_dict(saved)))
    assert state.money == 42
    assert state.day == 9
    assert state.initialized


def test_initialize_malformed_document_starts_fresh():
    engine = _make_engine()
    state = engine.transition(engine.new_state(), InitializeGame(saved="{not json"))
    assert state.money == 10000
    assert state.initialized


@pytest.mark.parametrize(
    "saved",
    ['{"money": NaN, "day": 1}', '{"money": 1e400, "day": 1}', "[" * 100000],
)
def test_initialize_non_finite_or_nested_document_starts_fresh(saved):
    engine = _make_engine()
    state = engine.transition(engine.new_state(), InitializeGame(saved=saved))
    assert state.money == 10000
    assert state.day == 1
    assert state.initialized


def test_load_saved_game_reids_market_events():
    engine = _make_engine(roll=0.05)
    saved = engine.transition(_owned_shop_state(engine), AdvanceDay())
    old_id = saved.market_events[0].id

    current = _make_state(engine)
    current = engine.transition(current, AddNotification(INFO, "before load"))
    loaded = engine.transition(current, LoadSavedGame(saved=state_to_dict(saved)))

    new_id = loaded.market_events[0].id
    assert new_id != old_id
    assert new_id.startswith("economic_boom_1700000000000_")
    assert len(new_id.rsplit("_", 1)[1]) == 9
    assert [n.message for n in loaded.notifications] == [
        "before load",
        "Game loaded successfully!",
    ]
    assert loaded.day == saved.day


def test_load_saved_game_unreadable():
    engine = _make_engine()
    state = _make_state(engine)
    new = engine.transition(state, LoadSavedGame(saved={"money": "lots"}))
    assert new.money == state.money
    assert _last(new).type == ERROR


def test_reset_game():
    engine = _make_engine()
    state = engine.transition(_make_state(engine), PurchaseBusiness("coffee_shop"))
    state = engine.transition(state, ResetGame(show_tutorial=False))
    assert state.money == 10000
    assert state.businesses == []
    assert state.initialized is False
    assert state.show_tutorial is False


def test_notification_ids_and_clearing():
    engine = _make_engine()
    state = _make_state(engine)
    state = engine.transition(state, AddNotification(INFO, "a"))
    state = engine.transition(state, AddNotification(INFO, "b"))
    assert [n.id for n in state.notifications] == [1, 2]

    state = engine.transition(state, ClearNotification(1))
    assert [n.message for n in state.notifications] == ["b"]
    state = engine.transition(state, AddNotification(INFO, "c"))
    assert [n.id for n in state.notifications] == [2, 3]

    state = engine.transition(state, ClearAllNotifications())
    assert state.notifications == []


def test_close_tutorial():
    engine = _make_engine()
    state = engine.transition(_make_state(engine), CloseTutorial())
    assert state.show_tutorial is False


# ── Engine construction ──────────────────────────────────────────────


def test_invalid_catalog_rejected():
    catalog = Catalog(businesses=[BusinessDef("free_lunch", base_price=0)])
    with pytest.raises(ValueError, match="Invalid Catalog"):
        GameEngine(catalog=catalog)


def test_unsupported_action():
    engine = _make_engine()
    with pytest.raises(TypeError):
        engine.transition(_make_state(engine), Action())


def test_module_level_transition_uses_stock_catalog():
    state = GameState.fresh(GameConfig())
    new = transition(state, PurchaseBusiness("coffee_shop"))
    assert new.money == 5000


def test_hiring_cost():
    engine = _make_engine()
    assert engine.hiring_cost("consultant") == 6000
    assert engine.hiring_cost("wizard") is None
