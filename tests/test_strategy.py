"""Tests for strategy module."""
from tycoon.action import CollectAllRevenue, HireStaff, PurchaseBusiness
from tycoon.business import Business, BusinessDef
from tycoon.definition import Catalog, GameConfig
from tycoon.engine import GameEngine
from tycoon.state import GameState
from tycoon.strategy import (
    STRATEGY_REGISTRY,
    CustomStrategy,
    GreedyCheapest,
    GreedyROI,
    PriorityList,
)


def _mall_engine(**config) -> GameEngine:
    catalog = Catalog(
        businesses=[
            BusinessDef("kiosk", "Kiosk", 100, 1, unlock_level=2),
            BusinessDef("mall", "Mall", 1000, 200),
        ]
    )
    return GameEngine(catalog, GameConfig(**config))


def _make_state(engine: GameEngine, money: int, *owned: str, day: int = 1) -> GameState:
    state = engine.new_state()
    state.money = money
    state.day = day
    for i, btype in enumerate(owned):
        state.businesses.append(
            Business(id=f"{btype}_{i}", type=btype, last_collected_day=day, purchased_on_day=1)
        )
    return state


def test_greedy_cheapest_buys_cheapest():
    engine = _mall_engine()
    assert GreedyCheapest().next_action(_make_state(engine, 5000), engine) == PurchaseBusiness("kiosk")


def test_greedy_cheapest_respects_reserve():
    engine = GameEngine()
    strategy = GreedyCheapest(reserve=6000)
    assert strategy.next_action(engine.new_state(), engine) is None
    assert strategy.describe() == "GreedyCheapest (reserve 6000)"


def test_greedy_cheapest_honors_unlocks():
    engine = _mall_engine(enforce_unlocks=True)
    assert GreedyCheapest().next_action(_make_state(engine, 5000), engine) == PurchaseBusiness("mall")


def test_collects_first():
    engine = _mall_engine()
    state = _make_state(engine, 5000, "mall", day=3)
    state.businesses[0].last_collected_day = 2
    assert GreedyCheapest().next_action(state, engine) == CollectAllRevenue()
    assert GreedyROI().next_action(state, engine) == CollectAllRevenue()


def test_hires_once_a_business_exists():
    engine = GameEngine()
    strategy = GreedyCheapest(hire=["manager", "marketer"])
    assert strategy.next_action(_make_state(engine, 10000), engine) == PurchaseBusiness("coffee_shop")

    state = _make_state(engine, 10000, "coffee_shop")
    assert strategy.next_action(state, engine) == HireStaff("manager")

    state = engine.transition(state, HireStaff("manager"))
    assert strategy.next_action(state, engine) == HireStaff("marketer")
    assert strategy.describe() == "GreedyCheapest hire[manager, marketer]"


def test_greedy_roi_prefers_revenue_per_dollar():
    engine = _mall_engine()
    strategy = GreedyROI()
    assert strategy.next_action(_make_state(engine, 5000), engine) == PurchaseBusiness("mall")
    assert strategy.next_action(_make_state(engine, 500), engine) == PurchaseBusiness("kiosk")
    assert strategy.next_action(_make_state(engine, 50), engine) is None


def test_priority_list_waits_for_next_priority():
    engine = _mall_engine()
    strategy = PriorityList([("mall", 1), ("kiosk", 2)])
    assert strategy.next_action(_make_state(engine, 500), engine) is None
    assert strategy.next_action(_make_state(engine, 1000), engine) == PurchaseBusiness("mall")
    assert strategy.next_action(_make_state(engine, 500, "mall"), engine) == PurchaseBusiness("kiosk")
    assert strategy.describe() == "PriorityList([mallx1, kioskx2])"


def test_priority_list_fallback():
    engine = _mall_engine()
    done = _make_state(engine, 5000, "mall", "kiosk", "kiosk")
    assert PriorityList([("mall", 1)]).next_action(done, engine) is None
    strategy = PriorityList([("mall", 1), ("kiosk", 2)], fallback=GreedyROI())
    assert strategy.next_action(done, engine) == PurchaseBusiness("mall")


def test_custom_strategy():
    engine = _mall_engine()
    state = _make_state(engine, 5000)
    strategy = CustomStrategy(lambda s, e: PurchaseBusiness("kiosk"), name="Kiosks")
    assert strategy.next_action(state, engine) == PurchaseBusiness("kiosk")
    assert strategy.describe() == "Kiosks"
    assert CustomStrategy().next_action(state, engine) is None


def test_registry():
    assert STRATEGY_REGISTRY["greedy_cheapest"] is GreedyCheapest
    assert STRATEGY_REGISTRY["greedy_roi"] is GreedyROI
