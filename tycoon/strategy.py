from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable

from tycoon.action import Action, CollectAllRevenue, HireStaff, PurchaseBusiness
from tycoon.business import BusinessDef

if TYPE_CHECKING:
    from tycoon.engine import GameEngine
    from tycoon.state import GameState


class Strategy(ABC):
    """Base class for autoplay strategies.

    The simulation asks for one action at a time until the strategy returns
    None, then ends the day.
    """

    @abstractmethod
    def next_action(self, state: GameState, engine: GameEngine) -> Action | None:
        """Return the next action to take today, or None to end the day."""
        ...

    @abstractmethod
    def describe(self) -> str: ...


def _buyable(state: GameState, engine: GameEngine, reserve: int) -> list[BusinessDef]:
    """Businesses affordable without dipping below *reserve*."""
    if engine.config.enforce_unlocks:
        candidates = engine.catalog.unlocked_businesses(state.level)
    else:
        candidates = list(engine.catalog.businesses)
    return [b for b in candidates if state.money - b.base_price >= reserve]


def _next_hire(
    state: GameState, engine: GameEngine, hire: list[str], reserve: int
) -> Action | None:
    for staff_type in hire:
        if state.has_staff(staff_type):
            continue
        cost = engine.hiring_cost(staff_type)
        if cost is not None and state.money - cost >= reserve:
            return HireStaff(staff_type)
    return None


class GreedyCheapest(Strategy):
    """Collect everything, then buy the cheapest business that fits the budget."""

    def __init__(self, reserve: int = 0, hire: list[str] | None = None) -> None:
        self.reserve = reserve
        self.hire = hire or []

    def next_action(self, state: GameState, engine: GameEngine) -> Action | None:
        if state.collectable_businesses():
            return CollectAllRevenue()
        if state.businesses:
            action = _next_hire(state, engine, self.hire, self.reserve)
            if action is not None:
                return action
        buyable = _buyable(state, engine, self.reserve)
        if not buyable:
            return None
        cheapest = min(buyable, key=lambda b: b.base_price)
        return PurchaseBusiness(cheapest.id)

    def describe(self) -> str:
        parts = ["GreedyCheapest"]
        if self.reserve:
            parts.append(f"(reserve {self.reserve})")
        if self.hire:
            parts.append(f"hire[{', '.join(self.hire)}]")
        return " ".join(parts)


class GreedyROI(Strategy):
    """Buy the affordable business with the best revenue per dollar."""

    def __init__(self, reserve: int = 0, hire: list[str] | None = None) -> None:
        self.reserve = reserve
        self.hire = hire or []

    def next_action(self, state: GameState, engine: GameEngine) -> Action | None:
        if state.collectable_businesses():
            return CollectAllRevenue()
        if state.businesses:
            action = _next_hire(state, engine, self.hire, self.reserve)
            if action is not None:
                return action
        buyable = _buyable(state, engine, self.reserve)
        if not buyable:
            return None
        # Ties go to the cheaper business
        best = max(buyable, key=lambda b: (b.base_revenue / b.base_price, -b.base_price))
        return PurchaseBusiness(best.id)

    def describe(self) -> str:
        if self.reserve:
            return f"GreedyROI (reserve {self.reserve})"
        return "GreedyROI"


class PriorityList(Strategy):
    """Follow a designer-specified purchase order."""

    def __init__(
        self,
        priorities: list[tuple[str, int]],
        fallback: Strategy | None = None,
    ) -> None:
        self.priorities = priorities  # (business_type, target_count)
        self.fallback = fallback

    def next_action(self, state: GameState, engine: GameEngine) -> Action | None:
        if state.collectable_businesses():
            return CollectAllRevenue()

        for business_type, target_count in self.priorities:
            if state.business_count(business_type) >= target_count:
                continue
            # Wait for the next unmet priority instead of skipping ahead
            if state.money >= engine.catalog.business_price(business_type):
                return PurchaseBusiness(business_type)
            return None

        # All priorities met, use fallback
        if self.fallback:
            return self.fallback.next_action(state, engine)
        return None

    def describe(self) -> str:
        items = ", ".join(f"{btype}x{cnt}" for btype, cnt in self.priorities)
        return f"PriorityList([{items}])"


class CustomStrategy(Strategy):
    """Strategy defined by a callable."""

    def __init__(
        self,
        decide_fn: Callable[[GameState, GameEngine], Action | None] | None = None,
        name: str = "Custom",
    ) -> None:
        self._decide_fn = decide_fn
        self._name = name

    def next_action(self, state: GameState, engine: GameEngine) -> Action | None:
        if self._decide_fn:
            return self._decide_fn(state, engine)
        return None

    def describe(self) -> str:
        return self._name


STRATEGY_REGISTRY: dict[str, type[Strategy]] = {
    "greedy_cheapest": GreedyCheapest,
    "greedy_roi": GreedyROI,
    "priority_list": PriorityList,
    "custom": CustomStrategy,
}
