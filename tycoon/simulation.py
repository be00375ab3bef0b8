from __future__ import annotations

import itertools
import random

from tycoon.action import (
    Action,
    AdvanceDay,
    CheckSpecialEventsProgress,
    ClearAllNotifications,
    HireStaff,
    InitializeGame,
    PurchaseBusiness,
    PurchaseUpgrade,
    StartSpecialEvent,
)
from tycoon.definition import Catalog, GameConfig
from tycoon.engine import GameEngine
from tycoon.metrics import MetricsCollector
from tycoon.report import SimulationReport, build_report
from tycoon.state import ERROR, INFO, GameState
from tycoon.strategy import Strategy
from tycoon.terminal import SimulationContext, TerminalCondition

MAX_DAYS = 10_000
MAX_ACTIONS_PER_DAY = 1_000

# 2024-01-01T00:00:00Z; simulated ids and timestamps count up from here
_EPOCH = 1_704_067_200.0

_PURCHASE_KINDS: dict[type[Action], str] = {
    PurchaseBusiness: "business",
    HireStaff: "staff",
    PurchaseUpgrade: "upgrade",
}


class Simulation:
    """Orchestrates a headless day-by-day playthrough of a catalog."""

    def __init__(
        self,
        strategy: Strategy,
        terminal: TerminalCondition,
        catalog: Catalog | None = None,
        config: GameConfig | None = None,
        seed: int | None = None,
        max_days: int = MAX_DAYS,
        special_events: list[str] | None = None,
    ) -> None:
        self.strategy = strategy
        self.terminal = terminal
        self.max_days = max_days
        self.special_events = special_events or []

        self.rng = random.Random(seed)
        self._ticks = itertools.count()
        self.engine = GameEngine(catalog, config, rng=self.rng, clock=self._clock)
        self.collector = MetricsCollector()
        self.context = SimulationContext()
        self.bankrupt_day: int | None = None
        self.state: GameState = self.engine.new_state(show_tutorial=False)

    def _clock(self) -> float:
        return _EPOCH + next(self._ticks)

    def run(self) -> SimulationReport:
        state = self.engine.transition(self.state, InitializeGame(show_tutorial=False))
        for event_id in self.special_events:
            state = self.engine.transition(state, StartSpecialEvent(event_id))
        self.state = state
        self.collector.record_day(state)

        while not self.terminal.is_met(self.state, self.context):
            if self.state.game_over:
                return self._build_report("Game over")
            if self.state.day > self.max_days:
                return self._build_report("Max days reached")
            self._play_day()
            self._end_day()

        return self._build_report("Terminal condition met")

    def _play_day(self) -> None:
        for _ in range(MAX_ACTIONS_PER_DAY):
            action = self.strategy.next_action(self.state, self.engine)
            if action is None:
                return
            before = self.state
            after = self.engine.transition(before, action)
            self.context.total_actions += 1
            if _refused(before, after):
                self.state = after
                return

            kind = _PURCHASE_KINDS.get(type(action))
            if kind is not None:
                item_type = getattr(action, f"{kind}_type", "")
                self.collector.record_purchase(
                    after, kind, item_type, before.money - after.money
                )
                self.context.last_purchase_day = after.day
                self.context.total_purchases += 1
            self.state = after

    def _end_day(self) -> None:
        state = self.engine.transition(self.state, ClearAllNotifications())
        before = state
        state = self.engine.transition(state, AdvanceDay())

        known = {m.id for m in before.market_events}
        for event in state.market_events:
            if event.id not in known:
                self.collector.record_market_event(before.day, event.type, event.name)
        for level in range(before.level + 1, state.level + 1):
            self.collector.record_level_up(before.day, level)
        if state.game_over and not before.game_over:
            self.bankrupt_day = before.day

        active_before = {e.id for e in state.active_special_events}
        state = self.engine.transition(state, CheckSpecialEventsProgress())
        completed = {e.id for e in state.completed_special_events}
        for event_id in active_before - {e.id for e in state.active_special_events}:
            outcome = "completed" if event_id in completed else "expired"
            self.collector.record_special_event(state.day, event_id, outcome)

        self.state = state
        self.collector.record_day(state)

    def _build_report(self, outcome: str) -> SimulationReport:
        return build_report(
            collector=self.collector,
            strategy_description=self.strategy.describe(),
            terminal_description=self.terminal.describe(),
            outcome=outcome,
            total_days=self.state.day - 1,
            bankrupt_day=self.bankrupt_day,
        )


def _refused(before: GameState, after: GameState) -> bool:
    """True when the engine answered with a bare error or info notification."""
    if after is before:
        return True
    if len(after.notifications) != len(before.notifications) + 1:
        return False
    last = after.notifications[-1]
    return last.type in (ERROR, INFO) and after.money == before.money and (
        after.businesses == before.businesses and after.staff == before.staff
    )
