from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tycoon.state import GameState


@dataclass
class DaySnapshot:
    day: int
    money: int
    net_worth: int
    total_revenue: int
    total_expenses: int
    level: int
    businesses: int
    staff: int


@dataclass
class PurchaseEvent:
    day: int
    kind: str  # "business", "staff" or "upgrade"
    item_type: str
    cost: int
    money_after: int


@dataclass
class MarketEventRecord:
    day: int
    event_type: str
    name: str


@dataclass
class LevelUpEvent:
    day: int
    level: int


@dataclass
class SpecialEventRecord:
    day: int
    event_id: str
    outcome: str  # "completed" or "expired"


class MetricsCollector:
    """Collects per-day simulation metrics."""

    def __init__(self) -> None:
        self._last_snapshot_day: int = 0

        self.snapshots: list[DaySnapshot] = []
        self.purchases: list[PurchaseEvent] = []
        self.market_events: list[MarketEventRecord] = []
        self.level_ups: list[LevelUpEvent] = []
        self.special_events: list[SpecialEventRecord] = []

    def record_day(self, state: GameState) -> None:
        """Record a snapshot once per game day."""
        if state.day == self._last_snapshot_day:
            return
        self._last_snapshot_day = state.day
        self.snapshots.append(
            DaySnapshot(
                day=state.day,
                money=state.money,
                net_worth=state.stats.net_worth,
                total_revenue=state.stats.total_revenue,
                total_expenses=state.stats.total_expenses,
                level=state.level,
                businesses=len(state.businesses),
                staff=len(state.staff),
            )
        )

    def record_purchase(
        self, state: GameState, kind: str, item_type: str, cost: int
    ) -> None:
        self.purchases.append(
            PurchaseEvent(
                day=state.day,
                kind=kind,
                item_type=item_type,
                cost=cost,
                money_after=state.money,
            )
        )

    def record_market_event(self, day: int, event_type: str, name: str) -> None:
        self.market_events.append(MarketEventRecord(day=day, event_type=event_type, name=name))

    def record_level_up(self, day: int, level: int) -> None:
        self.level_ups.append(LevelUpEvent(day=day, level=level))

    def record_special_event(self, day: int, event_id: str, outcome: str) -> None:
        self.special_events.append(
            SpecialEventRecord(day=day, event_id=event_id, outcome=outcome)
        )
