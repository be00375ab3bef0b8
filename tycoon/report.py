from __future__ import annotations

from dataclasses import dataclass, field

from tycoon.metrics import (
    DaySnapshot,
    LevelUpEvent,
    MarketEventRecord,
    MetricsCollector,
    PurchaseEvent,
    SpecialEventRecord,
)


@dataclass
class SimulationReport:
    """Container for simulation results and derived metrics."""

    strategy_description: str = ""
    terminal_description: str = ""
    outcome: str = ""
    total_days: int = 0

    # Raw metrics
    snapshots: list[DaySnapshot] = field(default_factory=list)
    purchases: list[PurchaseEvent] = field(default_factory=list)
    market_events: list[MarketEventRecord] = field(default_factory=list)
    level_ups: list[LevelUpEvent] = field(default_factory=list)
    special_events: list[SpecialEventRecord] = field(default_factory=list)

    # Derived metrics
    final_money: int = 0
    peak_money: int = 0
    final_net_worth: int = 0
    final_level: int = 1
    first_level_up_day: int | None = None
    bankrupt_day: int | None = None
    purchase_gaps: list[int] = field(default_factory=list)
    max_purchase_gap: int = 0
    mean_purchase_gap: float = 0.0
    purchases_per_day: float = 0.0

    def money_series(self) -> list[tuple[int, int]]:
        """Return (day, money) pairs."""
        return [(s.day, s.money) for s in self.snapshots]

    def net_worth_series(self) -> list[tuple[int, int]]:
        """Return (day, net worth) pairs."""
        return [(s.day, s.net_worth) for s in self.snapshots]

    def level_up_day(self, level: int) -> int | None:
        for event in self.level_ups:
            if event.level >= level:
                return event.day
        return None


def build_report(
    collector: MetricsCollector,
    strategy_description: str,
    terminal_description: str,
    outcome: str,
    total_days: int,
    bankrupt_day: int | None = None,
) -> SimulationReport:
    """Build a SimulationReport from collected metrics."""
    snapshots = collector.snapshots
    last = snapshots[-1] if snapshots else None

    # Purchase gaps, in days, counted from day 1
    purchase_gaps: list[int] = []
    purchase_days = sorted(p.day for p in collector.purchases)
    if purchase_days:
        purchase_gaps.append(purchase_days[0] - 1)
        for i in range(1, len(purchase_days)):
            purchase_gaps.append(purchase_days[i] - purchase_days[i - 1])

    max_gap = max(purchase_gaps) if purchase_gaps else 0
    mean_gap = (sum(purchase_gaps) / len(purchase_gaps)) if purchase_gaps else 0.0
    per_day = len(collector.purchases) / total_days if total_days > 0 else 0.0

    return SimulationReport(
        strategy_description=strategy_description,
        terminal_description=terminal_description,
        outcome=outcome,
        total_days=total_days,
        snapshots=snapshots,
        purchases=collector.purchases,
        market_events=collector.market_events,
        level_ups=collector.level_ups,
        special_events=collector.special_events,
        final_money=last.money if last else 0,
        peak_money=max((s.money for s in snapshots), default=0),
        final_net_worth=last.net_worth if last else 0,
        final_level=last.level if last else 1,
        first_level_up_day=collector.level_ups[0].day if collector.level_ups else None,
        bankrupt_day=bankrupt_day,
        purchase_gaps=purchase_gaps,
        max_purchase_gap=max_gap,
        mean_purchase_gap=mean_gap,
        purchases_per_day=per_day,
    )
