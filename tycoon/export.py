from __future__ import annotations

import csv
import json
from pathlib import Path

from tycoon.report import SimulationReport


def export_csv(report: SimulationReport, path: str | Path) -> None:
    """Export simulation data as CSV files.

    Creates three files:
      - {path}_days.csv
      - {path}_purchases.csv
      - {path}_market.csv
    """
    base = str(path)

    # Daily snapshots
    with open(f"{base}_days.csv", "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "day", "money", "net_worth", "total_revenue", "total_expenses",
            "level", "businesses", "staff",
        ])
        for s in report.snapshots:
            writer.writerow([
                s.day, s.money, s.net_worth, s.total_revenue, s.total_expenses,
                s.level, s.businesses, s.staff,
            ])

    # Purchases
    with open(f"{base}_purchases.csv", "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["day", "kind", "item_type", "cost", "money_after"])
        for p in report.purchases:
            writer.writerow([p.day, p.kind, p.item_type, p.cost, p.money_after])

    # Market events
    with open(f"{base}_market.csv", "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["day", "event_type", "name"])
        for m in report.market_events:
            writer.writerow([m.day, m.event_type, m.name])


def export_json(report: SimulationReport, path: str | Path) -> None:
    """Export full simulation report as JSON."""
    data = {
        "strategy": report.strategy_description,
        "terminal": report.terminal_description,
        "outcome": report.outcome,
        "total_days": report.total_days,
        "final_money": report.final_money,
        "peak_money": report.peak_money,
        "final_net_worth": report.final_net_worth,
        "final_level": report.final_level,
        "first_level_up_day": report.first_level_up_day,
        "bankrupt_day": report.bankrupt_day,
        "purchase_count": len(report.purchases),
        "purchases_per_day": report.purchases_per_day,
        "max_purchase_gap": report.max_purchase_gap,
        "mean_purchase_gap": report.mean_purchase_gap,
        "level_ups": [{"day": e.day, "level": e.level} for e in report.level_ups],
        "purchases": [
            {"day": p.day, "kind": p.kind, "item_type": p.item_type, "cost": p.cost}
            for p in report.purchases
        ],
        "market_events": [
            {"day": m.day, "event_type": m.event_type} for m in report.market_events
        ],
        "special_events": [
            {"day": r.day, "event_id": r.event_id, "outcome": r.outcome}
            for r in report.special_events
        ],
    }
    with open(str(path), "w") as f:
        json.dump(data, f, indent=2)
