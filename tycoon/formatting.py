from __future__ import annotations

from collections import Counter

from tycoon.report import SimulationReport


def format_text_report(report: SimulationReport) -> str:
    """Format a simulation report for console output."""
    lines: list[str] = []

    lines.append("=" * 40 + " Business Tycoon Simulation Report " + "=" * 40)
    lines.append(f"Strategy: {report.strategy_description}")
    lines.append(f"Terminal: {report.terminal_description}")
    lines.append(f"Result: {report.outcome} after {report.total_days} days")
    lines.append("")

    lines.append("ECONOMY:")
    lines.append(f"  Final money: ${report.final_money:,}")
    lines.append(f"  Peak money: ${report.peak_money:,}")
    lines.append(f"  Net worth: ${report.final_net_worth:,}")
    if report.bankrupt_day is not None:
        lines.append(f"  Bankrupt on day {report.bankrupt_day}")
    lines.append("")

    # Levels
    if report.level_ups:
        lines.append("LEVELS:")
        for event in report.level_ups:
            lines.append(f"  * level {event.level:<3d}{'.' * 20} day {event.day}")
        lines.append("")

    # Purchase summary
    lines.append("PURCHASES:")
    lines.append(f"  Total: {len(report.purchases)}")
    lines.append(f"  Rate: {report.purchases_per_day:.2f}/day")
    lines.append(f"  Max gap: {report.max_purchase_gap} days")
    lines.append(f"  Mean gap: {report.mean_purchase_gap:.1f} days")
    by_type = Counter(p.item_type for p in report.purchases)
    for item_type, count in sorted(by_type.items()):
        lines.append(f"    {item_type:.<30s} {count}")
    lines.append("")

    # Market
    if report.market_events:
        lines.append("MARKET EVENTS:")
        by_name = Counter(m.name for m in report.market_events)
        for name, count in sorted(by_name.items()):
            lines.append(f"  {name:.<30s} {count}")
        lines.append("")

    if report.special_events:
        lines.append("SPECIAL EVENTS:")
        for record in report.special_events:
            lines.append(f"  {record.event_id:.<30s} {record.outcome} (day {record.day})")
        lines.append("")

    return "\n".join(lines)
