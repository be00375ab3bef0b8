from __future__ import annotations

from tycoon.report import SimulationReport


def plot_simulation(
    report: SimulationReport,
    output_path: str | None = None,
) -> None:
    """Generate a 4-panel matplotlib visualization of simulation results.

    Requires matplotlib (optional dependency).
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError(
            "matplotlib is required for visualization. "
            "Install with: pip install tycoon[viz]"
        )

    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(
        f"Business Tycoon Simulation: {report.strategy_description}",
        fontsize=14,
    )
    days = [s.day for s in report.snapshots]

    # 1. Money and net worth
    ax1 = axes[0][0]
    if report.snapshots:
        ax1.plot(days, [s.money for s in report.snapshots], label="money")
        ax1.plot(days, [s.net_worth for s in report.snapshots], label="net worth")
    ax1.axhline(0, color="black", linewidth=0.8)
    ax1.set_xlabel("Day")
    ax1.set_ylabel("$")
    ax1.set_title("Money and Net Worth")
    ax1.legend(fontsize=8)
    ax1.grid(True, alpha=0.3)

    # 2. Cumulative revenue and expenses
    ax2 = axes[0][1]
    if report.snapshots:
        ax2.plot(days, [s.total_revenue for s in report.snapshots], label="revenue")
        ax2.plot(days, [s.total_expenses for s in report.snapshots], label="expenses")
    for event in report.market_events:
        ax2.axvline(event.day, color="grey", alpha=0.2)
    ax2.set_xlabel("Day")
    ax2.set_ylabel("$")
    ax2.set_title("Revenue and Expenses (market events shaded)")
    ax2.legend(fontsize=8)
    ax2.grid(True, alpha=0.3)

    # 3. Purchase timeline
    ax3 = axes[1][0]
    if report.purchases:
        purchase_days = [p.day for p in report.purchases]
        items = [p.item_type for p in report.purchases]
        item_types = sorted(set(items))
        y_map = {t: i for i, t in enumerate(item_types)}
        ys = [y_map[t] for t in items]
        ax3.scatter(purchase_days, ys, s=10, alpha=0.6)
        ax3.set_yticks(range(len(item_types)))
        ax3.set_yticklabels(item_types, fontsize=7)
        ax3.set_xlabel("Day")
        ax3.set_title("Purchase Timeline")
        ax3.grid(True, alpha=0.3)

    # 4. Level progression
    ax4 = axes[1][1]
    if report.snapshots:
        ax4.step(days, [s.level for s in report.snapshots], where="post")
        ax4.set_xlabel("Day")
        ax4.set_ylabel("Level")
        ax4.set_title("Level Progression")
        ax4.grid(True, alpha=0.3)

    plt.tight_layout()

    if output_path:
        plt.savefig(output_path, dpi=150)
    else:
        plt.show()
