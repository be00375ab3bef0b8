from __future__ import annotations

import argparse
import importlib
import logging
import sys
from dataclasses import replace

from tycoon.content import define_catalog
from tycoon.definition import Catalog, GameConfig
from tycoon.formatting import format_text_report
from tycoon.simulation import MAX_DAYS, Simulation
from tycoon.store import LEADERBOARD_SIZE, JsonFileStore
from tycoon.strategy import GreedyCheapest, GreedyROI, Strategy
from tycoon.terminal import Terminal, TerminalCondition


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tycoon",
        description="Business Tycoon engine CLI",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command")

    sim = sub.add_parser("simulate", help="Run an autoplay simulation")
    sim.add_argument(
        "--catalog",
        default=None,
        help="Python module with define_catalog() (default: the stock catalog)",
    )
    sim.add_argument(
        "--strategy",
        default="greedy_cheapest",
        choices=["greedy_cheapest", "greedy_roi"],
        help="Strategy to use (default: greedy_cheapest)",
    )
    sim.add_argument(
        "--reserve", type=int, default=0, help="Cash the strategy never spends"
    )
    sim.add_argument(
        "--hire",
        action="append",
        default=[],
        metavar="STAFF_TYPE",
        help="Staff type to hire once a business is owned (repeatable)",
    )
    sim.add_argument("--days", type=int, default=365, help="Days to simulate")
    sim.add_argument("--seed", type=int, default=None, help="Random seed")
    sim.add_argument(
        "--enforce-unlocks",
        action="store_true",
        help="Refuse businesses above the player's level",
    )
    sim.add_argument("--export-csv", default=None, help="CSV export path prefix")
    sim.add_argument("--export-json", default=None, help="JSON export path")
    sim.add_argument("--plot", default=None, help="Plot output path (PNG)")
    sim.add_argument(
        "--monte-carlo",
        type=int,
        default=None,
        help="Number of Monte Carlo runs",
    )

    board = sub.add_parser("leaderboard", help="Show the richest saved games")
    board.add_argument("--store", required=True, help="Save directory")
    board.add_argument("--limit", type=int, default=LEADERBOARD_SIZE)

    return parser


def load_catalog(module_path: str | None) -> Catalog:
    """Import module and call define_catalog()."""
    if module_path is None:
        return define_catalog()
    mod = importlib.import_module(module_path)
    if not hasattr(mod, "define_catalog"):
        print(f"Error: module {module_path!r} has no define_catalog() function")
        sys.exit(1)
    return mod.define_catalog()


def load_config(module_path: str | None) -> GameConfig:
    """The module's define_config() if it has one, else the defaults."""
    if module_path is None:
        return GameConfig()
    mod = importlib.import_module(module_path)
    if hasattr(mod, "define_config"):
        return mod.define_config()
    return GameConfig()


def build_strategy(name: str, reserve: int, hire: list[str]) -> Strategy:
    if name == "greedy_roi":
        return GreedyROI(reserve=reserve, hire=hire)
    return GreedyCheapest(reserve=reserve, hire=hire)


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "leaderboard":
        _show_leaderboard(args.store, args.limit)
        return

    if args.command == "simulate":
        catalog = load_catalog(args.catalog)
        config = load_config(args.catalog)
        if args.enforce_unlocks:
            config = replace(config, enforce_unlocks=True)

        terminal: TerminalCondition = Terminal.any(
            Terminal.day(args.days + 1), Terminal.game_over()
        )

        if args.monte_carlo and args.monte_carlo > 1:
            _run_monte_carlo(catalog, config, terminal, args)
        else:
            sim = Simulation(
                strategy=build_strategy(args.strategy, args.reserve, args.hire),
                terminal=terminal,
                catalog=catalog,
                config=config,
                seed=args.seed,
                max_days=max(args.days, MAX_DAYS),
            )
            report = sim.run()
            print(format_text_report(report))

            if args.export_csv:
                from tycoon.export import export_csv
                export_csv(report, args.export_csv)
                print(f"\nCSV exported to {args.export_csv}_*.csv")

            if args.export_json:
                from tycoon.export import export_json
                export_json(report, args.export_json)
                print(f"\nJSON exported to {args.export_json}")

            if args.plot:
                from tycoon.visualization import plot_simulation
                plot_simulation(report, args.plot)
                print(f"\nPlot saved to {args.plot}")


def _show_leaderboard(directory: str, limit: int) -> None:
    entries = JsonFileStore(directory).leaderboard(limit)
    if not entries:
        print("No saved games.")
        return
    for rank, entry in enumerate(entries, start=1):
        print(f"{rank:>2}. {entry.username:<24s} ${entry.money:>14,}  day {entry.day}")


def _run_monte_carlo(
    catalog: Catalog,
    config: GameConfig,
    terminal: TerminalCondition,
    args,
) -> None:
    """Run multiple simulations and report aggregate results."""
    n = args.monte_carlo
    final_money: list[int] = []
    level_up_days: list[int] = []
    bankrupt_count = 0

    for i in range(n):
        sim = Simulation(
            strategy=build_strategy(args.strategy, args.reserve, args.hire),
            terminal=terminal,
            catalog=catalog,
            config=config,
            seed=(args.seed + i) if args.seed is not None else None,
            max_days=max(args.days, MAX_DAYS),
        )
        report = sim.run()
        final_money.append(report.final_money)
        if report.bankrupt_day is not None:
            bankrupt_count += 1
        if report.first_level_up_day is not None:
            level_up_days.append(report.first_level_up_day)

    print(f"Monte Carlo: {n} runs")
    print(f"Final money: mean={sum(final_money) / n:,.0f}, "
          f"min={min(final_money):,}, max={max(final_money):,}")
    print(f"Bankruptcy rate: {bankrupt_count}/{n}")
    if level_up_days:
        mean = sum(level_up_days) / len(level_up_days)
        print(f"First level-up day (mean / min / max): "
              f"{mean:.1f} / {min(level_up_days)} / {max(level_up_days)}")
