from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tycoon._types import compare

if TYPE_CHECKING:
    from tycoon.state import GameState


@dataclass
class SimulationContext:
    """Extra context available to terminal conditions during simulation."""

    last_purchase_day: int = 0
    total_purchases: int = 0
    total_actions: int = 0


class TerminalCondition(ABC):
    """Base class for simulation stopping conditions."""

    @abstractmethod
    def is_met(self, state: GameState, context: SimulationContext | None = None) -> bool: ...

    @abstractmethod
    def describe(self) -> str: ...


class _DayTerminal(TerminalCondition):
    def __init__(self, day: int) -> None:
        self.day = day

    def is_met(self, state: GameState, context: SimulationContext | None = None) -> bool:
        return state.day >= self.day

    def describe(self) -> str:
        return f"day({self.day})"


class _GameOverTerminal(TerminalCondition):
    def is_met(self, state: GameState, context: SimulationContext | None = None) -> bool:
        return state.game_over

    def describe(self) -> str:
        return "game_over()"


class _MoneyTerminal(TerminalCondition):
    def __init__(self, op: str, threshold: float) -> None:
        self.op = op
        self.threshold = threshold

    def is_met(self, state: GameState, context: SimulationContext | None = None) -> bool:
        return compare(state.money, self.op, self.threshold)

    def describe(self) -> str:
        return f'money("{self.op}", {self.threshold})'


class _LevelTerminal(TerminalCondition):
    def __init__(self, op: str, level: int) -> None:
        self.op = op
        self.level = level

    def is_met(self, state: GameState, context: SimulationContext | None = None) -> bool:
        return compare(state.level, self.op, self.level)

    def describe(self) -> str:
        return f'level("{self.op}", {self.level})'


class _StallTerminal(TerminalCondition):
    def __init__(self, days: int) -> None:
        self.days = days

    def is_met(self, state: GameState, context: SimulationContext | None = None) -> bool:
        if context is None:
            return False
        # with no purchases yet, count from the first day
        since = max(context.last_purchase_day, 1)
        return state.day - since >= self.days

    def describe(self) -> str:
        return f"stall({self.days})"


class _AnyTerminal(TerminalCondition):
    def __init__(self, conditions: list[TerminalCondition]) -> None:
        self.conditions = conditions

    def is_met(self, state: GameState, context: SimulationContext | None = None) -> bool:
        return any(c.is_met(state, context) for c in self.conditions)

    def describe(self) -> str:
        return " OR ".join(c.describe() for c in self.conditions)


class _AllTerminal(TerminalCondition):
    def __init__(self, conditions: list[TerminalCondition]) -> None:
        self.conditions = conditions

    def is_met(self, state: GameState, context: SimulationContext | None = None) -> bool:
        return all(c.is_met(state, context) for c in self.conditions)

    def describe(self) -> str:
        return " AND ".join(c.describe() for c in self.conditions)


class Terminal:
    """Factory for built-in terminal conditions."""

    @staticmethod
    def day(day: int) -> TerminalCondition:
        return _DayTerminal(day)

    @staticmethod
    def game_over() -> TerminalCondition:
        return _GameOverTerminal()

    @staticmethod
    def money(op: str, threshold: float) -> TerminalCondition:
        return _MoneyTerminal(op, threshold)

    @staticmethod
    def level(op: str, level: int) -> TerminalCondition:
        return _LevelTerminal(op, level)

    @staticmethod
    def stall(days: int) -> TerminalCondition:
        """Met once `days` days pass without a purchase."""
        return _StallTerminal(days)

    @staticmethod
    def any(*conditions: TerminalCondition) -> TerminalCondition:
        return _AnyTerminal(list(conditions))

    @staticmethod
    def all(*conditions: TerminalCondition) -> TerminalCondition:
        return _AllTerminal(list(conditions))
