from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable

from tycoon._types import compare

if TYPE_CHECKING:
    from tycoon.special_event import SpecialEvent
    from tycoon.state import GameState


class Requirement(ABC):
    """Base class for special-event requirements: conditions on a game state
    and the progress an active event has accumulated."""

    @abstractmethod
    def evaluate(self, state: GameState, event: SpecialEvent) -> bool: ...

    @abstractmethod
    def describe(self) -> str: ...

    def __and__(self, other: Requirement) -> Requirement:
        return _AllRequirement([self, other])

    def __or__(self, other: Requirement) -> Requirement:
        return _AnyRequirement([self, other])


# ── Private implementations ──────────────────────────────────────────


class _BusinessCountRequirement(Requirement):
    def __init__(self, business_type: str, op: str, count: int) -> None:
        self.business_type = business_type
        self.op = op
        self.count = count

    def evaluate(self, state: GameState, event: SpecialEvent) -> bool:
        return compare(state.business_count(self.business_type), self.op, self.count)

    def describe(self) -> str:
        return f"{self.business_type} {self.op} {self.count}"


class _ProgressRequirement(Requirement):
    def __init__(self, metric: str, op: str, target: float) -> None:
        self.metric = metric
        self.op = op
        self.target = target

    def evaluate(self, state: GameState, event: SpecialEvent) -> bool:
        return compare(event.progress.get(self.metric), self.op, self.target)

    def describe(self) -> str:
        return f"progress.{self.metric} {self.op} {self.target}"


class _AllRequirement(Requirement):
    def __init__(self, reqs: list[Requirement]) -> None:
        self.reqs = reqs

    def evaluate(self, state: GameState, event: SpecialEvent) -> bool:
        return all(r.evaluate(state, event) for r in self.reqs)

    def describe(self) -> str:
        return " AND ".join(r.describe() for r in self.reqs)


class _AnyRequirement(Requirement):
    def __init__(self, reqs: list[Requirement]) -> None:
        self.reqs = reqs

    def evaluate(self, state: GameState, event: SpecialEvent) -> bool:
        return any(r.evaluate(state, event) for r in self.reqs)

    def describe(self) -> str:
        return " OR ".join(r.describe() for r in self.reqs)


class _CustomRequirement(Requirement):
    def __init__(self, fn: Callable[[GameState, SpecialEvent], bool], label: str) -> None:
        self.fn = fn
        self.label = label

    def evaluate(self, state: GameState, event: SpecialEvent) -> bool:
        return self.fn(state, event)

    def describe(self) -> str:
        return self.label


# ── Public factory ───────────────────────────────────────────────────


class Req:
    """Factory for built-in requirement types."""

    @staticmethod
    def business_count(business_type: str, count: int, op: str = ">=") -> Requirement:
        return _BusinessCountRequirement(business_type, op, count)

    @staticmethod
    def progress(metric: str, target: float, op: str = ">=") -> Requirement:
        return _ProgressRequirement(metric, op, target)

    @staticmethod
    def all(*reqs: Requirement) -> Requirement:
        return _AllRequirement(list(reqs))

    @staticmethod
    def any(*reqs: Requirement) -> Requirement:
        return _AnyRequirement(list(reqs))

    @staticmethod
    def custom(
        fn: Callable[[GameState, SpecialEvent], bool], label: str = "custom"
    ) -> Requirement:
        return _CustomRequirement(fn, label)
