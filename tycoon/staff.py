from __future__ import annotations

from dataclasses import dataclass

from tycoon.effect import Effect


@dataclass(frozen=True)
class StaffDef:
    """Static definition of a hireable staff role."""

    id: str
    display_name: str = ""
    base_salary: int = 0
    effect: Effect | None = None
    description: str = ""
    icon: str = ""

    def __post_init__(self) -> None:
        if not self.display_name:
            object.__setattr__(self, "display_name", self.id)


@dataclass
class Staff:
    """A hired staff member. Salary and effect are fixed at hire time."""

    id: str
    type: str
    salary: int = 0
    effect: Effect | None = None
    level: int = 1
    hired_at: float = 0.0
