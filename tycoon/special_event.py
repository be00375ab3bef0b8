from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tycoon.requirement import Req, Requirement

if TYPE_CHECKING:
    from tycoon.state import GameState

# Progress counters an active special event tracks, in display order.
PROGRESS_METRICS: tuple[str, ...] = (
    "revenue",
    "investment",
    "green_investment",
    "customers",
    "sales",
    "staff_hired",
)

# Reward types that are credited to the player directly on completion.
DIRECT_REWARD_TYPES = frozenset({"money", "experience"})
# Reward types recorded as tokens for other systems to consult.
TOKEN_REWARD_TYPES = frozenset({"upgrade", "staff", "special_business"})


@dataclass(frozen=True)
class BusinessCount:
    type: str
    count: int


@dataclass(frozen=True)
class EventRequirements:
    """Declared thresholds of a special event. Zero targets are not checked."""

    business_counts: tuple[BusinessCount, ...] = ()
    revenue_target: int = 0
    investment_target: int = 0
    green_investment_target: int = 0
    customer_target: int = 0
    sales_target: int = 0
    staff_hiring_target: int = 0

    def targets(self) -> dict[str, int]:
        """Map progress metric -> declared target, skipping undeclared ones."""
        pairs = {
            "revenue": self.revenue_target,
            "investment": self.investment_target,
            "green_investment": self.green_investment_target,
            "customers": self.customer_target,
            "sales": self.sales_target,
            "staff_hired": self.staff_hiring_target,
        }
        return {metric: target for metric, target in pairs.items() if target}

    def build(self) -> Requirement:
        reqs = [Req.business_count(bc.type, bc.count) for bc in self.business_counts]
        reqs += [Req.progress(metric, target) for metric, target in self.targets().items()]
        return Req.all(*reqs)


@dataclass(frozen=True)
class Reward:
    type: str
    value: int = 0
    id: str = ""
    description: str = ""


@dataclass
class RewardToken:
    """An unlockable reward earned by completing a special event."""

    id: str
    type: str
    description: str = ""
    from_event: str = ""
    date_awarded: int = 0


@dataclass(frozen=True)
class SpecialEventDef:
    """Static definition of a limited-time challenge."""

    id: str
    display_name: str = ""
    duration: int = 1
    requirements: EventRequirements = field(default_factory=EventRequirements)
    rewards: tuple[Reward, ...] = ()
    description: str = ""
    instructions: str = ""
    target_business_types: tuple[str, ...] = ()
    icon: str = ""
    rarity: str = "common"
    seasonal_month: int | None = None

    def __post_init__(self) -> None:
        if not self.display_name:
            object.__setattr__(self, "display_name", self.id)


@dataclass
class EventProgress:
    revenue: int = 0
    investment: int = 0
    green_investment: int = 0
    customers: int = 0
    sales: int = 0
    staff_hired: int = 0
    completed: bool = False

    def get(self, metric: str) -> int:
        if metric not in PROGRESS_METRICS:
            raise KeyError(metric)
        return getattr(self, metric)

    def add(self, metric: str, amount: int) -> None:
        setattr(self, metric, self.get(metric) + amount)


@dataclass
class SpecialEvent:
    """An active or completed special event.

    Requirements and rewards are copied from the definition when the event
    starts.
    """

    id: str
    name: str = ""
    start_day: int = 1
    end_day: int = 1
    requirements: EventRequirements = field(default_factory=EventRequirements)
    rewards: tuple[Reward, ...] = ()
    target_business_types: tuple[str, ...] = ()
    progress: EventProgress = field(default_factory=EventProgress)
    completed_day: int | None = None
    completed_year: int | None = None

    @classmethod
    def start(cls, definition: SpecialEventDef, day: int) -> SpecialEvent:
        return cls(
            id=definition.id,
            name=definition.display_name,
            start_day=day,
            end_day=day + definition.duration,
            requirements=definition.requirements,
            rewards=definition.rewards,
            target_business_types=definition.target_business_types,
        )

    def is_expired(self, day: int) -> bool:
        return day > self.end_day

    def requirements_met(self, state: GameState) -> bool:
        return self.requirements.build().evaluate(state, self)
