from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tycoon.business import Business
from tycoon.market import MarketEvent
from tycoon.special_event import RewardToken, SpecialEvent
from tycoon.staff import Staff

if TYPE_CHECKING:
    from tycoon.definition import Catalog, GameConfig

SUCCESS = "success"
INFO = "info"
ERROR = "error"
NOTIFICATION_TYPES = (SUCCESS, INFO, ERROR)


@dataclass
class Stats:
    total_revenue: int = 0
    total_expenses: int = 0
    net_worth: int = 0


@dataclass
class Notification:
    id: int
    type: str
    message: str


@dataclass
class GameState:
    """The whole persisted game: one aggregate owned by the engine.

    The engine never mutates a state it was handed; it copies, applies the
    action to the copy and returns it.
    """

    money: int = 0
    day: int = 1
    level: int = 1
    experience: int = 0
    experience_to_next_level: int = 1000
    businesses: list[Business] = field(default_factory=list)
    staff: list[Staff] = field(default_factory=list)
    market_events: list[MarketEvent] = field(default_factory=list)
    active_special_events: list[SpecialEvent] = field(default_factory=list)
    completed_special_events: list[SpecialEvent] = field(default_factory=list)
    special_event_rewards: list[RewardToken] = field(default_factory=list)
    stats: Stats = field(default_factory=Stats)
    notifications: list[Notification] = field(default_factory=list)
    game_over: bool = False
    initialized: bool = False
    show_tutorial: bool = True

    @classmethod
    def fresh(cls, config: GameConfig, show_tutorial: bool = True) -> GameState:
        return cls(
            money=config.starting_money,
            experience_to_next_level=config.experience_to_first_level,
            stats=Stats(net_worth=config.starting_money),
            show_tutorial=show_tutorial,
        )

    # ── Queries ──────────────────────────────────────────────────────

    def business_count(self, business_type: str) -> int:
        return sum(1 for b in self.businesses if b.type == business_type)

    def find_business(self, business_id: str) -> Business | None:
        for business in self.businesses:
            if business.id == business_id:
                return business
        return None

    def has_staff(self, staff_type: str) -> bool:
        return any(s.type == staff_type for s in self.staff)

    def active_event(self, event_id: str) -> SpecialEvent | None:
        for event in self.active_special_events:
            if event.id == event_id:
                return event
        return None

    def collectable_businesses(self) -> list[Business]:
        return [b for b in self.businesses if b.can_collect(self.day)]

    def business_value(self, catalog: Catalog) -> int:
        return sum(catalog.business_price(b.type) * b.level for b in self.businesses)

    def net_worth(self, catalog: Catalog) -> int:
        """Cash plus the catalog value of every owned business."""
        return self.money + self.business_value(catalog)

    def is_bankrupt(self, catalog: Catalog) -> bool:
        return self.net_worth(catalog) < 0 or (self.money <= 0 and not self.businesses)

    # ── Notifications ────────────────────────────────────────────────

    def notify(self, type: str, message: str) -> Notification:
        """Append a notification with an id unique within the current list."""
        next_id = max((n.id for n in self.notifications), default=0) + 1
        notification = Notification(id=next_id, type=type, message=message)
        self.notifications.append(notification)
        return notification

    def error_notifications(self) -> list[Notification]:
        return [n for n in self.notifications if n.type == ERROR]
