from __future__ import annotations

from dataclasses import dataclass, field

from tycoon.business import BusinessDef, UpgradeDef
from tycoon.market import MarketEventDef
from tycoon.special_event import DIRECT_REWARD_TYPES, TOKEN_REWARD_TYPES, SpecialEventDef
from tycoon.staff import StaffDef


@dataclass
class GameConfig:
    """Economic constants and rule switches for a game."""

    name: str = "Business Tycoon"
    starting_money: int = 10000
    experience_to_first_level: int = 1000
    level_threshold_growth: float = 1.5
    base_daily_experience: int = 100
    experience_per_business: int = 50
    hiring_cost_multiplier: int = 3
    # Rules the game UI applied on its own; off by default.
    enforce_unlocks: bool = False
    enforce_unique_staff: bool = False
    enforce_unique_upgrades: bool = False


@dataclass
class Catalog:
    """Complete static definition of the purchasable and random content."""

    businesses: list[BusinessDef] = field(default_factory=list)
    staff: list[StaffDef] = field(default_factory=list)
    upgrades: list[UpgradeDef] = field(default_factory=list)
    market_events: list[MarketEventDef] = field(default_factory=list)
    special_events: list[SpecialEventDef] = field(default_factory=list)

    # Lookup dicts built in __post_init__
    _businesses_by_id: dict[str, BusinessDef] = field(
        default_factory=dict, init=False, repr=False
    )
    _staff_by_id: dict[str, StaffDef] = field(
        default_factory=dict, init=False, repr=False
    )
    _upgrades_by_id: dict[str, UpgradeDef] = field(
        default_factory=dict, init=False, repr=False
    )
    _market_events_by_id: dict[str, MarketEventDef] = field(
        default_factory=dict, init=False, repr=False
    )
    _special_events_by_id: dict[str, SpecialEventDef] = field(
        default_factory=dict, init=False, repr=False
    )

    def __post_init__(self) -> None:
        self._businesses_by_id = {b.id: b for b in self.businesses}
        self._staff_by_id = {s.id: s for s in self.staff}
        self._upgrades_by_id = {u.id: u for u in self.upgrades}
        self._market_events_by_id = {m.id: m for m in self.market_events}
        self._special_events_by_id = {e.id: e for e in self.special_events}

    def get_business(self, id: str) -> BusinessDef | None:
        return self._businesses_by_id.get(id)

    def get_staff(self, id: str) -> StaffDef | None:
        return self._staff_by_id.get(id)

    def get_upgrade(self, id: str) -> UpgradeDef | None:
        return self._upgrades_by_id.get(id)

    def get_market_event(self, id: str) -> MarketEventDef | None:
        return self._market_events_by_id.get(id)

    def get_special_event(self, id: str) -> SpecialEventDef | None:
        return self._special_events_by_id.get(id)

    def business_price(self, id: str) -> int:
        bdef = self.get_business(id)
        return bdef.base_price if bdef else 0

    def upgrade_price(self, id: str) -> int:
        udef = self.get_upgrade(id)
        return udef.base_price if udef else 0

    def unlocked_businesses(self, level: int) -> list[BusinessDef]:
        return [b for b in self.businesses if b.unlock_level <= level]

    def validate(self) -> list[str]:
        """Check for common catalog errors. Returns list of error messages."""
        errors: list[str] = []

        for kind, items in (
            ("business", self.businesses),
            ("staff", self.staff),
            ("upgrade", self.upgrades),
            ("market event", self.market_events),
            ("special event", self.special_events),
        ):
            seen: set[str] = set()
            for item in items:
                if item.id in seen:
                    errors.append(f"Duplicate {kind} ID: {item.id!r}")
                seen.add(item.id)

        for b in self.businesses:
            if b.base_price <= 0:
                errors.append(f"Business {b.id!r} must have a positive base_price")
            if b.base_revenue < 0:
                errors.append(f"Business {b.id!r} has negative base_revenue")

        for s in self.staff:
            if s.base_salary <= 0:
                errors.append(f"Staff {s.id!r} must have a positive base_salary")

        for u in self.upgrades:
            if u.base_price <= 0:
                errors.append(f"Upgrade {u.id!r} must have a positive base_price")

        for m in self.market_events:
            if not 0.0 <= m.probability <= 1.0:
                errors.append(
                    f"Market event {m.id!r} probability {m.probability} outside [0, 1]"
                )
            if m.duration <= 0:
                errors.append(f"Market event {m.id!r} must last at least one day")

        business_ids = set(self._businesses_by_id)
        for e in self.special_events:
            if e.duration <= 0:
                errors.append(f"Special event {e.id!r} must last at least one day")
            for bc in e.requirements.business_counts:
                if bc.type not in business_ids:
                    errors.append(
                        f"Special event {e.id!r} requires unknown business {bc.type!r}"
                    )
            for btype in e.target_business_types:
                if btype not in business_ids:
                    errors.append(
                        f"Special event {e.id!r} targets unknown business {btype!r}"
                    )
            for reward in e.rewards:
                if reward.type not in DIRECT_REWARD_TYPES | TOKEN_REWARD_TYPES:
                    errors.append(
                        f"Special event {e.id!r} has unknown reward type {reward.type!r}"
                    )
            if e.seasonal_month is not None and not 1 <= e.seasonal_month <= 12:
                errors.append(
                    f"Special event {e.id!r} seasonal_month {e.seasonal_month} not in 1-12"
                )

        return errors
