from __future__ import annotations

from dataclasses import dataclass, field

from tycoon.effect import Effect


@dataclass(frozen=True)
class BusinessDef:
    """Static definition of a purchasable business type."""

    id: str
    display_name: str = ""
    base_price: int = 0
    base_revenue: int = 0
    unlock_level: int = 1
    description: str = ""
    icon: str = ""

    def __post_init__(self) -> None:
        if not self.display_name:
            object.__setattr__(self, "display_name", self.id)


@dataclass(frozen=True)
class UpgradeDef:
    """Static definition of an upgrade that can be applied to a business."""

    id: str
    display_name: str = ""
    base_price: int = 0
    effect: Effect | None = None
    description: str = ""
    icon: str = ""

    def __post_init__(self) -> None:
        if not self.display_name:
            object.__setattr__(self, "display_name", self.id)


@dataclass
class Upgrade:
    """An upgrade applied to one owned business."""

    id: str
    type: str
    effect: Effect | None = None


@dataclass
class Business:
    """Mutable runtime record of an owned business."""

    id: str
    type: str
    level: int = 1
    last_collected_day: int = 1
    purchased_on_day: int = 1
    upgrades: list[Upgrade] = field(default_factory=list)

    def can_collect(self, day: int) -> bool:
        return self.purchased_on_day != day and self.last_collected_day < day

    def has_upgrade(self, upgrade_type: str) -> bool:
        return any(u.type == upgrade_type for u in self.upgrades)
