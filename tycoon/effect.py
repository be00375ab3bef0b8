from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EffectType(str, Enum):
    REVENUE = "revenue"
    PRODUCTIVITY = "productivity"
    EFFICIENCY = "efficiency"
    EXPENSES = "expenses"
    ALL = "all"
    SPECIFIC_BUSINESS = "specific_business"


# Only these effect types change the revenue a business yields on collection.
REVENUE_EFFECT_TYPES: frozenset[EffectType] = frozenset(
    {EffectType.REVENUE, EffectType.PRODUCTIVITY, EffectType.ALL}
)


@dataclass(frozen=True)
class Effect:
    """A typed modifier carried by staff, upgrades and market events.

    Instances are immutable. Hiring staff or applying an upgrade stores the
    catalog's Effect object on the new instance, so replacing a catalog entry
    later never changes what existing staff or upgrades do.
    """

    type: EffectType
    value: float = 0.0
    duration: int | None = None

    @property
    def affects_revenue(self) -> bool:
        return self.type in REVENUE_EFFECT_TYPES

    @staticmethod
    def revenue(value: float, duration: int | None = None) -> Effect:
        return Effect(EffectType.REVENUE, value, duration)

    @staticmethod
    def expenses(value: float, duration: int | None = None) -> Effect:
        return Effect(EffectType.EXPENSES, value, duration)
