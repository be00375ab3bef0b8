"""Actions accepted by :meth:`tycoon.engine.GameEngine.transition`."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Action:
    """Base class for all actions."""


# ── Lifecycle ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class InitializeGame(Action):
    saved: Any = None  # serialized state (dict or JSON text), or None
    show_tutorial: bool = True


@dataclass(frozen=True)
class LoadSavedGame(Action):
    saved: Any = None


@dataclass(frozen=True)
class ResetGame(Action):
    show_tutorial: bool = True


# ── Economy ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class PurchaseBusiness(Action):
    business_type: str


@dataclass(frozen=True)
class CollectRevenue(Action):
    business_id: str


@dataclass(frozen=True)
class CollectAllRevenue(Action):
    pass


@dataclass(frozen=True)
class HireStaff(Action):
    staff_type: str


@dataclass(frozen=True)
class PurchaseUpgrade(Action):
    upgrade_type: str
    business_id: str


@dataclass(frozen=True)
class SellBusiness(Action):
    business_id: str


@dataclass(frozen=True)
class AdvanceDay(Action):
    pass


# ── Special events ───────────────────────────────────────────────────


@dataclass(frozen=True)
class StartSpecialEvent(Action):
    event_id: str


@dataclass(frozen=True)
class UpdateSpecialEventProgress(Action):
    event_id: str
    progress_type: str
    amount: int


@dataclass(frozen=True)
class CheckSpecialEventsProgress(Action):
    pass


@dataclass(frozen=True)
class TriggerSeasonalEvents(Action):
    month: int  # 1-12
    year: int


@dataclass(frozen=True)
class CompleteSpecialEvent(Action):
    event_id: str


# ── Notifications and UI flags ───────────────────────────────────────


@dataclass(frozen=True)
class AddNotification(Action):
    type: str
    message: str


@dataclass(frozen=True)
class ClearNotification(Action):
    notification_id: int


@dataclass(frozen=True)
class ClearAllNotifications(Action):
    pass


@dataclass(frozen=True)
class CloseTutorial(Action):
    pass
