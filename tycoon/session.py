from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import date, datetime

from tycoon._types import Clock
from tycoon.action import (
    Action,
    AddNotification,
    AdvanceDay,
    CheckSpecialEventsProgress,
    CloseTutorial,
    CollectAllRevenue,
    CollectRevenue,
    HireStaff,
    InitializeGame,
    LoadSavedGame,
    PurchaseBusiness,
    PurchaseUpgrade,
    ResetGame,
    SellBusiness,
    StartSpecialEvent,
    TriggerSeasonalEvents,
    UpdateSpecialEventProgress,
)
from tycoon.codec import state_to_dict
from tycoon.engine import GameEngine
from tycoon.state import ERROR, INFO, SUCCESS, GameState
from tycoon.store import LEADERBOARD_SIZE, LeaderboardEntry, MemoryStore, StateStore, StoreError

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Welcome to Business Tycoon! Start by purchasing your first business."


@dataclass
class SessionConfig:
    """Host-side settings for a play session."""

    autosave_interval: float = 300.0  # seconds
    disable_tutorial: bool = False


@dataclass
class SaveStatus:
    success: bool
    message: str
    saved_at: float | None = None
    used_fallback: bool = False


class GameSession:
    """Hosts one player's game: owns the current state, feeds actions to the
    engine, and decides when the state is loaded from and saved to the store.

    Store failures never touch the in-memory state. They are logged and the
    state is written to ``local_cache`` instead.
    """

    def __init__(
        self,
        user_id: str,
        store: StateStore,
        engine: GameEngine | None = None,
        config: SessionConfig | None = None,
        local_cache: StateStore | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.user_id = user_id
        self.store = store
        self.engine = engine or GameEngine()
        self.config = config or SessionConfig()
        self.local_cache = local_cache if local_cache is not None else MemoryStore()
        self.clock = clock or time.time

        self.state: GameState = self.engine.new_state(show_tutorial=self._tutorial_on)
        self.last_save: SaveStatus | None = None
        self._last_save_time: float = self.clock()
        self._seasonal_checked_on: date | None = None

    @property
    def _tutorial_on(self) -> bool:
        return not self.config.disable_tutorial

    # ── Lifecycle ────────────────────────────────────────────────────

    def start(self) -> GameState:
        """Load the saved game once, or start fresh when there is none."""
        try:
            saved = self.store.load(self.user_id)
        except StoreError as exc:
            logger.error("Failed to load game for %r: %s", self.user_id, exc)
            self._initialize_from_cache()
            return self.state

        if saved is not None:
            logger.info("Loaded saved game for %r", self.user_id)
            self._apply(LoadSavedGame(saved=state_to_dict(saved)))
            self.state.initialized = True
            return self.state

        logger.info("No saved game for %r, starting a new game", self.user_id)
        self._initialize_from_cache()
        self._apply(AddNotification(INFO, WELCOME_MESSAGE))
        return self.state

    def reset(self) -> GameState:
        """Discard the game, e.g. on logout."""
        self._apply(ResetGame(show_tutorial=self._tutorial_on))
        try:
            self.local_cache.delete(self.user_id)
        except StoreError as exc:
            logger.warning("Could not clear cached game for %r: %s", self.user_id, exc)
        return self.state

    def disable_tutorial_permanently(self) -> None:
        self.config.disable_tutorial = True
        self._apply(CloseTutorial())

    # ── Actions ──────────────────────────────────────────────────────

    def dispatch(self, action: Action) -> GameState:
        """Apply *action*, track special-event progress, and save when due."""
        before = self.state
        self._apply(action)
        after = self.state
        if after is not before:
            self._feed_special_events(before, after, action)

        if isinstance(action, AdvanceDay):
            self.save(notify=False)
        elif after.game_over and not before.game_over:
            self.save(notify=False)
        return self.state

    def purchase_business(self, business_type: str) -> GameState:
        return self.dispatch(PurchaseBusiness(business_type))

    def collect_revenue(self, business_id: str) -> GameState:
        return self.dispatch(CollectRevenue(business_id))

    def collect_all_revenue(self) -> GameState:
        return self.dispatch(CollectAllRevenue())

    def hire_staff(self, staff_type: str) -> GameState:
        return self.dispatch(HireStaff(staff_type))

    def purchase_upgrade(self, upgrade_type: str, business_id: str) -> GameState:
        return self.dispatch(PurchaseUpgrade(upgrade_type, business_id))

    def sell_business(self, business_id: str) -> GameState:
        return self.dispatch(SellBusiness(business_id))

    def advance_day(self) -> GameState:
        return self.dispatch(AdvanceDay())

    def start_special_event(self, event_id: str) -> GameState:
        return self.dispatch(StartSpecialEvent(event_id))

    # ── Persistence ──────────────────────────────────────────────────

    def save(self, notify: bool = True) -> SaveStatus:
        """Write the current state to the store, or to the local cache on failure.

        With *notify*, the outcome is also reported as a notification, as a
        manual save from the player would be.
        """
        now = self.clock()
        self._last_save_time = now
        try:
            self.store.save(self.user_id, self.state)
        except (StoreError, OSError) as exc:
            logger.error("Failed to save game for %r: %s", self.user_id, exc)
            status = SaveStatus(
                success=False,
                message="Failed to save game. Please try again.",
                used_fallback=self._save_cached(),
            )
            if notify:
                self._apply(AddNotification(ERROR, status.message))
            self.last_save = status
            return status

        self._save_cached()
        status = SaveStatus(success=True, message="Game saved successfully!", saved_at=now)
        if notify:
            self._apply(AddNotification(SUCCESS, status.message))
        self.last_save = status
        return status

    def leaderboard(self, limit: int = LEADERBOARD_SIZE) -> list[LeaderboardEntry]:
        return self.store.leaderboard(limit)

    # ── Timer-driven checks ──────────────────────────────────────────

    def poll(self, now: datetime | None = None) -> GameState:
        """Run the periodic checks a host timer calls about once a minute.

        Active special events are checked for completion or expiry, seasonal
        events are triggered at most once per calendar day, and the game is
        autosaved once ``autosave_interval`` seconds have passed since the
        last save. Calling this with nothing to do changes nothing.
        """
        if not self.state.initialized:
            return self.state
        now = now or datetime.fromtimestamp(self.clock())

        if self.state.active_special_events:
            self.dispatch(CheckSpecialEventsProgress())

        if self._seasonal_checked_on != now.date():
            self._seasonal_checked_on = now.date()
            self.dispatch(TriggerSeasonalEvents(month=now.month, year=now.year))

        if self.clock() - self._last_save_time >= self.config.autosave_interval:
            self.save(notify=False)
        return self.state

    # ── Private helpers ──────────────────────────────────────────────

    def _apply(self, action: Action) -> None:
        self.state = self.engine.transition(self.state, action)

    def _feed_special_events(
        self, before: GameState, after: GameState, action: Action
    ) -> None:
        """Credit what an action achieved to every active special event."""
        if not after.active_special_events:
            return

        updates: list[tuple[str, int]] = []
        revenue = after.stats.total_revenue - before.stats.total_revenue
        if revenue > 0:
            updates.append(("revenue", revenue))
        if isinstance(action, HireStaff) and len(after.staff) > len(before.staff):
            updates.append(("staff_hired", 1))

        invested = 0
        upgraded_type: str | None = None
        if isinstance(action, PurchaseUpgrade):
            invested = after.stats.total_expenses - before.stats.total_expenses
            business = after.find_business(action.business_id)
            upgraded_type = business.type if business else None

        for event in list(after.active_special_events):
            for metric, amount in updates:
                self._apply(UpdateSpecialEventProgress(event.id, metric, amount))
            if invested > 0:
                self._apply(UpdateSpecialEventProgress(event.id, "investment", invested))
                if upgraded_type in event.target_business_types:
                    self._apply(
                        UpdateSpecialEventProgress(event.id, "green_investment", invested)
                    )

    def _initialize_from_cache(self) -> None:
        cached = self._load_cached()
        self._apply(InitializeGame(
            saved=state_to_dict(cached) if cached is not None else None,
            show_tutorial=self._tutorial_on,
        ))

    def _load_cached(self) -> GameState | None:
        try:
            return self.local_cache.load(self.user_id)
        except StoreError as exc:
            logger.warning("Could not read cached game for %r: %s", self.user_id, exc)
            return None

    def _save_cached(self) -> bool:
        try:
            self.local_cache.save(self.user_id, self.state)
        except (StoreError, OSError) as exc:
            logger.error("Failed to cache game for %r locally: %s", self.user_id, exc)
            return False
        return True
