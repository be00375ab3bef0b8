from __future__ import annotations

import copy
import math
import random
import string
import time
from datetime import datetime
from typing import Callable

from tycoon import codec
from tycoon._types import Clock, round_half_up, to_millis
from tycoon.action import (
    Action,
    AddNotification,
    AdvanceDay,
    CheckSpecialEventsProgress,
    ClearAllNotifications,
    ClearNotification,
    CloseTutorial,
    CollectAllRevenue,
    CollectRevenue,
    CompleteSpecialEvent,
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
from tycoon.business import Business, Upgrade
from tycoon.content import define_catalog
from tycoon.definition import Catalog, GameConfig
from tycoon.market import MarketEvent, age_market_events, roll_market_event
from tycoon.special_event import (
    PROGRESS_METRICS,
    TOKEN_REWARD_TYPES,
    RewardToken,
    SpecialEvent,
    SpecialEventDef,
)
from tycoon.staff import Staff
from tycoon.state import ERROR, INFO, SUCCESS, GameState

_ID_ALPHABET = string.ascii_lowercase + string.digits

GAME_OVER_MESSAGE = "GAME OVER: You are bankrupt! Your net worth has fallen below zero."


class GameEngine:
    """Applies actions to game states.

    ``transition`` is pure with respect to game state: it never mutates the
    state it is given and keeps nothing between calls. The only inputs beyond
    (state, action) are the injected RNG, used for market-event rolls, and the
    clock, used for instance ids and timestamps.
    """

    def __init__(
        self,
        catalog: Catalog | None = None,
        config: GameConfig | None = None,
        rng: random.Random | None = None,
        clock: Clock | None = None,
    ) -> None:
        catalog = catalog if catalog is not None else define_catalog()
        errors = catalog.validate()
        if errors:
            raise ValueError(
                "Invalid Catalog:\n" + "\n".join(f"  - {e}" for e in errors)
            )

        self.catalog = catalog
        self.config = config or GameConfig()
        self.rng = rng or random.Random()
        self.clock = clock or time.time
        self._handlers: dict[type[Action], Callable[[GameState, Action], GameState]] = {
            InitializeGame: self._initialize_game,
            LoadSavedGame: self._load_saved_game,
            ResetGame: self._reset_game,
            PurchaseBusiness: self._purchase_business,
            CollectRevenue: self._collect_revenue,
            CollectAllRevenue: self._collect_all_revenue,
            HireStaff: self._hire_staff,
            PurchaseUpgrade: self._purchase_upgrade,
            SellBusiness: self._sell_business,
            AdvanceDay: self._advance_day,
            StartSpecialEvent: self._start_special_event,
            UpdateSpecialEventProgress: self._update_special_event_progress,
            CheckSpecialEventsProgress: self._check_special_events_progress,
            TriggerSeasonalEvents: self._trigger_seasonal_events,
            CompleteSpecialEvent: self._complete_special_event,
            AddNotification: self._add_notification,
            ClearNotification: self._clear_notification,
            ClearAllNotifications: self._clear_all_notifications,
            CloseTutorial: self._close_tutorial,
        }

    # ── Entry point ──────────────────────────────────────────────────

    def transition(self, state: GameState, action: Action) -> GameState:
        """Return the state that results from applying *action* to *state*."""
        handler = self._handlers.get(type(action))
        if handler is None:
            raise TypeError(f"Unsupported action: {action!r}")
        return handler(state, action)

    def new_state(self, show_tutorial: bool = True) -> GameState:
        return GameState.fresh(self.config, show_tutorial=show_tutorial)

    # ── Economic calculations ────────────────────────────────────────

    def revenue_multiplier(self, state: GameState, business: Business) -> float:
        """1 + every staff, upgrade and active market effect that touches revenue."""
        multiplier = 1.0
        for member in state.staff:
            if member.effect is not None and member.effect.affects_revenue:
                multiplier += member.effect.value
        for upgrade in business.upgrades:
            if upgrade.effect is not None and upgrade.effect.affects_revenue:
                multiplier += upgrade.effect.value
        for event in state.market_events:
            if event.active and event.effect.affects_revenue:
                multiplier += event.effect.value
        return multiplier

    def compute_revenue(self, state: GameState, business: Business) -> int:
        bdef = self.catalog.get_business(business.type)
        if bdef is None:
            return 0
        base = bdef.base_revenue * business.level
        return round_half_up(base * self.revenue_multiplier(state, business))

    def sell_value(self, business: Business) -> int:
        value = self.catalog.business_price(business.type) * business.level
        for upgrade in business.upgrades:
            value += self.catalog.upgrade_price(upgrade.type)
        return value

    def hiring_cost(self, staff_type: str) -> int | None:
        sdef = self.catalog.get_staff(staff_type)
        if sdef is None:
            return None
        return sdef.base_salary * self.config.hiring_cost_multiplier

    # ── Lifecycle ────────────────────────────────────────────────────

    def _initialize_game(self, state: GameState, action: InitializeGame) -> GameState:
        loaded = codec.try_loads(action.saved)
        if loaded is None:
            loaded = self.new_state(show_tutorial=action.show_tutorial)
        loaded.initialized = True
        return loaded

    def _load_saved_game(self, state: GameState, action: LoadSavedGame) -> GameState:
        loaded = codec.try_loads(action.saved)
        if loaded is None:
            return self._refuse(state, "Saved game could not be read!")

        stamp = to_millis(self.clock())
        for event in loaded.market_events:
            suffix = "".join(self.rng.choice(_ID_ALPHABET) for _ in range(9))
            event.id = f"{event.type or event.id}_{stamp}_{suffix}"
        loaded.notifications = copy.deepcopy(state.notifications)
        loaded.notify(INFO, "Game loaded successfully!")
        return loaded

    def _reset_game(self, state: GameState, action: ResetGame) -> GameState:
        return self.new_state(show_tutorial=action.show_tutorial)

    # ── Economy ──────────────────────────────────────────────────────

    def _purchase_business(self, state: GameState, action: PurchaseBusiness) -> GameState:
        bdef = self.catalog.get_business(action.business_type)
        if bdef is None:
            return self._refuse(state, f"Unknown business type: {action.business_type}")
        if state.game_over:
            return self._refuse_game_over(state)
        if self.config.enforce_unlocks and state.level < bdef.unlock_level:
            return self._refuse(
                state, f"{bdef.display_name} unlocks at level {bdef.unlock_level}!"
            )
        if state.money < bdef.base_price:
            return self._refuse(state, "Not enough money to purchase this business!")

        new = copy.deepcopy(state)
        new.money -= bdef.base_price
        new.businesses.append(
            Business(
                id=self._unique_id(bdef.id, {b.id for b in new.businesses}),
                type=bdef.id,
                level=1,
                last_collected_day=new.day,
                purchased_on_day=new.day,
            )
        )
        new.notify(SUCCESS, f"Purchased a new {bdef.display_name}!")
        return new

    def _collect_revenue(self, state: GameState, action: CollectRevenue) -> GameState:
        business = state.find_business(action.business_id)
        if business is None:
            return self._refuse(state, "Business not found!")
        if state.game_over:
            return self._refuse_game_over(state)
        if business.purchased_on_day == state.day:
            return self._refuse(
                state,
                "This business was just purchased today! "
                "You can collect revenue starting tomorrow.",
            )
        if business.last_collected_day >= state.day:
            return self._refuse(
                state, "You've already collected revenue from this business today!"
            )

        revenue = self.compute_revenue(state, business)
        bdef = self.catalog.get_business(business.type)
        name = bdef.display_name if bdef else business.type

        new = copy.deepcopy(state)
        new.find_business(business.id).last_collected_day = new.day
        new.money += revenue
        new.stats.total_revenue += revenue
        new.notify(INFO, f"Collected ${revenue} from {name}!")
        return new

    def _collect_all_revenue(self, state: GameState, action: CollectAllRevenue) -> GameState:
        if not state.businesses:
            return self._refuse(
                state, "You don't own any businesses to collect revenue from!"
            )
        if state.game_over:
            return self._refuse_game_over(state)

        collectable = state.collectable_businesses()
        if not collectable:
            return self._refuse(
                state,
                "No revenue to collect! "
                "You've already collected from all your businesses today.",
                type=INFO,
            )

        total = sum(self.compute_revenue(state, b) for b in collectable)
        collected_ids = {b.id for b in collectable}

        new = copy.deepcopy(state)
        for business in new.businesses:
            if business.id in collected_ids:
                business.last_collected_day = new.day
        new.money += total
        new.stats.total_revenue += total
        new.notify(SUCCESS, f"Collected ${total} from {len(collectable)} businesses!")
        return new

    def _hire_staff(self, state: GameState, action: HireStaff) -> GameState:
        sdef = self.catalog.get_staff(action.staff_type)
        if sdef is None:
            return self._refuse(state, f"Unknown staff type: {action.staff_type}")
        if state.game_over:
            return self._refuse_game_over(state)
        if self.config.enforce_unique_staff and state.has_staff(sdef.id):
            return self._refuse(state, f"You already employ a {sdef.display_name}!")
        cost = sdef.base_salary * self.config.hiring_cost_multiplier
        if state.money < cost:
            return self._refuse(state, "Not enough money to hire this staff member!")

        new = copy.deepcopy(state)
        new.money -= cost
        new.stats.total_expenses += cost
        new.staff.append(
            Staff(
                id=self._unique_id(sdef.id, {s.id for s in new.staff}),
                type=sdef.id,
                salary=sdef.base_salary,
                effect=sdef.effect,
                level=1,
                hired_at=self.clock(),
            )
        )
        new.notify(SUCCESS, f"Hired a new {sdef.display_name}!")
        return new

    def _purchase_upgrade(self, state: GameState, action: PurchaseUpgrade) -> GameState:
        udef = self.catalog.get_upgrade(action.upgrade_type)
        if udef is None:
            return self._refuse(state, f"Unknown upgrade type: {action.upgrade_type}")
        business = state.find_business(action.business_id)
        if business is None:
            return self._refuse(state, "Business not found!")
        if state.game_over:
            return self._refuse_game_over(state)
        if self.config.enforce_unique_upgrades and business.has_upgrade(udef.id):
            return self._refuse(state, f"{udef.display_name} is already installed!")
        if state.money < udef.base_price:
            return self._refuse(state, "Not enough money for this upgrade!")

        new = copy.deepcopy(state)
        target = new.find_business(business.id)
        target.upgrades.append(
            Upgrade(
                id=self._unique_id(udef.id, {u.id for u in target.upgrades}),
                type=udef.id,
                effect=udef.effect,
            )
        )
        new.money -= udef.base_price
        new.stats.total_expenses += udef.base_price
        new.notify(SUCCESS, f"Purchased {udef.display_name} upgrade!")
        return new

    def _sell_business(self, state: GameState, action: SellBusiness) -> GameState:
        business = state.find_business(action.business_id)
        if business is None:
            return self._refuse(state, "Business not found!")
        if state.game_over:
            return self._refuse_game_over(state)

        value = self.sell_value(business)
        bdef = self.catalog.get_business(business.type)
        name = bdef.display_name if bdef else business.type

        new = copy.deepcopy(state)
        new.businesses = [b for b in new.businesses if b.id != business.id]
        new.money += value
        new.notify(SUCCESS, f"Sold {name} for ${value}!")
        return new

    def _advance_day(self, state: GameState, action: AdvanceDay) -> GameState:
        new = copy.deepcopy(state)
        if state.game_over:
            new.day += 1
            return new

        # 1. Salaries
        for member in new.staff:
            new.money -= member.salary
            new.stats.total_expenses += member.salary

        # 2-3. Market events: age, then at most one new event from a single draw
        new.market_events = age_market_events(new.market_events)
        started = roll_market_event(self.catalog.market_events, self.rng.random())
        if started is not None:
            new.market_events.append(
                MarketEvent.start(
                    started,
                    id=self._unique_id(started.id, {m.id for m in new.market_events}),
                    day=state.day,
                )
            )

        # 4. Experience and level-ups
        if new.businesses:
            new.experience += (
                self.config.base_daily_experience
                + self.config.experience_per_business * len(new.businesses)
            )
        self._apply_level_ups(new)

        # 5. Net worth
        new.stats.net_worth = new.net_worth(self.catalog)

        # 6. Bankruptcy
        if new.is_bankrupt(self.catalog):
            new.game_over = True
            new.market_events = []
            new.notifications = []
            new.notify(ERROR, GAME_OVER_MESSAGE)
        else:
            new.notifications = new.error_notifications()

        # 7. Next day
        new.day += 1
        return new

    def _apply_level_ups(self, state: GameState) -> None:
        while (
            state.experience_to_next_level > 0
            and state.experience >= state.experience_to_next_level
        ):
            state.level += 1
            state.experience -= state.experience_to_next_level
            state.experience_to_next_level = math.floor(
                state.experience_to_next_level * self.config.level_threshold_growth
            )

    # ── Special events ───────────────────────────────────────────────

    def _start_special_event(self, state: GameState, action: StartSpecialEvent) -> GameState:
        definition = self.catalog.get_special_event(action.event_id)
        if definition is None:
            return self._refuse(state, "Event not found!")
        if state.active_event(definition.id) is not None:
            return self._refuse(
                state, f"{definition.display_name} is already active!", type=INFO
            )
        new = copy.deepcopy(state)
        self._start_event_in_place(new, definition)
        return new

    def _update_special_event_progress(
        self, state: GameState, action: UpdateSpecialEventProgress
    ) -> GameState:
        if state.active_event(action.event_id) is None:
            return state
        if action.progress_type not in PROGRESS_METRICS or action.amount < 0:
            return state
        new = copy.deepcopy(state)
        new.active_event(action.event_id).progress.add(action.progress_type, action.amount)
        return new

    def _check_special_events_progress(
        self, state: GameState, action: CheckSpecialEventsProgress
    ) -> GameState:
        if not state.active_special_events:
            return state

        expired: list[SpecialEvent] = []
        completed: list[str] = []
        for event in state.active_special_events:
            if event.is_expired(state.day):
                expired.append(event)
            elif event.requirements_met(state):
                completed.append(event.id)

        if not expired and not completed:
            return state

        new = copy.deepcopy(state)
        for event_id in completed:
            self._complete_event_in_place(new, event_id)

        if expired:
            expired_ids = {e.id for e in expired}
            new.active_special_events = [
                e for e in new.active_special_events if e.id not in expired_ids
            ]
            for event in expired:
                new.notify(
                    INFO, f"The {event.name} special event has ended without completion."
                )
        return new

    def _trigger_seasonal_events(
        self, state: GameState, action: TriggerSeasonalEvents
    ) -> GameState:
        eligible = [
            definition
            for definition in self.catalog.special_events
            if definition.seasonal_month == action.month
            and state.active_event(definition.id) is None
            and not any(
                done.id == definition.id and done.completed_year == action.year
                for done in state.completed_special_events
            )
        ]
        if not eligible:
            return state

        new = copy.deepcopy(state)
        for definition in eligible:
            self._start_event_in_place(new, definition)
        return new

    def _complete_special_event(
        self, state: GameState, action: CompleteSpecialEvent
    ) -> GameState:
        if state.active_event(action.event_id) is None:
            return self._refuse(state, "Event not found or already completed!")
        new = copy.deepcopy(state)
        self._complete_event_in_place(new, action.event_id)
        return new

    def _start_event_in_place(self, state: GameState, definition: SpecialEventDef) -> None:
        state.active_special_events.append(SpecialEvent.start(definition, state.day))
        state.notify(
            SUCCESS,
            f"Special Event Started: {definition.display_name}! "
            "Complete the challenge for unique rewards.",
        )

    def _complete_event_in_place(self, state: GameState, event_id: str) -> None:
        event = state.active_event(event_id)
        state.active_special_events.remove(event)

        awarded_at = to_millis(self.clock())
        for reward in event.rewards:
            if reward.type == "money":
                state.money += reward.value
            elif reward.type == "experience":
                state.experience += reward.value
            elif reward.type in TOKEN_REWARD_TYPES:
                state.special_event_rewards.append(
                    RewardToken(
                        id=reward.id,
                        type=reward.type,
                        description=reward.description,
                        from_event=event.id,
                        date_awarded=awarded_at,
                    )
                )

        event.completed_day = state.day
        event.completed_year = datetime.fromtimestamp(self.clock()).year
        event.progress.completed = True
        state.completed_special_events.append(event)

        reward_text = ", ".join(r.description for r in event.rewards)
        state.notify(SUCCESS, f"Congratulations! You completed the {event.name} challenge!")
        state.notify(SUCCESS, f"Rewards earned: {reward_text}")

    # ── Notifications and UI flags ───────────────────────────────────

    def _add_notification(self, state: GameState, action: AddNotification) -> GameState:
        return self._refuse(state, action.message, type=action.type)

    def _clear_notification(self, state: GameState, action: ClearNotification) -> GameState:
        new = copy.deepcopy(state)
        new.notifications = [n for n in new.notifications if n.id != action.notification_id]
        return new

    def _clear_all_notifications(
        self, state: GameState, action: ClearAllNotifications
    ) -> GameState:
        new = copy.deepcopy(state)
        new.notifications = []
        return new

    def _close_tutorial(self, state: GameState, action: CloseTutorial) -> GameState:
        new = copy.deepcopy(state)
        new.show_tutorial = False
        return new

    # ── Private helpers ──────────────────────────────────────────────

    def _refuse(self, state: GameState, message: str, type: str = ERROR) -> GameState:
        """Copy of *state* with one added notification and nothing else changed."""
        new = copy.deepcopy(state)
        new.notify(type, message)
        return new

    def _refuse_game_over(self, state: GameState) -> GameState:
        return self._refuse(state, "The game is over. Start a new game to keep playing.")

    def _unique_id(self, prefix: str, taken: set[str]) -> str:
        """``<prefix>_<epoch ms>``, suffixed when that id is already in use."""
        base = f"{prefix}_{to_millis(self.clock())}"
        candidate = base
        n = 2
        while candidate in taken:
            candidate = f"{base}_{n}"
            n += 1
        return candidate


_default_engine: GameEngine | None = None


def transition(state: GameState, action: Action) -> GameState:
    """Apply *action* with a shared engine over the stock catalog."""
    global _default_engine
    if _default_engine is None:
        _default_engine = GameEngine()
    return _default_engine.transition(state, action)
