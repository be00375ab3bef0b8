# tycoon: Business Tycoon game-state engine, persistence host & autoplay simulation

from tycoon._types import compare, round_half_up
from tycoon.requirement import Requirement, Req
from tycoon.effect import EffectType, Effect
from tycoon.business import BusinessDef, UpgradeDef, Business, Upgrade
from tycoon.staff import StaffDef, Staff
from tycoon.market import MarketEventDef, MarketEvent
from tycoon.special_event import (
    BusinessCount,
    EventRequirements,
    Reward,
    RewardToken,
    SpecialEventDef,
    SpecialEvent,
    EventProgress,
)
from tycoon.definition import Catalog, GameConfig
from tycoon.content import define_catalog
from tycoon.state import GameState, Notification, Stats
from tycoon.action import (
    Action,
    InitializeGame,
    LoadSavedGame,
    ResetGame,
    PurchaseBusiness,
    CollectRevenue,
    CollectAllRevenue,
    HireStaff,
    PurchaseUpgrade,
    SellBusiness,
    AdvanceDay,
    StartSpecialEvent,
    UpdateSpecialEventProgress,
    CheckSpecialEventsProgress,
    TriggerSeasonalEvents,
    CompleteSpecialEvent,
    AddNotification,
    ClearNotification,
    ClearAllNotifications,
    CloseTutorial,
)
from tycoon.engine import GameEngine, transition
from tycoon.codec import CodecError, dumps, loads, try_loads
from tycoon.store import StateStore, MemoryStore, JsonFileStore, LeaderboardEntry, StoreError
from tycoon.session import GameSession, SessionConfig, SaveStatus
from tycoon.terminal import TerminalCondition, Terminal, SimulationContext
from tycoon.strategy import (
    Strategy,
    GreedyCheapest,
    GreedyROI,
    PriorityList,
    CustomStrategy,
)
from tycoon.metrics import MetricsCollector
from tycoon.simulation import Simulation
from tycoon.report import SimulationReport, build_report
from tycoon.formatting import format_text_report

__all__ = [
    # Types
    "compare",
    "round_half_up",
    # Requirements
    "Requirement",
    "Req",
    # Effects
    "EffectType",
    "Effect",
    # Catalog data
    "BusinessDef",
    "UpgradeDef",
    "StaffDef",
    "MarketEventDef",
    "SpecialEventDef",
    "BusinessCount",
    "EventRequirements",
    "Reward",
    # Definition
    "Catalog",
    "GameConfig",
    "define_catalog",
    # State
    "GameState",
    "Notification",
    "Stats",
    "Business",
    "Upgrade",
    "Staff",
    "MarketEvent",
    "SpecialEvent",
    "EventProgress",
    "RewardToken",
    # Actions
    "Action",
    "InitializeGame",
    "LoadSavedGame",
    "ResetGame",
    "PurchaseBusiness",
    "CollectRevenue",
    "CollectAllRevenue",
    "HireStaff",
    "PurchaseUpgrade",
    "SellBusiness",
    "AdvanceDay",
    "StartSpecialEvent",
    "UpdateSpecialEventProgress",
    "CheckSpecialEventsProgress",
    "TriggerSeasonalEvents",
    "CompleteSpecialEvent",
    "AddNotification",
    "ClearNotification",
    "ClearAllNotifications",
    "CloseTutorial",
    # Engine
    "GameEngine",
    "transition",
    # Persistence
    "CodecError",
    "dumps",
    "loads",
    "try_loads",
    "StateStore",
    "MemoryStore",
    "JsonFileStore",
    "LeaderboardEntry",
    "StoreError",
    "GameSession",
    "SessionConfig",
    "SaveStatus",
    # Terminal
    "TerminalCondition",
    "Terminal",
    "SimulationContext",
    # Strategy
    "Strategy",
    "GreedyCheapest",
    "GreedyROI",
    "PriorityList",
    "CustomStrategy",
    # Simulation
    "MetricsCollector",
    "Simulation",
    "SimulationReport",
    "build_report",
    # Formatting
    "format_text_report",
]
