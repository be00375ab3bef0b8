"""Hard-mode catalog: pricier businesses, thinner margins, level-gated unlocks.

Run with:  tycoon simulate --catalog examples.hard_mode --days 120
"""
from __future__ import annotations

from dataclasses import replace

from tycoon.content import define_catalog as define_stock_catalog
from tycoon.definition import Catalog, GameConfig
from tycoon.effect import Effect
from tycoon.market import MarketEventDef
from tycoon.special_event import BusinessCount, EventRequirements, Reward, SpecialEventDef

PRICE_FACTOR = 1.5
REVENUE_FACTOR = 0.8


def define_config() -> GameConfig:
    return GameConfig(
        name="Business Tycoon (Hard)",
        starting_money=8000,
        experience_to_first_level=1500,
        level_threshold_growth=1.75,
        enforce_unlocks=True,
        enforce_unique_staff=True,
        enforce_unique_upgrades=True,
    )


def define_catalog() -> Catalog:
    stock = define_stock_catalog()
    businesses = [
        replace(
            b,
            base_price=round(b.base_price * PRICE_FACTOR),
            base_revenue=round(b.base_revenue * REVENUE_FACTOR),
        )
        for b in stock.businesses
    ]
    # Listed first: a single draw picks the first event whose probability covers it
    market_events = [
        MarketEventDef(
            "supply_shock",
            "Supply Shock",
            Effect.revenue(-0.3, 2),
            probability=0.05,
            description="Shipping delays squeeze every business for two days.",
            icon="🚢",
        ),
    ] + stock.market_events
    special_events = stock.special_events + [
        SpecialEventDef(
            "morning_rush",
            "Morning Rush",
            duration=7,
            requirements=EventRequirements(
                business_counts=(BusinessCount("coffee_shop", 2),),
                revenue_target=3000,
            ),
            rewards=(
                Reward("money", 4000, description="$4,000 bonus"),
                Reward("experience", 500, description="500 XP"),
            ),
            description="Commuters want coffee. Lots of it.",
            instructions="Own two coffee shops and earn $3,000 within a week.",
            target_business_types=("coffee_shop",),
            icon="🌅",
        ),
    ]
    return Catalog(
        businesses=businesses,
        staff=list(stock.staff),
        upgrades=list(stock.upgrades),
        market_events=market_events,
        special_events=special_events,
    )
