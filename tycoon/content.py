"""The stock Business Tycoon catalog."""
from __future__ import annotations

from tycoon.business import BusinessDef, UpgradeDef
from tycoon.definition import Catalog
from tycoon.effect import Effect, EffectType
from tycoon.market import MarketEventDef
from tycoon.special_event import BusinessCount, EventRequirements, Reward, SpecialEventDef
from tycoon.staff import StaffDef


def _businesses() -> list[BusinessDef]:
    return [
        BusinessDef("coffee_shop", "Coffee Shop", 5000, 500, 1,
                    "A small coffee shop serving hot beverages and pastries.", "☕"),
        BusinessDef("restaurant", "Restaurant", 25000, 2000, 3,
                    "A mid-sized restaurant offering full meals and drinks.", "🍽️"),
        BusinessDef("retail_store", "Retail Store", 50000, 3500, 5,
                    "A retail store selling various consumer goods.", "🛍️"),
        BusinessDef("tech_startup", "Tech Startup", 100000, 8000, 8,
                    "A technology startup developing innovative products.", "💻"),
        BusinessDef("factory", "Factory", 250000, 15000, 10,
                    "A manufacturing facility producing goods at scale.", "🏭"),
        BusinessDef("food_delivery", "Food Delivery Service", 60000, 4500, 4,
                    "Connect restaurants with hungry customers for a percentage of each order.", "🚚"),
        BusinessDef("fitness_center", "Fitness Center", 80000, 6000, 5,
                    "Offer membership-based fitness services with recurring revenue.", "💪"),
        BusinessDef("ecommerce_platform", "E-commerce Platform", 120000, 9000, 6,
                    "Sell products online with lower overhead than traditional retail.", "🛒"),
        BusinessDef("real_estate_agency", "Real Estate Agency", 75000, 5000, 7,
                    "Buy and sell properties for clients, earning substantial commissions.", "🏠"),
        BusinessDef("entertainment_venue", "Entertainment Venue", 150000, 10000, 8,
                    "Host events, concerts, and shows that draw large crowds.", "🎭"),
        BusinessDef("educational_institute", "Educational Institute", 175000, 10500, 8,
                    "Provide valuable education services with steady enrollment-based income.", "🎓"),
        BusinessDef("hotel_chain", "Hotel Chain", 200000, 12000, 9,
                    "Provide luxury accommodations with high margins but significant overhead.", "🏨"),
        BusinessDef("mobile_app_studio", "Mobile App Studio", 180000, 11000, 9,
                    "Develop and monetize mobile applications with potential viral growth.", "📱"),
        BusinessDef("healthcare_clinic", "Healthcare Clinic", 300000, 18000, 12,
                    "Provide essential medical services with stable, recession-resistant income.", "🏥"),
        BusinessDef("renewable_energy", "Renewable Energy Farm", 400000, 22000, 15,
                    "Generate clean energy with high initial costs but excellent long-term returns.", "♻️"),
    ]


def _staff() -> list[StaffDef]:
    return [
        StaffDef("manager", "Manager", 1000, Effect(EffectType.EFFICIENCY, 0.1),
                 "Increases business efficiency by 10%", "👨‍💼"),
        StaffDef("marketer", "Marketing Specialist", 1200, Effect(EffectType.REVENUE, 0.15),
                 "Increases revenue by 15%", "📊"),
        StaffDef("accountant", "Accountant", 1100, Effect(EffectType.EXPENSES, -0.1),
                 "Reduces expenses by 10%", "📝"),
        StaffDef("consultant", "Business Consultant", 2000, Effect(EffectType.ALL, 0.05),
                 "Provides strategic advice, increasing all metrics by 5%", "🧠"),
    ]


def _upgrades() -> list[UpgradeDef]:
    return [
        UpgradeDef("equipment", "Better Equipment", 5000, Effect(EffectType.PRODUCTIVITY, 0.2),
                   "Upgrade equipment to increase productivity by 20%", "🔧"),
        UpgradeDef("training", "Staff Training", 3000, Effect(EffectType.EFFICIENCY, 0.15),
                   "Train staff to improve efficiency by 15%", "📚"),
        UpgradeDef("marketing", "Marketing Campaign", 8000, Effect(EffectType.REVENUE, 0.25),
                   "Launch a marketing campaign to increase revenue by 25%", "📣"),
        UpgradeDef("automation", "Automation Systems", 15000, Effect(EffectType.EXPENSES, -0.2),
                   "Implement automation to reduce costs by 20%", "🤖"),
    ]


def _market_events() -> list[MarketEventDef]:
    return [
        MarketEventDef("economic_boom", "Economic Boom", Effect.revenue(0.3, 5), 0.1,
                       "The economy is thriving! All businesses generate 30% more revenue.", "📈"),
        MarketEventDef("recession", "Economic Recession", Effect.revenue(-0.25, 5), 0.1,
                       "Economic downturn! All businesses generate 25% less revenue.", "📉"),
        MarketEventDef("tax_cut", "Tax Cut", Effect.expenses(-0.15, 3), 0.15,
                       "Government reduces taxes! Your expenses decrease by 15%.", "💰"),
        MarketEventDef("tax_increase", "Tax Increase", Effect.expenses(0.15, 3), 0.15,
                       "Government increases taxes! Your expenses increase by 15%.", "💸"),
        MarketEventDef("new_trend", "New Market Trend",
                       Effect(EffectType.SPECIFIC_BUSINESS, 0.4, 4), 0.2,
                       "A new trend emerges! One random business type gets a 40% revenue boost.", "🌟"),
    ]


def _special_events() -> list[SpecialEventDef]:
    return [
        SpecialEventDef(
            id="black_friday_rush",
            display_name="Black Friday Rush",
            duration=5,
            requirements=EventRequirements(
                business_counts=(BusinessCount("retail_store", 3),),
                revenue_target=50000,
            ),
            rewards=(
                Reward("money", 25000, description="Cash Bonus: $25,000"),
                Reward("upgrade", id="premium_inventory",
                       description="Premium Inventory: +30% revenue for all retail businesses"),
            ),
            description="The biggest shopping day of the year! Can your retail businesses handle the rush?",
            instructions="Own at least 3 Retail Stores and generate $50,000 in revenue within 5 days.",
            target_business_types=("retail_store", "ecommerce_platform"),
            icon="🛍️",
            rarity="common",
            seasonal_month=11,
        ),
        SpecialEventDef(
            id="summer_tourism_boom",
            display_name="Summer Tourism Boom",
            duration=7,
            requirements=EventRequirements(
                business_counts=(
                    BusinessCount("hotel_chain", 2),
                    BusinessCount("entertainment_venue", 1),
                ),
                revenue_target=100000,
            ),
            rewards=(
                Reward("money", 50000, description="Tourism Grant: $50,000"),
                Reward("staff", id="tourism_director",
                       description="Tourism Director: +25% revenue for hotels and entertainment venues"),
            ),
            description="Tourist season is here! Hotels and entertainment venues are seeing unprecedented demand.",
            instructions="Own at least 2 Hotel Chains and 1 Entertainment Venue, then collect $100,000 in revenue during the event.",
            target_business_types=("hotel_chain", "entertainment_venue", "restaurant"),
            icon="🏖️",
            rarity="uncommon",
            seasonal_month=6,
        ),
        SpecialEventDef(
            id="tech_innovation_expo",
            display_name="Tech Innovation Expo",
            duration=10,
            requirements=EventRequirements(
                business_counts=(
                    BusinessCount("tech_startup", 2),
                    BusinessCount("mobile_app_studio", 1),
                ),
                investment_target=200000,
            ),
            rewards=(
                Reward("money", 100000, description="Innovation Grant: $100,000"),
                Reward("upgrade", id="breakthrough_technology",
                       description="Breakthrough Technology: +40% revenue for all tech businesses"),
                Reward("experience", 5000, description="Industry Recognition: +5,000 XP"),
            ),
            description="The world's biggest tech expo is happening! Showcase your tech startups and mobile apps.",
            instructions="Own at least 2 Tech Startups and 1 Mobile App Studio, then invest $200,000 in upgrades during the event.",
            target_business_types=("tech_startup", "mobile_app_studio"),
            icon="💻",
            rarity="rare",
            seasonal_month=3,
        ),
        SpecialEventDef(
            id="health_awareness_week",
            display_name="Health Awareness Week",
            duration=7,
            requirements=EventRequirements(
                business_counts=(
                    BusinessCount("healthcare_clinic", 2),
                    BusinessCount("fitness_center", 2),
                ),
                customer_target=1000,
            ),
            rewards=(
                Reward("money", 75000, description="Health Initiative Grant: $75,000"),
                Reward("upgrade", id="wellness_certification",
                       description="Wellness Certification: +35% revenue for health and fitness businesses"),
            ),
            description="A nationwide focus on health and wellness is driving customers to health-related businesses.",
            instructions="Own at least 2 Healthcare Clinics and 2 Fitness Centers, then serve 1,000 customers during the event.",
            target_business_types=("healthcare_clinic", "fitness_center"),
            icon="❤️",
            rarity="uncommon",
            seasonal_month=1,
        ),
        SpecialEventDef(
            id="global_sustainability_summit",
            display_name="Global Sustainability Summit",
            duration=14,
            requirements=EventRequirements(
                business_counts=(BusinessCount("renewable_energy", 3),),
                green_investment_target=500000,
            ),
            rewards=(
                Reward("money", 250000, description="Sustainability Grant: $250,000"),
                Reward("upgrade", id="carbon_neutral_certification",
                       description="Carbon Neutral Certification: +50% revenue for renewable energy businesses"),
                Reward("special_business", id="advanced_research_lab",
                       description="Unlock Advanced Research Lab business type"),
                Reward("experience", 10000, description="Global Recognition: +10,000 XP"),
            ),
            description="The world is focusing on sustainable business practices. Showcase your commitment to green energy!",
            instructions="Own at least 3 Renewable Energy Farms and invest $500,000 in green upgrades during the event.",
            target_business_types=("renewable_energy",),
            icon="🌍",
            rarity="legendary",
            seasonal_month=4,
        ),
        SpecialEventDef(
            id="food_festival_frenzy",
            display_name="Food Festival Frenzy",
            duration=5,
            requirements=EventRequirements(
                business_counts=(
                    BusinessCount("restaurant", 3),
                    BusinessCount("food_delivery", 2),
                ),
                revenue_target=75000,
            ),
            rewards=(
                Reward("money", 40000, description="Culinary Award: $40,000"),
                Reward("upgrade", id="michelin_star",
                       description="Michelin Star Recognition: +45% revenue for all food businesses"),
            ),
            description="The annual food festival is bringing foodies from around the world to your city!",
            instructions="Own at least 3 Restaurants and 2 Food Delivery Services, then generate $75,000 in food-related revenue.",
            target_business_types=("restaurant", "food_delivery", "coffee_shop"),
            icon="🍽️",
            rarity="uncommon",
            seasonal_month=8,
        ),
        SpecialEventDef(
            id="education_innovation_challenge",
            display_name="Education Innovation Challenge",
            duration=10,
            requirements=EventRequirements(
                business_counts=(BusinessCount("educational_institute", 3),),
                staff_hiring_target=10,
            ),
            rewards=(
                Reward("money", 60000, description="Education Grant: $60,000"),
                Reward("staff", id="education_visionary",
                       description="Education Visionary: +30% efficiency for all educational businesses"),
                Reward("experience", 3000, description="Academic Recognition: +3,000 XP"),
            ),
            description="Transform the future of education by implementing cutting-edge teaching methods!",
            instructions="Own at least 3 Educational Institutes and hire 10 specialized staff during the event.",
            target_business_types=("educational_institute",),
            icon="🎓",
            rarity="rare",
            seasonal_month=9,
        ),
        SpecialEventDef(
            id="real_estate_boom",
            display_name="Real Estate Boom",
            duration=7,
            requirements=EventRequirements(
                business_counts=(BusinessCount("real_estate_agency", 4),),
                sales_target=150000,
            ),
            rewards=(
                Reward("money", 80000, description="Property Tycoon Bonus: $80,000"),
                Reward("upgrade", id="premium_listings",
                       description="Premium Listings Access: +40% revenue for all real estate businesses"),
            ),
            description="Property values are skyrocketing! Can your real estate agency capitalize on this opportunity?",
            instructions="Own at least 4 Real Estate Agencies and close $150,000 worth of deals during the event.",
            target_business_types=("real_estate_agency",),
            icon="🏘️",
            rarity="rare",
            seasonal_month=5,
        ),
    ]


def define_catalog() -> Catalog:
    return Catalog(
        businesses=_businesses(),
        staff=_staff(),
        upgrades=_upgrades(),
        market_events=_market_events(),
        special_events=_special_events(),
    )
