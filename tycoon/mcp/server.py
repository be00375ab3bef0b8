"""MCP server wrapping a GameSession for interactive AI playtesting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from mcp.server.fastmcp import FastMCP

from tycoon.action import (
    Action,
    AdvanceDay,
    CheckSpecialEventsProgress,
    ClearAllNotifications,
    CollectAllRevenue,
    CollectRevenue,
    HireStaff,
    InitializeGame,
    PurchaseBusiness,
    PurchaseUpgrade,
    SellBusiness,
    StartSpecialEvent,
)
from tycoon.session import GameSession
from tycoon.state import ERROR, GameState, Notification
from tycoon.store import LEADERBOARD_SIZE

# Maximum days per advance_day() call
_MAX_DAYS = 365


@dataclass
class _SessionHolder:
    """Holds the active game session."""

    session: GameSession


def _notification_key(n: Notification) -> tuple[int, str, str]:
    return (n.id, n.type, n.message)


def _new_notifications(before: GameState, after: GameState) -> list[Notification]:
    seen = {_notification_key(n) for n in before.notifications}
    return [n for n in after.notifications if _notification_key(n) not in seen]


def _summary(holder: _SessionHolder) -> dict[str, Any]:
    session = holder.session
    state = session.state
    return {
        "day": state.day,
        "money": state.money,
        "level": state.level,
        "experience": state.experience,
        "experience_to_next_level": state.experience_to_next_level,
        "net_worth": state.stats.net_worth,
        "game_over": state.game_over,
        "businesses": len(state.businesses),
        "collectable": [b.id for b in state.collectable_businesses()],
        "staff": len(state.staff),
    }


def _run(holder: _SessionHolder, action: Action) -> dict[str, Any]:
    before = holder.session.state
    after = holder.session.dispatch(action)
    messages = _new_notifications(before, after)
    return {
        "success": not any(n.type == ERROR for n in messages),
        "messages": [{"type": n.type, "message": n.message} for n in messages],
        "state": _summary(holder),
    }


# ── Tool logic functions (testable without MCP protocol) ────────────


def _tool_get_catalog(holder: _SessionHolder) -> dict[str, Any]:
    engine = holder.session.engine
    catalog = engine.catalog
    return {
        "name": engine.config.name,
        "businesses": [
            {
                "id": b.id,
                "display_name": b.display_name,
                "price": b.base_price,
                "revenue": b.base_revenue,
                "unlock_level": b.unlock_level,
            }
            for b in catalog.businesses
        ],
        "staff": [
            {
                "id": s.id,
                "display_name": s.display_name,
                "salary": s.base_salary,
                "hiring_cost": engine.hiring_cost(s.id),
                "effect": s.effect.type.value if s.effect else None,
                "effect_value": s.effect.value if s.effect else 0.0,
            }
            for s in catalog.staff
        ],
        "upgrades": [
            {
                "id": u.id,
                "display_name": u.display_name,
                "price": u.base_price,
                "effect": u.effect.type.value if u.effect else None,
                "effect_value": u.effect.value if u.effect else 0.0,
            }
            for u in catalog.upgrades
        ],
        "special_events": [
            {
                "id": e.id,
                "display_name": e.display_name,
                "duration": e.duration,
                "instructions": e.instructions,
            }
            for e in catalog.special_events
        ],
    }


def _tool_get_game_state(holder: _SessionHolder) -> dict[str, Any]:
    session = holder.session
    state = session.state
    catalog = session.engine.catalog
    result = _summary(holder)
    result["businesses"] = [
        {
            "id": b.id,
            "type": b.type,
            "level": b.level,
            "revenue": session.engine.compute_revenue(state, b),
            "sell_value": session.engine.sell_value(b),
            "can_collect": b.can_collect(state.day),
            "upgrades": [u.type for u in b.upgrades],
        }
        for b in state.businesses
    ]
    result["staff"] = [{"id": s.id, "type": s.type, "salary": s.salary} for s in state.staff]
    result["market_events"] = [
        {"name": m.name, "effect_value": m.effect.value, "remaining_days": m.remaining_days}
        for m in state.market_events
        if m.active
    ]
    result["special_events"] = [
        {
            "id": e.id,
            "name": e.name,
            "end_day": e.end_day,
            "requirements": e.requirements.build().describe(),
        }
        for e in state.active_special_events
    ]
    result["completed_special_events"] = [e.id for e in state.completed_special_events]
    result["rewards"] = [t.description for t in state.special_event_rewards]
    result["notifications"] = [
        {"id": n.id, "type": n.type, "message": n.message} for n in state.notifications
    ]
    result["business_value"] = state.business_value(catalog)
    return result


def _tool_purchase_business(holder: _SessionHolder, business_type: str) -> dict[str, Any]:
    return _run(holder, PurchaseBusiness(business_type))


def _tool_collect_revenue(holder: _SessionHolder, business_id: str) -> dict[str, Any]:
    return _run(holder, CollectRevenue(business_id))


def _tool_collect_all_revenue(holder: _SessionHolder) -> dict[str, Any]:
    return _run(holder, CollectAllRevenue())


def _tool_hire_staff(holder: _SessionHolder, staff_type: str) -> dict[str, Any]:
    return _run(holder, HireStaff(staff_type))


def _tool_purchase_upgrade(
    holder: _SessionHolder, upgrade_type: str, business_id: str
) -> dict[str, Any]:
    return _run(holder, PurchaseUpgrade(upgrade_type, business_id))


def _tool_sell_business(holder: _SessionHolder, business_id: str) -> dict[str, Any]:
    return _run(holder, SellBusiness(business_id))


def _tool_advance_day(holder: _SessionHolder, days: int = 1) -> dict[str, Any]:
    if days < 1:
        return {"error": "Days must be at least 1"}
    if days > _MAX_DAYS:
        return {"error": f"Cannot advance more than {_MAX_DAYS} days per call"}

    messages: list[dict[str, str]] = []
    for _ in range(days):
        result = _run(holder, AdvanceDay())
        messages.extend(result["messages"])
        if holder.session.state.game_over:
            break
    return {"days": days, "messages": messages, "state": _summary(holder)}


def _tool_start_special_event(holder: _SessionHolder, event_id: str) -> dict[str, Any]:
    return _run(holder, StartSpecialEvent(event_id))


def _tool_check_special_events(holder: _SessionHolder) -> dict[str, Any]:
    return _run(holder, CheckSpecialEventsProgress())


def _tool_clear_notifications(holder: _SessionHolder) -> dict[str, Any]:
    holder.session.dispatch(ClearAllNotifications())
    return {"success": True}


def _tool_save_game(holder: _SessionHolder) -> dict[str, Any]:
    status = holder.session.save(notify=True)
    return {"success": status.success, "message": status.message}


def _tool_leaderboard(holder: _SessionHolder, limit: int = LEADERBOARD_SIZE) -> dict[str, Any]:
    entries = holder.session.leaderboard(limit)
    return {
        "leaderboard": [
            {"username": e.username, "money": e.money, "day": e.day}
            for e in entries
        ]
    }


def _tool_new_game(holder: _SessionHolder) -> dict[str, Any]:
    session = holder.session
    session.reset()
    session.dispatch(InitializeGame(show_tutorial=False))
    session.save(notify=False)
    return {"success": True, "message": "Game reset to initial state", "state": _summary(holder)}


# ── Server factory ──────────────────────────────────────────────────


def create_server(session: GameSession) -> FastMCP:
    """Create an MCP server wrapping an already started GameSession."""
    holder = _SessionHolder(session=session)

    mcp = FastMCP(
        name=f"Tycoon: {session.engine.config.name}",
    )

    @mcp.tool()
    def get_catalog() -> dict[str, Any]:
        """Get the static catalog: businesses, staff, upgrades and special events with prices and effects."""
        return _tool_get_catalog(holder)

    @mcp.tool()
    def get_game_state() -> dict[str, Any]:
        """Get the full game state: money, day, level, owned businesses, staff, events, notifications."""
        return _tool_get_game_state(holder)

    @mcp.tool()
    def purchase_business(business_type: str) -> dict[str, Any]:
        """Buy a new business of the given type."""
        return _tool_purchase_business(holder, business_type)

    @mcp.tool()
    def collect_revenue(business_id: str) -> dict[str, Any]:
        """Collect today's revenue from one business."""
        return _tool_collect_revenue(holder, business_id)

    @mcp.tool()
    def collect_all_revenue() -> dict[str, Any]:
        """Collect today's revenue from every eligible business."""
        return _tool_collect_all_revenue(holder)

    @mcp.tool()
    def hire_staff(staff_type: str) -> dict[str, Any]:
        """Hire a staff member. Costs three times the daily salary up front."""
        return _tool_hire_staff(holder, staff_type)

    @mcp.tool()
    def purchase_upgrade(upgrade_type: str, business_id: str) -> dict[str, Any]:
        """Install an upgrade on one of your businesses."""
        return _tool_purchase_upgrade(holder, upgrade_type, business_id)

    @mcp.tool()
    def sell_business(business_id: str) -> dict[str, Any]:
        """Sell a business for its purchase price times level plus its upgrades."""
        return _tool_sell_business(holder, business_id)

    @mcp.tool()
    def advance_day(days: int = 1) -> dict[str, Any]:
        """End the day N times (max 365): salaries, market events, experience, bankruptcy check."""
        return _tool_advance_day(holder, days)

    @mcp.tool()
    def start_special_event(event_id: str) -> dict[str, Any]:
        """Start a special event challenge by id."""
        return _tool_start_special_event(holder, event_id)

    @mcp.tool()
    def check_special_events() -> dict[str, Any]:
        """Complete or expire active special events whose conditions are now decided."""
        return _tool_check_special_events(holder)

    @mcp.tool()
    def clear_notifications() -> dict[str, Any]:
        """Dismiss every notification."""
        return _tool_clear_notifications(holder)

    @mcp.tool()
    def save_game() -> dict[str, Any]:
        """Save the game to the store now."""
        return _tool_save_game(holder)

    @mcp.tool()
    def leaderboard(limit: int = LEADERBOARD_SIZE) -> dict[str, Any]:
        """Get the richest saved games."""
        return _tool_leaderboard(holder, limit)

    @mcp.tool()
    def new_game() -> dict[str, Any]:
        """Discard the current game and start a fresh one."""
        return _tool_new_game(holder)

    return mcp
