"""JSON save-document codec.

Documents use camelCase field names, so a
state round-trips losslessly through :func:`dumps` and :func:`loads`.
"""
from __future__ import annotations

import json
import math
from typing import Any

from tycoon.business import Business, Upgrade
from tycoon.effect import Effect, EffectType
from tycoon.market import MarketEvent
from tycoon.special_event import (
    BusinessCount,
    EventProgress,
    EventRequirements,
    Reward,
    RewardToken,
    SpecialEvent,
)
from tycoon.staff import Staff
from tycoon.state import GameState, Notification, Stats


class CodecError(ValueError):
    """Raised when a save document cannot be decoded into a GameState."""


# ── Encoding ─────────────────────────────────────────────────────────


def _effect_to_dict(effect: Effect | None) -> dict[str, Any] | None:
    if effect is None:
        return None
    data: dict[str, Any] = {"type": effect.type.value, "value": effect.value}
    if effect.duration is not None:
        data["duration"] = effect.duration
    return data


def _requirements_to_dict(req: EventRequirements) -> dict[str, Any]:
    data: dict[str, Any] = {
        "businessCount": [{"type": bc.type, "count": bc.count} for bc in req.business_counts],
    }
    for key, value in (
        ("revenueTarget", req.revenue_target),
        ("investmentTarget", req.investment_target),
        ("greenInvestmentTarget", req.green_investment_target),
        ("customerTarget", req.customer_target),
        ("salesTarget", req.sales_target),
        ("staffHiringTarget", req.staff_hiring_target),
    ):
        if value:
            data[key] = value
    return data


def _special_event_to_dict(event: SpecialEvent) -> dict[str, Any]:
    p = event.progress
    data: dict[str, Any] = {
        "id": event.id,
        "name": event.name,
        "startDay": event.start_day,
        "endDay": event.end_day,
        "requirements": _requirements_to_dict(event.requirements),
        "rewards": [
            {"type": r.type, "value": r.value, "id": r.id, "description": r.description}
            for r in event.rewards
        ],
        "targetBusinessTypes": list(event.target_business_types),
        "progress": {
            "revenue": p.revenue,
            "investment": p.investment,
            "greenInvestment": p.green_investment,
            "customers": p.customers,
            "sales": p.sales,
            "staffHired": p.staff_hired,
            "completed": p.completed,
        },
    }
    if event.completed_day is not None:
        data["completedDay"] = event.completed_day
    if event.completed_year is not None:
        data["completedYear"] = event.completed_year
    return data


def state_to_dict(state: GameState) -> dict[str, Any]:
    """Encode a state as a JSON-compatible save document."""
    return {
        "money": state.money,
        "day": state.day,
        "level": state.level,
        "experience": state.experience,
        "experienceToNextLevel": state.experience_to_next_level,
        "businesses": [
            {
                "id": b.id,
                "type": b.type,
                "level": b.level,
                "lastCollectedDay": b.last_collected_day,
                "purchasedOnDay": b.purchased_on_day,
                "upgrades": [
                    {"id": u.id, "type": u.type, "effect": _effect_to_dict(u.effect)}
                    for u in b.upgrades
                ],
            }
            for b in state.businesses
        ],
        "staff": [
            {
                "id": s.id,
                "type": s.type,
                "level": s.level,
                "salary": s.salary,
                "effect": _effect_to_dict(s.effect),
                "hiredAt": s.hired_at,
            }
            for s in state.staff
        ],
        "marketEvents": [
            {
                "id": m.id,
                "type": m.type,
                "name": m.name,
                "effect": _effect_to_dict(m.effect),
                "active": m.active,
                "remainingDays": m.remaining_days,
                "startedAt": m.started_at,
            }
            for m in state.market_events
        ],
        "activeSpecialEvents": [_special_event_to_dict(e) for e in state.active_special_events],
        "completedSpecialEvents": [
            _special_event_to_dict(e) for e in state.completed_special_events
        ],
        "specialEventRewards": [
            {
                "id": t.id,
                "type": t.type,
                "description": t.description,
                "fromEvent": t.from_event,
                "dateAwarded": t.date_awarded,
            }
            for t in state.special_event_rewards
        ],
        "stats": {
            "totalRevenue": state.stats.total_revenue,
            "totalExpenses": state.stats.total_expenses,
            "netWorth": state.stats.net_worth,
        },
        "notifications": [
            {"id": n.id, "type": n.type, "message": n.message} for n in state.notifications
        ],
        "gameOver": state.game_over,
        "initialized": state.initialized,
        "showTutorial": state.show_tutorial,
    }


def dumps(state: GameState, **kwargs: Any) -> str:
    return json.dumps(state_to_dict(state), **kwargs)


# ── Decoding ─────────────────────────────────────────────────────────


def _mapping(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise CodecError(f"{what} must be an object, got {type(value).__name__}")
    return value


def _items(data: dict[str, Any], key: str) -> list[Any]:
    value = data.get(key, [])
    if value is None:
        return []
    if not isinstance(value, list):
        raise CodecError(f"{key!r} must be a list")
    return value


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not isinstance(value, float) or math.isfinite(value)


def _int(data: dict[str, Any], key: str, default: int | None = None) -> int:
    value = data.get(key, default)
    if value is None:
        raise CodecError(f"Missing required field {key!r}")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise CodecError(f"{key!r} must be a number, got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise CodecError(f"{key!r} must be finite, got {value!r}")
    return int(value)


def _optional_int(data: dict[str, Any], key: str) -> int | None:
    if data.get(key) is None:
        return None
    return _int(data, key)


def _str(data: dict[str, Any], key: str, default: str | None = None) -> str:
    value = data.get(key, default)
    if value is None:
        raise CodecError(f"Missing required field {key!r}")
    return str(value)


def _effect_from_dict(value: Any) -> Effect | None:
    if value is None:
        return None
    data = _mapping(value, "effect")
    try:
        effect_type = EffectType(data.get("type"))
    except ValueError:
        raise CodecError(f"Unknown effect type {data.get('type')!r}") from None
    raw_value = data.get("value", 0.0)
    if isinstance(raw_value, bool) or not isinstance(raw_value, (int, float)):
        raise CodecError(f"Effect value must be a number, got {raw_value!r}")
    if isinstance(raw_value, float) and not math.isfinite(raw_value):
        raise CodecError(f"Effect value must be finite, got {raw_value!r}")
    return Effect(effect_type, raw_value, _optional_int(data, "duration"))


def _business_from_dict(value: Any) -> Business:
    data = _mapping(value, "business")
    upgrades = []
    for item in _items(data, "upgrades"):
        u = _mapping(item, "upgrade")
        upgrades.append(
            Upgrade(id=_str(u, "id"), type=_str(u, "type"), effect=_effect_from_dict(u.get("effect")))
        )
    return Business(
        id=_str(data, "id"),
        type=_str(data, "type"),
        level=_int(data, "level", 1),
        last_collected_day=_int(data, "lastCollectedDay", 1),
        purchased_on_day=_int(data, "purchasedOnDay", 1),
        upgrades=upgrades,
    )


def _staff_from_dict(value: Any) -> Staff:
    data = _mapping(value, "staff")
    hired_at = data.get("hiredAt", 0.0)
    return Staff(
        id=_str(data, "id"),
        type=_str(data, "type"),
        salary=_int(data, "salary", 0),
        effect=_effect_from_dict(data.get("effect")),
        level=_int(data, "level", 1),
        hired_at=hired_at if _is_finite_number(hired_at) else 0.0,
    )


def _market_event_from_dict(value: Any) -> MarketEvent:
    data = _mapping(value, "market event")
    effect = _effect_from_dict(data.get("effect"))
    if effect is None:
        raise CodecError("Market event without an effect")
    return MarketEvent(
        id=_str(data, "id"),
        type=_str(data, "type", ""),
        name=_str(data, "name", ""),
        effect=effect,
        active=bool(data.get("active", False)),
        remaining_days=_int(data, "remainingDays", 0),
        started_at=_int(data, "startedAt", 1),
    )


def _requirements_from_dict(value: Any) -> EventRequirements:
    data = _mapping(value or {}, "requirements")
    counts = data.get("businessCount") or []
    # Older documents store a single requirement as a bare object.
    if isinstance(counts, dict):
        counts = [counts]
    if not isinstance(counts, list):
        raise CodecError("'businessCount' must be an object or a list")
    business_counts = tuple(
        BusinessCount(_str(_mapping(c, "businessCount"), "type"), _int(c, "count"))
        for c in counts
    )
    return EventRequirements(
        business_counts=business_counts,
        revenue_target=_int(data, "revenueTarget", 0),
        investment_target=_int(data, "investmentTarget", 0),
        green_investment_target=_int(data, "greenInvestmentTarget", 0),
        customer_target=_int(data, "customerTarget", 0),
        sales_target=_int(data, "salesTarget", 0),
        staff_hiring_target=_int(data, "staffHiringTarget", 0),
    )


def _special_event_from_dict(value: Any) -> SpecialEvent:
    data = _mapping(value, "special event")
    p = _mapping(data.get("progress") or {}, "progress")
    rewards = []
    for item in _items(data, "rewards"):
        r = _mapping(item, "reward")
        rewards.append(
            Reward(
                type=_str(r, "type"),
                value=_int(r, "value", 0),
                id=_str(r, "id", ""),
                description=_str(r, "description", ""),
            )
        )
    return SpecialEvent(
        id=_str(data, "id"),
        name=_str(data, "name", ""),
        start_day=_int(data, "startDay", 1),
        end_day=_int(data, "endDay", 1),
        requirements=_requirements_from_dict(data.get("requirements")),
        rewards=tuple(rewards),
        target_business_types=tuple(str(t) for t in _items(data, "targetBusinessTypes")),
        progress=EventProgress(
            revenue=_int(p, "revenue", 0),
            investment=_int(p, "investment", 0),
            green_investment=_int(p, "greenInvestment", 0),
            customers=_int(p, "customers", 0),
            sales=_int(p, "sales", 0),
            staff_hired=_int(p, "staffHired", 0),
            completed=bool(p.get("completed", False)),
        ),
        completed_day=_optional_int(data, "completedDay"),
        completed_year=_optional_int(data, "completedYear"),
    )


def _reward_token_from_dict(value: Any) -> RewardToken:
    data = _mapping(value, "reward token")
    return RewardToken(
        id=_str(data, "id"),
        type=_str(data, "type"),
        description=_str(data, "description", ""),
        from_event=_str(data, "fromEvent", ""),
        date_awarded=_int(data, "dateAwarded", 0),
    )


def _notification_from_dict(value: Any) -> Notification:
    data = _mapping(value, "notification")
    return Notification(
        id=_int(data, "id"),
        type=_str(data, "type"),
        message=_str(data, "message", ""),
    )


def state_from_dict(value: Any) -> GameState:
    """Decode a save document. Raises CodecError if it is malformed."""
    data = _mapping(value, "save document")
    try:
        stats = _mapping(data.get("stats") or {}, "stats")
        money = _int(data, "money")
        return GameState(
            money=money,
            day=_int(data, "day"),
            level=_int(data, "level", 1),
            experience=_int(data, "experience", 0),
            experience_to_next_level=_int(data, "experienceToNextLevel", 1000),
            businesses=[_business_from_dict(b) for b in _items(data, "businesses")],
            staff=[_staff_from_dict(s) for s in _items(data, "staff")],
            market_events=[_market_event_from_dict(m) for m in _items(data, "marketEvents")],
            active_special_events=[
                _special_event_from_dict(e) for e in _items(data, "activeSpecialEvents")
            ],
            completed_special_events=[
                _special_event_from_dict(e) for e in _items(data, "completedSpecialEvents")
            ],
            special_event_rewards=[
                _reward_token_from_dict(t) for t in _items(data, "specialEventRewards")
            ],
            stats=Stats(
                total_revenue=_int(stats, "totalRevenue", 0),
                total_expenses=_int(stats, "totalExpenses", 0),
                net_worth=_int(stats, "netWorth", money),
            ),
            notifications=[_notification_from_dict(n) for n in _items(data, "notifications")],
            game_over=bool(data.get("gameOver", False)),
            initialized=bool(data.get("initialized", False)),
            show_tutorial=bool(data.get("showTutorial", True)),
        )
    except (KeyError, TypeError) as exc:
        raise CodecError(f"Malformed save document: {exc}") from exc


def loads(payload: str | bytes | dict[str, Any]) -> GameState:
    """Decode JSON text (or an already-parsed document) into a GameState."""
    if isinstance(payload, (str, bytes, bytearray)):
        try:
            payload = json.loads(payload)
        except (ValueError, RecursionError) as exc:
            raise CodecError(f"Invalid JSON: {exc}") from exc
    return state_from_dict(payload)


def try_loads(payload: Any) -> GameState | None:
    """Like :func:`loads` but returns None for absent or malformed input."""
    if payload is None:
        return None
    try:
        return loads(payload)
    except CodecError:
        return None
