from __future__ import annotations

from dataclasses import dataclass, field, replace

from tycoon.effect import Effect


@dataclass(frozen=True)
class MarketEventDef:
    """Static definition of a random market event."""

    id: str
    display_name: str = ""
    effect: Effect = field(default_factory=lambda: Effect.revenue(0.0))
    probability: float = 0.0
    description: str = ""
    icon: str = ""

    def __post_init__(self) -> None:
        if not self.display_name:
            object.__setattr__(self, "display_name", self.id)

    @property
    def duration(self) -> int:
        return self.effect.duration or 0


@dataclass
class MarketEvent:
    """A running (or just expired) occurrence of a market event."""

    id: str
    type: str
    name: str = ""
    effect: Effect = field(default_factory=lambda: Effect.revenue(0.0))
    active: bool = True
    remaining_days: int = 0
    started_at: int = 1

    @classmethod
    def start(cls, definition: MarketEventDef, id: str, day: int) -> MarketEvent:
        return cls(
            id=id,
            type=definition.id,
            name=definition.display_name,
            effect=definition.effect,
            active=True,
            remaining_days=definition.duration,
            started_at=day,
        )


def age_market_events(events: list[MarketEvent]) -> list[MarketEvent]:
    """Advance every market event by one day.

    Events that expired on an earlier day are dropped. Active events lose a
    day; an event whose last day just passed stays in the list, inactive with
    zero days left, until the next call.
    """
    aged: list[MarketEvent] = []
    for event in events:
        if not event.active:
            continue
        remaining = event.remaining_days - 1
        aged.append(replace(event, remaining_days=max(remaining, 0), active=remaining > 0))
    return aged


def roll_market_event(
    definitions: list[MarketEventDef], roll: float
) -> MarketEventDef | None:
    """Pick the event triggered by a single uniform draw in [0, 1).

    The draw is compared against each definition's own probability in catalog
    order and the first ``roll <= probability`` wins. Probabilities are not
    cumulative, so with the stock table a draw of 0.12 starts a tax cut and
    anything above the largest probability starts nothing.
    """
    for definition in definitions:
        if roll <= definition.probability:
            return definition
    return None
