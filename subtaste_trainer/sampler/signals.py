"""
Signal emission contract for resolved cards.

A ranked card yields two opposite-polarity likert signals (best=5, worst=1)
with the same weight override; a skipped card yields one neutral pass signal
covering all of its options. Nothing here does I/O: the returned
SignalRequests are submitted by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass

from subtaste_trainer.core.exceptions import InvalidSelectionError
from subtaste_trainer.sampler.models import Card, Polarity, PoolOption, SignalRequest, SignalType

# Best/worst picks count 1.6x a baseline unit signal
BEST_WORST_WEIGHT = 1.6
# The genome engine clamps weight overrides to this range
MIN_WEIGHT = 0.1
MAX_WEIGHT = 3.0

BEST_SCORE = 5
WORST_SCORE = 1


def clamp_weight(weight: float) -> float:
    """Clamp a weight override to [MIN_WEIGHT, MAX_WEIGHT]."""
    return max(MIN_WEIGHT, min(MAX_WEIGHT, weight))


@dataclass(frozen=True)
class Selection:
    """
    Best/worst picks on one card. The two roles are mutually exclusive:
    choosing an option for one role clears it from the other.
    """

    best_option_id: str | None = None
    worst_option_id: str | None = None

    def choose(self, role: Polarity | str, option_id: str) -> Selection:
        role = Polarity(role)
        if role is Polarity.BEST:
            worst = None if self.worst_option_id == option_id else self.worst_option_id
            return Selection(best_option_id=option_id, worst_option_id=worst)
        if role is Polarity.WORST:
            best = None if self.best_option_id == option_id else self.best_option_id
            return Selection(best_option_id=best, worst_option_id=option_id)
        raise ValueError(f"cannot choose role {role.value!r}")

    @property
    def complete(self) -> bool:
        return self.best_option_id is not None and self.worst_option_id is not None


def _likert(option: PoolOption, card: Card, score: int, polarity: Polarity, weight: float) -> SignalRequest:
    return SignalRequest(
        type=SignalType.LIKERT,
        option_id=option.id,
        metadata={
            "score": score,
            "polarity": polarity.value,
            "prompt": option.prompt,
            "archetypeHint": option.archetype_hint,
            "topic": option.topic,
            "optionId": option.id,
            "setId": card.id,
        },
        weight_override=weight,
    )


def record_preference(
    card: Card,
    best_option_id: str | None,
    worst_option_id: str | None,
    *,
    weight: float = BEST_WORST_WEIGHT,
) -> tuple[SignalRequest, SignalRequest]:
    """
    Build the (best, worst) likert pair for a ranked card.

    Raises InvalidSelectionError if either id is missing, not on the card, or both are equal.
    """
    if not best_option_id or not worst_option_id:
        raise InvalidSelectionError("both a best and a worst option are required")
    if best_option_id == worst_option_id:
        raise InvalidSelectionError("best and worst must be different options")
    best = card.get_option(best_option_id)
    worst = card.get_option(worst_option_id)
    if best is None or worst is None:
        missing = best_option_id if best is None else worst_option_id
        raise InvalidSelectionError(f"option {missing!r} is not on card {card.id!r}")

    weight = clamp_weight(weight)
    return (
        _likert(best, card, BEST_SCORE, Polarity.BEST, weight),
        _likert(worst, card, WORST_SCORE, Polarity.WORST, weight),
    )


def record_skip(card: Card) -> SignalRequest:
    """One neutral pass signal for the whole card; default unit weight (no override)."""
    return SignalRequest(
        type=SignalType.PASS,
        option_id=None,
        metadata={
            "neutral": True,
            "setId": card.id,
            "optionIds": card.option_ids,
            "topics": card.topics,
        },
    )
