"""
Governance scorer: velocity (0-5) and trust (0-100) from the recent signal log.

Velocity blends archetype confidence with signal cadence over a 14-day window.
Trust blends confidence with the share of hinted signals that match the
current primary archetype. Pure function of its inputs, recomputed on demand,
never stored.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable

from subtaste_trainer.sampler.models import Signal
from subtaste_trainer.trainer_logging import get_logger

logger = get_logger(__name__)

WINDOW_DAYS = 14
# Signals per day at which cadence saturates
TARGET_SIGNALS_PER_DAY = 5.0

VELOCITY_CONFIDENCE_WEIGHT = 0.6
VELOCITY_CADENCE_WEIGHT = 0.4
VELOCITY_SCALE = 5.0

TRUST_CONFIDENCE_WEIGHT = 0.5
TRUST_ON_BRAND_WEIGHT = 0.5
TRUST_SCALE = 100.0


@dataclass(frozen=True)
class GovernanceMetrics:
    """
    Recency-windowed governance read-out.

    on_brand / off_brand: hinted signals matching / not matching the primary designation.
    recent: every signal in the window, hinted or not.
    velocity_score: [0, 5], one decimal.
    trust_score: integer in [0, 100].
    """

    on_brand: int
    off_brand: int
    recent: int
    velocity_score: float
    trust_score: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "onBrand": self.on_brand,
            "offBrand": self.off_brand,
            "recent": self.recent,
            "velocityScore": self.velocity_score,
            "trustScore": self.trust_score,
        }


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from zero for non-negative values (Math.round semantics), not to even."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def _in_window(signal: Signal, now: datetime, window: timedelta) -> bool:
    ts = signal.timestamp
    if ts is None:
        return False
    if ts.tzinfo is None:
        # naive timestamps are UTC, same rule as parse_timestamp
        ts = ts.replace(tzinfo=timezone.utc)
    return now - ts <= window


def compute_governance(
    signals: Iterable[Signal],
    primary_designation: str | None,
    confidence: float,
    *,
    now: datetime | None = None,
    window_days: int = WINDOW_DAYS,
) -> GovernanceMetrics:
    """
    Compute velocity and trust from signals and the current primary archetype.

    Signals with no timestamp are ignored. Signals with no archetypeHint count
    toward recent but toward neither on_brand nor off_brand. With no primary
    designation every hinted signal is off-brand.
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    window = timedelta(days=window_days)
    recent_signals = [s for s in signals if _in_window(s, now, window)]

    on_brand = 0
    off_brand = 0
    for signal in recent_signals:
        hint = signal.archetype_hint
        if hint is None:
            continue
        if hint == primary_designation:
            on_brand += 1
        else:
            off_brand += 1

    total = len(recent_signals)
    signals_per_day = total / window_days
    cadence = min(1.0, signals_per_day / TARGET_SIGNALS_PER_DAY)
    confidence = max(0.0, min(1.0, float(confidence or 0.0)))

    velocity_score = round_half_up(
        (confidence * VELOCITY_CONFIDENCE_WEIGHT + cadence * VELOCITY_CADENCE_WEIGHT) * VELOCITY_SCALE,
        1,
    )
    on_brand_ratio = on_brand / max(1, on_brand + off_brand)
    trust_score = int(
        round_half_up((confidence * TRUST_CONFIDENCE_WEIGHT + on_brand_ratio * TRUST_ON_BRAND_WEIGHT) * TRUST_SCALE)
    )

    metrics = GovernanceMetrics(
        on_brand=on_brand,
        off_brand=off_brand,
        recent=total,
        velocity_score=velocity_score,
        trust_score=trust_score,
    )
    logger.debug(
        "governance_computed",
        primary=primary_designation,
        confidence=confidence,
        cadence=round(cadence, 4),
        **metrics.to_dict(),
    )
    return metrics
