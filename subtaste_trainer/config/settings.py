"""
Application settings for the Subtaste trainer.

Collects the env getters into one typed TrainerSettings object so the CLI and
TrainingSession share a single source of truth. Bounds are normalised in
__post_init__ (weight clamped to the range the genome engine accepts, counts
kept positive).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from subtaste_trainer.config import env
from subtaste_trainer.sampler.signals import clamp_weight

MIN_SIGNAL_LIMIT = 1
MAX_SIGNAL_LIMIT = 1000
MIN_TIMEOUT_SEC = 1.0


@dataclass
class TrainerSettings:
    """
    Settings for the taste-training loop.

    api_url: Taste API base URL (no trailing slash).
    api_token: Optional Bearer token.
    profile_id: Active profile; None targets the account's own genome.
    signal_limit: Size of the recent signal window fetched for governance.
    cards_per_round: Cards rebuilt after each resolved card.
    best_worst_weight: Weight override for best/worst likert signals.
    request_timeout_sec: HTTP timeout per taste API call.
    routing: Opaque folioId/projectId fields passed through on signals.
    """

    api_url: str = env.DEFAULT_API_URL
    api_token: str | None = None
    profile_id: str | None = None
    signal_limit: int = env.DEFAULT_SIGNAL_LIMIT
    cards_per_round: int = env.DEFAULT_CARDS_PER_ROUND
    best_worst_weight: float = env.DEFAULT_BEST_WORST_WEIGHT
    request_timeout_sec: float = env.DEFAULT_REQUEST_TIMEOUT_SEC
    routing: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.api_url = self.api_url.rstrip("/")
        self.signal_limit = max(MIN_SIGNAL_LIMIT, min(int(self.signal_limit), MAX_SIGNAL_LIMIT))
        self.cards_per_round = max(1, int(self.cards_per_round))
        self.best_worst_weight = clamp_weight(float(self.best_worst_weight))
        self.request_timeout_sec = max(MIN_TIMEOUT_SEC, float(self.request_timeout_sec))


def get_settings() -> TrainerSettings:
    """
    Return the current settings, read from the environment (and .env).

    Not cached: tests and the CLI may change the environment between calls.
    """
    return TrainerSettings(
        api_url=env.get_api_url(),
        api_token=env.get_api_token(),
        profile_id=env.get_profile_id(),
        signal_limit=env.get_signal_limit(),
        cards_per_round=env.get_cards_per_round(),
        best_worst_weight=env.get_best_worst_weight(),
        request_timeout_sec=env.get_request_timeout_sec(),
        routing=env.get_routing_fields(),
    )
