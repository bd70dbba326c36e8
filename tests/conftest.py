"""
Pytest fixtures for Subtaste trainer tests. Uses an in-memory genome store and
seeded random sources so card draws are reproducible.
"""

from __future__ import annotations

import random
from datetime import datetime, timezone
from typing import Any

import pytest

from subtaste_trainer.config.settings import TrainerSettings
from subtaste_trainer.genome_client.memory import InMemoryGenomeStore
from subtaste_trainer.sampler.models import Card, StaticOption

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)
PROFILE_ID = "profile-1"


def make_option(option_id: str, topic: str, hint: str | None = None) -> StaticOption:
    return StaticOption(id=option_id, topic=topic, prompt=f"prompt for {option_id}", archetype_hint=hint)


def make_card(card_id: str = "card-1") -> Card:
    return Card(
        id=card_id,
        options=(
            make_option("a", "opening", "R-10"),
            make_option("b", "pacing", "D-8"),
            make_option("c", "tone", None),
            make_option("d", "risk", "T-1"),
        ),
    )


class FailingStore(InMemoryGenomeStore):
    """InMemoryGenomeStore whose n-th submit_signal call (1-based) raises."""

    def __init__(self, fail_on_call: int, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.fail_on_call = fail_on_call
        self.submit_calls = 0

    async def submit_signal(self, signal_type, option_id, payload, profile_id):
        self.submit_calls += 1
        if self.submit_calls == self.fail_on_call:
            raise ConnectionError("taste API unreachable")
        return await super().submit_signal(signal_type, option_id, payload, profile_id)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def settings():
    return TrainerSettings(profile_id=PROFILE_ID, routing={"folioId": "folio-9"})


@pytest.fixture
def store(clock):
    """Store with an R-10 genome (confidence 0.8) for PROFILE_ID."""
    s = InMemoryGenomeStore(
        archetypes={"R-10": {"title": "The Contrarian", "essence": "Breaks assumptions", "glyph": "WICK"}},
        clock=clock,
    )
    s.set_genome(PROFILE_ID, "R-10", 0.8)
    return s
