"""
Tests for the preference recorder, skip handler, and best/worst selection rules.
"""

from __future__ import annotations

import pytest

from subtaste_trainer.core.exceptions import InvalidSelectionError
from subtaste_trainer.sampler.models import Polarity, SamplerSession, SignalType
from subtaste_trainer.sampler.signals import (
    BEST_WORST_WEIGHT,
    MAX_WEIGHT,
    MIN_WEIGHT,
    Selection,
    clamp_weight,
    record_preference,
    record_skip,
)

from conftest import make_card


def test_preference_pair_scores_and_polarities():
    """Ranking a card yields two likert signals: best=5 and worst=1, same setId and weight."""
    card = make_card()
    best, worst = record_preference(card, "a", "b")

    assert best.type is SignalType.LIKERT and worst.type is SignalType.LIKERT
    assert (best.metadata["score"], worst.metadata["score"]) == (5, 1)
    assert (best.metadata["polarity"], worst.metadata["polarity"]) == ("best", "worst")
    assert best.set_id == worst.set_id == card.id
    assert best.weight_override == worst.weight_override == BEST_WORST_WEIGHT


def test_preference_metadata_references_options():
    card = make_card()
    best, worst = record_preference(card, "d", "c")
    assert best.option_id == "d"
    assert best.metadata == {
        "score": 5,
        "polarity": "best",
        "prompt": "prompt for d",
        "archetypeHint": "T-1",
        "topic": "risk",
        "optionId": "d",
        "setId": "card-1",
    }
    assert worst.metadata["archetypeHint"] is None
    assert worst.metadata["optionId"] == "c"


def test_preference_payload_includes_weight_and_routing():
    best, _ = record_preference(make_card(), "a", "b")
    payload = best.to_payload({"folioId": "f1", "projectId": "p1"})
    assert payload["weightOverride"] == BEST_WORST_WEIGHT
    assert payload["folioId"] == "f1"
    assert payload["projectId"] == "p1"
    assert "weightOverride" not in best.metadata


def test_preference_weight_is_clamped():
    best, worst = record_preference(make_card(), "a", "b", weight=999)
    assert best.weight_override == worst.weight_override == MAX_WEIGHT
    best, _ = record_preference(make_card(), "a", "b", weight=-5)
    assert best.weight_override == MIN_WEIGHT
    assert clamp_weight(1.6) == 1.6


@pytest.mark.parametrize(
    "best_id, worst_id",
    [("a", "a"), (None, "b"), ("a", None), ("zzz", "b"), ("a", "zzz")],
)
def test_invalid_selection_rejected(best_id, worst_id):
    with pytest.raises(InvalidSelectionError):
        record_preference(make_card(), best_id, worst_id)


def test_invalid_selection_is_a_value_error():
    with pytest.raises(ValueError):
        record_preference(make_card(), "a", "a")


def test_skip_signal_covers_all_options():
    """Skipping emits one neutral pass signal with all 4 option ids and the distinct topics."""
    card = make_card()
    request = record_skip(card)
    assert request.type is SignalType.PASS
    assert request.option_id is None
    assert request.weight_override is None
    assert request.metadata == {
        "neutral": True,
        "setId": card.id,
        "optionIds": ["a", "b", "c", "d"],
        "topics": ["opening", "pacing", "tone", "risk"],
    }
    assert "weightOverride" not in request.to_payload()


def test_selection_roles_are_mutually_exclusive():
    """Choosing the current best option as worst clears the best role."""
    sel = Selection().choose(Polarity.BEST, "a")
    sel = sel.choose("worst", "b")
    assert (sel.best_option_id, sel.worst_option_id) == ("a", "b")
    assert sel.complete

    sel = sel.choose(Polarity.WORST, "a")
    assert sel.best_option_id is None
    assert sel.worst_option_id == "a"
    assert not sel.complete

    sel = sel.choose(Polarity.BEST, "a")
    assert (sel.best_option_id, sel.worst_option_id) == ("a", None)


def test_selection_rejects_neutral_role():
    with pytest.raises(ValueError):
        Selection().choose("neutral", "a")


def test_mark_resolved_marks_every_option_on_card():
    card = make_card()
    session = SamplerSession().mark_resolved(card)
    assert session.asked_option_ids == {"a", "b", "c", "d"}
    assert session.asked_topics == {"opening", "pacing", "tone", "risk"}
    # the receiver is left untouched
    assert SamplerSession().asked_option_ids == frozenset()
