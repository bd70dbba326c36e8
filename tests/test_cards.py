"""
Tests for the card sampler: distinct ids, topic diversity, recycling, exhaustion,
and determinism under a seeded random source.
"""

from __future__ import annotations

import random

import pytest

from subtaste_trainer.sampler.cards import draw_cards
from subtaste_trainer.sampler.catalog import STATIC_CATALOG
from subtaste_trainer.sampler.models import SamplerSession
from subtaste_trainer.sampler.pool import build_option_pool

from conftest import make_option


def _pool(topics: list[str], per_topic: int = 1):
    return [make_option(f"{t}-{i}", t) for t in topics for i in range(per_topic)]


def test_scenario_a_four_options_four_topics():
    """Pool of exactly 4 options across 4 topics -> first card holds exactly those 4."""
    pool = _pool(["opening", "pacing", "tone", "risk"])
    cards = draw_cards(pool, SamplerSession(), rng=random.Random(0))
    assert len(cards) == 1
    assert sorted(cards[0].option_ids) == sorted(o.id for o in pool)


def test_cards_have_distinct_ids_and_topics():
    """Across many seeds, every card from the static catalog has distinct ids and distinct topics."""
    pool = build_option_pool(STATIC_CATALOG)
    for seed in range(50):
        cards = draw_cards(pool, cards_to_build=4, rng=random.Random(seed))
        assert len(cards) == 4
        seen_topics: set[str] = set()
        for card in cards:
            assert len(card.options) == 4
            assert len(set(card.option_ids)) == 4
            assert len(set(card.topics)) == 4
            # topics are also spread across cards of one draw
            assert seen_topics.isdisjoint(card.topics)
            seen_topics.update(card.topics)


def test_session_topics_are_avoided():
    """Topics asked this session are skipped while enough fresh topics remain."""
    pool = _pool(["a", "b", "c", "d", "e", "f", "g", "h"], per_topic=2)
    session = SamplerSession(asked_topics=frozenset({"a", "b", "c", "d"}))
    for seed in range(20):
        (card,) = draw_cards(pool, session, rng=random.Random(seed))
        assert set(card.topics) == {"e", "f", "g", "h"}


def test_fill_with_repeated_topics_when_distinct_run_out():
    """Only two distinct topics available -> card still has 4 options, topics repeat."""
    pool = _pool(["x", "y"], per_topic=3)
    (card,) = draw_cards(pool, rng=random.Random(3))
    assert len(card.options) == 4
    assert len(set(card.option_ids)) == 4
    assert set(card.topics) == {"x", "y"}


def test_asked_options_not_repeated():
    """No option of a resolved card shows up in the next card while unseen options remain."""
    pool = build_option_pool(STATIC_CATALOG)
    rng = random.Random(11)
    session = SamplerSession()
    previous = None
    for _ in range(15):
        (card,) = draw_cards(pool, session, rng=rng)
        if previous is not None:
            assert set(card.option_ids).isdisjoint(previous.option_ids)
        assert set(card.option_ids).isdisjoint(session.asked_option_ids)
        session = session.mark_resolved(card)
        previous = card


def test_recycles_full_pool_when_unseen_too_small():
    """Fewer than 4 unseen options -> previously seen options become eligible again."""
    pool = _pool(["a", "b", "c", "d", "e"])
    session = SamplerSession(asked_option_ids=frozenset({"a-0", "b-0", "c-0"}))
    (card,) = draw_cards(pool, session, rng=random.Random(5))
    assert len(card.options) == 4
    assert set(card.option_ids) <= {o.id for o in pool}


def test_recycling_still_avoids_asked_topics():
    """After recycling, topics asked this session are still skipped while 4 fresh topics exist."""
    pool = _pool(["a", "b", "c", "d", "e", "f", "g", "h"])
    session = SamplerSession(
        asked_option_ids=frozenset(o.id for o in pool[:6]),
        asked_topics=frozenset({"a", "b", "c", "d"}),
    )
    for seed in range(20):
        (card,) = draw_cards(pool, session, rng=random.Random(seed))
        assert set(card.topics) == {"e", "f", "g", "h"}
        # e-0 and f-0 were already asked, so they only appear because the pool was recycled
        assert {"e-0", "f-0"} <= set(card.option_ids)


def test_pool_smaller_than_card_yields_no_cards():
    assert draw_cards(_pool(["a", "b", "c"]), rng=random.Random(0)) == []
    assert draw_cards([], rng=random.Random(0)) == []


def test_stops_when_remaining_too_small():
    """Ten options support two full cards; a third is not built."""
    pool = _pool(["a", "b", "c", "d", "e", "f", "g", "h", "i", "j"])
    cards = draw_cards(pool, cards_to_build=3, rng=random.Random(9))
    assert len(cards) == 2
    assert set(cards[0].option_ids).isdisjoint(cards[1].option_ids)


def test_seeded_rng_is_reproducible():
    pool = build_option_pool(STATIC_CATALOG)
    first = draw_cards(pool, cards_to_build=3, rng=random.Random(42))
    second = draw_cards(pool, cards_to_build=3, rng=random.Random(42))
    assert [c.id for c in first] == [c.id for c in second]
    assert [c.option_ids for c in first] == [c.option_ids for c in second]


def test_card_id_joins_option_ids_with_suffix():
    pool = _pool(["a", "b", "c", "d"])
    (card,) = draw_cards(pool, rng=random.Random(1))
    prefix = "-".join(card.option_ids) + "-"
    assert card.id.startswith(prefix)
    suffix = card.id[len(prefix):]
    assert len(suffix) == 6
    assert suffix.isalnum()


def test_same_options_get_distinct_card_ids():
    """The random suffix keeps card ids unique when the same four options recur."""
    pool = _pool(["a", "b", "c", "d"])
    rng = random.Random(2)
    ids = {draw_cards(pool, rng=rng)[0].id for _ in range(10)}
    assert len(ids) == 10


def test_invalid_arguments():
    with pytest.raises(ValueError):
        draw_cards(_pool(["a", "b", "c", "d"]), cards_to_build=0)
    with pytest.raises(ValueError):
        draw_cards(_pool(["a", "b", "c", "d"]), options_per_card=1)
