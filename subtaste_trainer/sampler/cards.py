"""
Card sampler: draw cards of mutually exclusive options with topic diversity.

Rules (deterministic for a seeded rng):
- Options already asked this session are excluded; if fewer than one card's
  worth remain unseen, the full pool is eligible again (recycling). Topics
  asked this session still count as used.
- Each card is a uniform permutation of what remains, scanned greedily for
  options with unused topics. Each pick marks its topic used immediately.
- When distinct topics run out, the card is completed from the same
  permutation in order, accepting repeated topics, so every emitted card is full.
- Picked options are removed before the next card is drawn.
"""

from __future__ import annotations

import random
from typing import Sequence

from subtaste_trainer.sampler.models import OPTIONS_PER_CARD, Card, PoolOption, SamplerSession
from subtaste_trainer.trainer_logging import get_logger

logger = get_logger(__name__)

CARD_SUFFIX_LENGTH = 6
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _random_suffix(rng: random.Random, length: int = CARD_SUFFIX_LENGTH) -> str:
    return "".join(rng.choice(_BASE36) for _ in range(length))


def _pick_for_card(
    permutation: list[PoolOption],
    used_topics: set[str],
    options_per_card: int,
) -> list[PoolOption]:
    """Greedy topic-distinct pick, then fill with repeated topics if needed. Mutates used_topics."""
    picked: list[PoolOption] = []
    picked_ids: set[str] = set()
    for option in permutation:
        if len(picked) >= options_per_card:
            break
        if option.topic in used_topics:
            continue
        picked.append(option)
        picked_ids.add(option.id)
        used_topics.add(option.topic)

    if len(picked) < options_per_card:
        for option in permutation:
            if len(picked) >= options_per_card:
                break
            if option.id in picked_ids:
                continue
            picked.append(option)
            picked_ids.add(option.id)
            used_topics.add(option.topic)
    return picked


def draw_cards(
    pool: Sequence[PoolOption],
    session: SamplerSession | None = None,
    *,
    cards_to_build: int = 1,
    options_per_card: int = OPTIONS_PER_CARD,
    rng: random.Random | None = None,
) -> list[Card]:
    """
    Draw up to cards_to_build cards from pool, honouring the session's asked sets.

    Returns between 0 and cards_to_build cards. An empty list means no card can be
    filled right now (pool smaller than one card); it is not an error.
    """
    if cards_to_build < 1:
        raise ValueError("cards_to_build must be >= 1")
    if options_per_card < 2:
        raise ValueError("options_per_card must be >= 2")
    session = session or SamplerSession()
    rng = rng or random.Random()

    available = [o for o in pool if o.id not in session.asked_option_ids]
    recycled = False
    if len(available) < options_per_card:
        available = list(pool)
        recycled = True

    remaining = list(available)
    used_topics = set(session.asked_topics)
    cards: list[Card] = []

    for _ in range(cards_to_build):
        if len(remaining) < options_per_card:
            break
        permutation = list(remaining)
        rng.shuffle(permutation)
        picked = _pick_for_card(permutation, used_topics, options_per_card)
        picked_ids = {o.id for o in picked}
        remaining = [o for o in remaining if o.id not in picked_ids]
        card_id = "-".join(o.id for o in picked) + "-" + _random_suffix(rng)
        cards.append(Card(id=card_id, options=tuple(picked)))

    logger.debug(
        "cards_drawn",
        pool_size=len(pool),
        available=len(available),
        recycled=recycled,
        card_count=len(cards),
    )
    return cards
