"""
Sampler package: option pool, card sampling, and signal emission contract.

Pure functions over explicit inputs: no I/O, no module-level mutable state.
Randomness is injected as a random.Random so tests can pin exact cards.
"""

from subtaste_trainer.sampler.cards import draw_cards
from subtaste_trainer.sampler.catalog import ARCHETYPE_DESIGNATIONS, STATIC_CATALOG, CatalogEntry
from subtaste_trainer.sampler.models import (
    OPTIONS_PER_CARD,
    ArchetypeProfile,
    Card,
    DerivedOption,
    GamificationSnapshot,
    GenomeSnapshot,
    Option,
    Polarity,
    PoolOption,
    PrimaryArchetype,
    SamplerSession,
    Signal,
    SignalRequest,
    SignalType,
    StaticOption,
)
from subtaste_trainer.sampler.pool import build_derived_options, build_option_pool
from subtaste_trainer.sampler.signals import (
    BEST_WORST_WEIGHT,
    Selection,
    clamp_weight,
    record_preference,
    record_skip,
)

__all__ = [
    "ARCHETYPE_DESIGNATIONS",
    "BEST_WORST_WEIGHT",
    "OPTIONS_PER_CARD",
    "STATIC_CATALOG",
    "ArchetypeProfile",
    "Card",
    "CatalogEntry",
    "DerivedOption",
    "GamificationSnapshot",
    "GenomeSnapshot",
    "Option",
    "Polarity",
    "PoolOption",
    "PrimaryArchetype",
    "SamplerSession",
    "Selection",
    "Signal",
    "SignalRequest",
    "SignalType",
    "StaticOption",
    "build_derived_options",
    "build_option_pool",
    "clamp_weight",
    "draw_cards",
    "record_preference",
    "record_skip",
]
