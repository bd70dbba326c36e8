"""
Option pool builder: static catalog + options derived from keyword aggregates.

Derived options come first, then the static catalog; the first occurrence of
an id wins. Derived options take the top-N tone / hook / format keywords the
genome engine has observed and turn each into one prompt with its own topic,
so a card never shows two derived options from the same keyword.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Mapping

from subtaste_trainer.sampler.catalog import ARCHETYPE_DESIGNATIONS, STATIC_CATALOG, CatalogEntry
from subtaste_trainer.sampler.models import DerivedOption, PoolOption, StaticOption
from subtaste_trainer.trainer_logging import get_logger

logger = get_logger(__name__)

DEFAULT_TOP_N = 3
DERIVED_ID_PREFIX = "dyn-"

# (topic prefix, keyword map names, prompt template)
_KEYWORD_SOURCES: tuple[tuple[str, tuple[str, ...], str], ...] = (
    ("tone", ("tone",), "Lean into a {value} tone."),
    ("hook", ("hooks", "hook"), "Open with a {value} hook."),
    ("format", ("format", "formats"), "Package the idea as a {value}."),
)

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Lowercase, collapse non-alphanumerics to '-', strip leading/trailing dashes."""
    return _SLUG_RE.sub("-", text.lower()).strip("-")


def _keyword_maps(keywords: Mapping[str, Any] | None) -> Mapping[str, Any]:
    """Keyword maps live under keywords['content'] in the genome; accept a flat dict too."""
    if not keywords:
        return {}
    content = keywords.get("content")
    if isinstance(content, Mapping):
        return content
    return keywords


def _top_keywords(weights: Any, top_n: int) -> list[str]:
    """Highest-weighted keys first; ties keep insertion order; non-numeric weights skipped."""
    if not isinstance(weights, Mapping):
        return []
    scored: list[tuple[str, float]] = []
    for key, value in weights.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        scored.append((str(key), float(value)))
    scored.sort(key=lambda kv: kv[1], reverse=True)
    return [key for key, _ in scored[:top_n]]


def build_derived_options(
    keywords: Mapping[str, Any] | None,
    *,
    top_n: int = DEFAULT_TOP_N,
) -> list[DerivedOption]:
    """Turn the top-N tone/hook/format keywords into options. Missing maps yield nothing."""
    maps = _keyword_maps(keywords)
    derived: list[DerivedOption] = []
    for prefix, names, template in _KEYWORD_SOURCES:
        weights = next((maps[name] for name in names if name in maps), None)
        for value in _top_keywords(weights, top_n):
            topic = slugify(f"{prefix}-{value}")
            if topic == prefix:
                # value had no usable characters
                continue
            derived.append(
                DerivedOption(
                    id=f"{DERIVED_ID_PREFIX}{topic}",
                    topic=topic,
                    prompt=template.format(value=value),
                )
            )
    return derived


def static_options(catalog: Iterable[CatalogEntry] = STATIC_CATALOG) -> list[StaticOption]:
    """Wrap catalog entries as options. Raises ValueError for a hint outside ARCHETYPE_DESIGNATIONS."""
    entries = list(catalog)
    for entry in entries:
        if entry.archetype_hint is not None and entry.archetype_hint not in ARCHETYPE_DESIGNATIONS:
            raise ValueError(f"catalog entry {entry.id!r} has unknown archetype hint {entry.archetype_hint!r}")
    return [
        StaticOption(
            id=entry.id,
            topic=entry.topic,
            prompt=entry.prompt,
            archetype_hint=entry.archetype_hint,
        )
        for entry in entries
    ]


def build_option_pool(
    catalog: Iterable[CatalogEntry] = STATIC_CATALOG,
    keywords: Mapping[str, Any] | None = None,
    *,
    top_n: int = DEFAULT_TOP_N,
) -> list[PoolOption]:
    """
    Merge derived and static options into one de-duplicated pool.

    Derived entries precede static entries; the first option seen for an id is kept.
    Never raises on missing or malformed keyword maps.
    """
    pool: list[PoolOption] = []
    seen: set[str] = set()
    derived = build_derived_options(keywords, top_n=top_n)
    for option in [*derived, *static_options(catalog)]:
        if option.id in seen:
            continue
        seen.add(option.id)
        pool.append(option)
    logger.debug(
        "option_pool_built",
        pool_size=len(pool),
        derived_count=len(derived),
    )
    return pool
