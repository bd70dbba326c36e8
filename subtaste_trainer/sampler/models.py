"""
Data models for the preference sampler.

Options (static catalog or derived from keyword aggregates), cards of four
mutually exclusive options, the per-session asked sets, persisted signals,
pending signal requests, and the read-only genome snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar, Union

OPTIONS_PER_CARD = 4


class SignalType(str, Enum):
    """Signal kinds understood by the genome engine."""

    CHOICE = "choice"
    LIKERT = "likert"
    PASS = "pass"


class Polarity(str, Enum):
    BEST = "best"
    WORST = "worst"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class Option:
    """
    One comparison prompt. id is unique within a pool; topic is the diversity key.

    Not used directly: every option is a StaticOption or a DerivedOption.
    """

    id: str
    topic: str
    prompt: str
    archetype_hint: str | None = None

    source: ClassVar[str] = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "topic": self.topic,
            "prompt": self.prompt,
            "archetypeHint": self.archetype_hint,
            "source": self.source,
        }


@dataclass(frozen=True)
class StaticOption(Option):
    """Option from the fixed prompt catalog."""

    source: ClassVar[str] = "static"


@dataclass(frozen=True)
class DerivedOption(Option):
    """Option built from a tone/hook/format keyword aggregate. Never carries a hint."""

    source: ClassVar[str] = "derived"

    def __post_init__(self) -> None:
        if self.archetype_hint is not None:
            raise ValueError("derived options carry no archetype hint")


PoolOption = Union[StaticOption, DerivedOption]


@dataclass(frozen=True)
class Card:
    """A set of mutually exclusive options shown together for best/worst ranking."""

    id: str
    options: tuple[PoolOption, ...]

    def __post_init__(self) -> None:
        # The sampler always fills OPTIONS_PER_CARD slots; a ranking needs at least two.
        if len(self.options) < 2:
            raise ValueError(f"card needs at least 2 options, got {len(self.options)}")
        if len({o.id for o in self.options}) != len(self.options):
            raise ValueError("card option ids must be pairwise distinct")

    @property
    def option_ids(self) -> list[str]:
        return [o.id for o in self.options]

    @property
    def topics(self) -> list[str]:
        """Distinct topics in first-seen order."""
        return list(dict.fromkeys(o.topic for o in self.options))

    def get_option(self, option_id: str) -> PoolOption | None:
        for option in self.options:
            if option.id == option_id:
                return option
        return None

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "options": [o.to_dict() for o in self.options]}


@dataclass(frozen=True)
class SamplerSession:
    """
    Options and topics already resolved in this continuous session.

    Immutable: callers replace their session with mark_resolved()'s result.
    A fresh SamplerSession() is the reset state (profile switch, restart).
    """

    asked_option_ids: frozenset[str] = field(default_factory=frozenset)
    asked_topics: frozenset[str] = field(default_factory=frozenset)

    def mark_resolved(self, card: Card) -> SamplerSession:
        """Every option on a resolved card is marked seen, not only the picked ones."""
        return SamplerSession(
            asked_option_ids=self.asked_option_ids | set(card.option_ids),
            asked_topics=self.asked_topics | set(card.topics),
        )


def parse_timestamp(raw: Any) -> datetime | None:
    """Parse an ISO-8601 string or datetime; naive values are taken as UTC. Invalid -> None."""
    if raw is None:
        return None
    if isinstance(raw, datetime):
        ts = raw
    elif isinstance(raw, str) and raw.strip():
        text = raw.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            ts = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


@dataclass(frozen=True)
class Signal:
    """One persisted, immutable preference datum read back from the signal log."""

    id: str
    type: str
    timestamp: datetime | None
    weight: float
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def archetype_hint(self) -> str | None:
        hint = self.data.get("archetypeHint")
        return hint if hint else None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Signal:
        """
        Build from the wire shape. The genome engine stores the payload under
        'metadata' and may use '_id'; both spellings are accepted.
        """
        data = raw.get("data")
        if data is None:
            data = raw.get("metadata")
        try:
            weight = float(raw.get("weight") or 0.0)
        except (TypeError, ValueError):
            weight = 0.0
        return cls(
            id=str(raw.get("id") or raw.get("_id") or ""),
            type=str(raw.get("type") or ""),
            timestamp=parse_timestamp(raw.get("timestamp")),
            weight=weight,
            data=dict(data) if isinstance(data, dict) else {},
        )


@dataclass(frozen=True)
class SignalRequest:
    """A signal ready to be submitted; not yet persisted."""

    type: SignalType
    option_id: str | None
    metadata: dict[str, Any]
    weight_override: float | None = None

    @property
    def set_id(self) -> str | None:
        return self.metadata.get("setId")

    def to_payload(self, routing: dict[str, str] | None = None) -> dict[str, Any]:
        """Metadata plus weightOverride and the opaque routing fields, passed through unchanged."""
        payload = dict(self.metadata)
        if self.weight_override is not None:
            payload["weightOverride"] = self.weight_override
        if routing:
            payload.update(routing)
        return payload


@dataclass(frozen=True)
class PrimaryArchetype:
    designation: str
    confidence: float
    glyph: str | None = None


@dataclass(frozen=True)
class GenomeSnapshot:
    """Read-only view of the external genome: primary archetype plus keyword aggregates."""

    has_genome: bool = False
    primary: PrimaryArchetype | None = None
    keywords: dict[str, Any] = field(default_factory=dict)

    @property
    def designation(self) -> str | None:
        return self.primary.designation if self.primary else None

    @property
    def confidence(self) -> float:
        return self.primary.confidence if self.primary else 0.0

    @classmethod
    def from_response(cls, response: dict[str, Any] | None) -> GenomeSnapshot:
        """Parse a getGenome response ({hasGenome, genome: {archetype, keywords}})."""
        if not response or not response.get("hasGenome"):
            return cls()
        genome = response.get("genome") or {}
        archetype = genome.get("archetype") or {}
        raw_primary = archetype.get("primary") or None
        primary = None
        if isinstance(raw_primary, dict) and raw_primary.get("designation"):
            confidence = raw_primary.get("confidence")
            if confidence is None:
                confidence = archetype.get("confidence")
            try:
                confidence = float(confidence or 0.0)
            except (TypeError, ValueError):
                confidence = 0.0
            primary = PrimaryArchetype(
                designation=str(raw_primary["designation"]),
                confidence=confidence,
                glyph=raw_primary.get("glyph"),
            )
        keywords = genome.get("keywords")
        return cls(
            has_genome=True,
            primary=primary,
            keywords=keywords if isinstance(keywords, dict) else {},
        )


@dataclass(frozen=True)
class GamificationSnapshot:
    """Tier/XP read-out for display. Not used by any scorer."""

    tier: str | None
    xp: int
    signal_count: int
    achievements: list[Any] = field(default_factory=list)

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> GamificationSnapshot:
        tier = response.get("tier")
        if isinstance(tier, dict):
            tier = tier.get("name")
        return cls(
            tier=tier,
            xp=int(response.get("xp") or 0),
            signal_count=int(response.get("signalCount") or 0),
            achievements=list(response.get("achievements") or []),
        )


@dataclass(frozen=True)
class ArchetypeProfile:
    designation: str
    title: str | None = None
    essence: str | None = None
    creative_mode: str | None = None
    shadow: str | None = None
    glyph: str | None = None

    @classmethod
    def from_dict(cls, designation: str, raw: dict[str, Any]) -> ArchetypeProfile:
        return cls(
            designation=designation,
            title=raw.get("title"),
            essence=raw.get("essence"),
            creative_mode=raw.get("creativeMode"),
            shadow=raw.get("shadow"),
            glyph=raw.get("glyph"),
        )
