"""
In-memory genome store implementing GenomePort.

Holds one genome snapshot and an append-only signal log per profile. Used for
offline runs of the trainer and as the test double for TrainingSession. It
does not recompute archetype distributions: recompute_genome only counts calls
and echoes the stored genome, since that computation belongs to the engine.
"""

from __future__ import annotations

import copy
import uuid
from datetime import datetime, timezone
from typing import Any, Callable

from subtaste_trainer.core.exceptions import TasteApiError
from subtaste_trainer.sampler.signals import clamp_weight
from subtaste_trainer.trainer_logging import get_logger

logger = get_logger(__name__)

# Engine default weights per signal type when no override is sent
DEFAULT_SIGNAL_WEIGHTS = {
    "choice": 1.0,
    "likert": 1.3,
}
UNKNOWN_SIGNAL_WEIGHT = 0.5
# Engine keeps the most recent 1000 signals per genome
SIGNAL_CAP = 1000

_ACCOUNT = "__account__"


def _key(profile_id: str | None) -> str:
    return profile_id or _ACCOUNT


class InMemoryGenomeStore:
    """GenomePort backed by dicts. Not thread-safe; one event loop at a time."""

    def __init__(
        self,
        archetypes: dict[str, dict[str, Any]] | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._genomes: dict[str, dict[str, Any]] = {}
        self._signals: dict[str, list[dict[str, Any]]] = {}
        self._gamification: dict[str, dict[str, Any]] = {}
        self._archetypes = archetypes or {}
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self.recompute_calls = 0

    def set_genome(
        self,
        profile_id: str | None,
        designation: str,
        confidence: float,
        *,
        keywords: dict[str, Any] | None = None,
        glyph: str | None = None,
    ) -> None:
        self._genomes[_key(profile_id)] = {
            "archetype": {
                "primary": {"designation": designation, "glyph": glyph, "confidence": confidence},
                "distribution": {designation: confidence},
            },
            "keywords": keywords or {},
        }

    def set_gamification(self, profile_id: str | None, state: dict[str, Any]) -> None:
        self._gamification[_key(profile_id)] = dict(state)

    def add_signal(self, profile_id: str | None, record: dict[str, Any]) -> None:
        """Seed a raw signal record (wire shape) into the log."""
        log = self._signals.setdefault(_key(profile_id), [])
        log.append(copy.deepcopy(record))
        del log[:-SIGNAL_CAP]

    def signals_for(self, profile_id: str | None) -> list[dict[str, Any]]:
        """Oldest first; copies."""
        return copy.deepcopy(self._signals.get(_key(profile_id), []))

    async def get_genome(self, profile_id: str | None) -> dict[str, Any]:
        genome = self._genomes.get(_key(profile_id))
        if genome is None:
            return {"hasGenome": False}
        return {"hasGenome": True, "genome": copy.deepcopy(genome)}

    async def submit_signal(
        self,
        signal_type: str,
        option_id: str | None,
        payload: dict[str, Any],
        profile_id: str | None,
    ) -> dict[str, Any]:
        metadata = dict(payload)
        override = metadata.get("weightOverride")
        if override is not None:
            weight = clamp_weight(float(override))
        else:
            weight = DEFAULT_SIGNAL_WEIGHTS.get(signal_type, UNKNOWN_SIGNAL_WEIGHT)
        record = {
            "id": uuid.uuid4().hex,
            "type": signal_type,
            "value": option_id,
            "weight": weight,
            "metadata": metadata,
            "timestamp": self._clock().isoformat(),
        }
        self.add_signal(profile_id, record)
        logger.debug("memory_signal_stored", signal_type=signal_type, set_id=metadata.get("setId"))
        return {"success": True, "id": record["id"]}

    async def get_signals(self, profile_id: str | None, limit: int) -> dict[str, Any]:
        log = self._signals.get(_key(profile_id), [])
        newest_first = list(reversed(log[-int(limit):])) if limit > 0 else []
        return {"signals": copy.deepcopy(newest_first)}

    async def get_archetype_catalog(self) -> dict[str, Any]:
        return {"archetypes": copy.deepcopy(self._archetypes)}

    async def get_gamification(self, profile_id: str | None) -> dict[str, Any]:
        state = self._gamification.get(_key(profile_id))
        if state is None:
            count = len(self._signals.get(_key(profile_id), []))
            return {"tier": None, "xp": 0, "signalCount": count, "achievements": [], "allAchievements": []}
        return copy.deepcopy(state)

    async def recompute_genome(self, profile_id: str | None) -> dict[str, Any]:
        self.recompute_calls += 1
        genome = self._genomes.get(_key(profile_id)) or {}
        return {"success": True, "archetype": copy.deepcopy(genome.get("archetype"))}

    async def get_raw_genome(self, profile_id: str | None) -> dict[str, Any]:
        genome = self._genomes.get(_key(profile_id))
        if genome is None:
            raise TasteApiError("Genome not found", status_code=404, path="/api/genome/raw")
        return {
            "success": True,
            "genome": copy.deepcopy(genome),
            "distribution": copy.deepcopy(genome["archetype"].get("distribution") or {}),
            "signals": len(self._signals.get(_key(profile_id), [])),
        }
