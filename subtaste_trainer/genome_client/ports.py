"""
Port for the external genome engine.

The trainer never computes archetype distributions itself; it only reads the
genome, appends signals, and triggers recomputes through this interface.
Implementations: TasteApiClient (HTTP) and InMemoryGenomeStore (local/tests).
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class GenomePort(Protocol):
    async def get_genome(self, profile_id: str | None) -> dict[str, Any]:
        """Return {hasGenome, genome?: {archetype: {primary, secondary, distribution}, keywords}}."""
        ...

    async def submit_signal(
        self,
        signal_type: str,
        option_id: str | None,
        payload: dict[str, Any],
        profile_id: str | None,
    ) -> dict[str, Any]:
        """Append one signal; return the engine's acknowledgement. Raises on failure."""
        ...

    async def get_signals(self, profile_id: str | None, limit: int) -> dict[str, Any]:
        """Return {signals: [...]}, newest first."""
        ...

    async def get_archetype_catalog(self) -> dict[str, Any]:
        """Return {archetypes: {designation: {title, essence, creativeMode, shadow, ...}}}."""
        ...

    async def get_gamification(self, profile_id: str | None) -> dict[str, Any]:
        """Return {tier, xp, signalCount, achievements, allAchievements}."""
        ...

    async def recompute_genome(self, profile_id: str | None) -> dict[str, Any]:
        """Ask the engine to recompute the distribution from stored signals."""
        ...

    async def get_raw_genome(self, profile_id: str | None) -> dict[str, Any]:
        """Admin read-out: {genome, distribution, signals: <count>}. Raises when there is no genome."""
        ...
