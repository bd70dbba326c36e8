"""
Training session: async orchestration around the pure sampler and scorer.

Per resolved card, strictly in order:
    1. emit signal(s)  2. refresh genome  3. refresh signal log  4. rebuild cards
Emission failures abort before any session bookkeeping and are raised to the
caller (no retry, no compensation: a best signal may stay persisted when the
worst one failed). Refresh failures are logged and the previous in-memory
state is kept. A single busy flag rejects overlapping actions.
"""

from __future__ import annotations

import random
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Callable, Sequence

from subtaste_trainer.config.settings import TrainerSettings
from subtaste_trainer.core.exceptions import (
    PartialPairError,
    SessionBusyError,
    SignalEmissionError,
)
from subtaste_trainer.genome_client.ports import GenomePort
from subtaste_trainer.governance.scorer import GovernanceMetrics, compute_governance
from subtaste_trainer.sampler.cards import draw_cards
from subtaste_trainer.sampler.catalog import STATIC_CATALOG, CatalogEntry
from subtaste_trainer.sampler.models import (
    ArchetypeProfile,
    Card,
    GamificationSnapshot,
    GenomeSnapshot,
    SamplerSession,
    Signal,
    SignalRequest,
)
from subtaste_trainer.sampler.pool import build_option_pool
from subtaste_trainer.sampler.signals import Selection, record_preference, record_skip
from subtaste_trainer.trainer_logging import bind_profile


class TrainingSession:
    """
    One user's taste-training loop against a GenomePort.

    Holds the genome snapshot, the recent signal window, the sampler session
    (asked ids/topics) and the current card queue. Sampler state is local to
    this object: it resets on switch_profile() and is never persisted.
    """

    def __init__(
        self,
        port: GenomePort,
        *,
        settings: TrainerSettings | None = None,
        profile_id: str | None = None,
        catalog: Sequence[CatalogEntry] = STATIC_CATALOG,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """
        Args:
            port: Genome engine adapter (TasteApiClient or InMemoryGenomeStore).
            settings: Trainer settings; defaults to TrainerSettings().
            profile_id: Active profile; falls back to settings.profile_id.
            catalog: Static prompt catalog feeding the option pool.
            rng: Random source for card sampling (seed it for reproducible cards).
            clock: Returns "now" for governance; defaults to UTC wall clock.
        """
        self._port = port
        self._settings = settings or TrainerSettings()
        self._profile_id = profile_id if profile_id is not None else self._settings.profile_id
        self._catalog = tuple(catalog)
        self._rng = rng or random.Random()
        self._clock = clock or (lambda: datetime.now(timezone.utc))

        self._genome = GenomeSnapshot()
        self._signals: list[Signal] = []
        self._sampler = SamplerSession()
        self._queue: list[Card] = []
        self._busy = False
        self._log = bind_profile(self._profile_id, __name__)

    @property
    def profile_id(self) -> str | None:
        return self._profile_id

    @property
    def genome(self) -> GenomeSnapshot:
        return self._genome

    @property
    def signals(self) -> list[Signal]:
        return list(self._signals)

    @property
    def sampler(self) -> SamplerSession:
        return self._sampler

    @property
    def queue(self) -> list[Card]:
        return list(self._queue)

    @property
    def busy(self) -> bool:
        return self._busy

    @asynccontextmanager
    async def _busy_lock(self, action: str) -> AsyncIterator[None]:
        if self._busy:
            self._log.info("session_busy_rejected", action=action)
            raise SessionBusyError(f"cannot {action}: another action is in flight")
        self._busy = True
        try:
            yield
        finally:
            self._busy = False

    async def load(self) -> list[Card]:
        """Mount-time refresh: genome, signal log, then a fresh card queue."""
        async with self._busy_lock("load"):
            await self._refresh_genome()
            await self._refresh_signals()
            self._rebuild_queue()
        return self.queue

    async def switch_profile(self, profile_id: str | None) -> list[Card]:
        """Point the session at another profile; asked sets and cached state are dropped."""
        async with self._busy_lock("switch profile"):
            self._log.info("session_profile_switched", next_profile_id=profile_id)
            self._profile_id = profile_id
            self._log = bind_profile(profile_id, __name__)
            self._sampler = SamplerSession()
            self._genome = GenomeSnapshot()
            self._signals = []
            self._queue = []
            await self._refresh_genome()
            await self._refresh_signals()
            self._rebuild_queue()
        return self.queue

    async def submit(self, card: Card, best_option_id: str, worst_option_id: str) -> list[Card]:
        """
        Record a best/worst ranking for card and return the rebuilt queue.

        Raises InvalidSelectionError before any I/O for a bad selection;
        SignalEmissionError / PartialPairError when a signal fails to persist
        (session sets are then unchanged and the card can be resubmitted).
        """
        requests = record_preference(
            card,
            best_option_id,
            worst_option_id,
            weight=self._settings.best_worst_weight,
        )
        async with self._busy_lock("submit card"):
            await self._emit(card, requests)
            await self._after_resolution(card)
        return self.queue

    async def submit_selection(self, card: Card, selection: Selection) -> list[Card]:
        return await self.submit(card, selection.best_option_id, selection.worst_option_id)

    async def skip(self, card: Card) -> list[Card]:
        """Record a neutral pass for card and return the rebuilt queue."""
        request = record_skip(card)
        async with self._busy_lock("skip card"):
            await self._emit(card, (request,))
            await self._after_resolution(card)
        return self.queue

    async def recompute(self) -> GenomeSnapshot:
        """Admin trigger: ask the engine to recompute, then reload genome, signals and cards."""
        async with self._busy_lock("recompute"):
            try:
                await self._port.recompute_genome(self._profile_id)
            except Exception as e:
                self._log.warning("genome_recompute_failed", error=str(e))
                raise
            await self._refresh_genome()
            await self._refresh_signals()
            self._rebuild_queue()
        return self._genome

    def governance(self, now: datetime | None = None) -> GovernanceMetrics:
        """Velocity/trust over the cached signal window and current primary archetype."""
        return compute_governance(
            self._signals,
            self._genome.designation,
            self._genome.confidence,
            now=now or self._clock(),
        )

    async def progress(self) -> GamificationSnapshot | None:
        """Tier/XP for display; None when the engine cannot be reached."""
        try:
            response = await self._port.get_gamification(self._profile_id)
        except Exception as e:
            self._log.warning("gamification_fetch_failed", error=str(e))
            return None
        return GamificationSnapshot.from_response(response)

    async def describe_primary(self) -> ArchetypeProfile | None:
        """Catalog entry for the current primary archetype, if any."""
        designation = self._genome.designation
        if designation is None:
            return None
        try:
            response = await self._port.get_archetype_catalog()
        except Exception as e:
            self._log.warning("archetype_catalog_fetch_failed", error=str(e))
            return None
        raw = (response.get("archetypes") or {}).get(designation)
        if not isinstance(raw, dict):
            return None
        return ArchetypeProfile.from_dict(designation, raw)

    async def _emit(self, card: Card, requests: Sequence[SignalRequest]) -> None:
        """Submit requests in order; the first failure aborts the rest."""
        persisted = 0
        for request in requests:
            try:
                await self._port.submit_signal(
                    request.type.value,
                    request.option_id,
                    request.to_payload(self._settings.routing),
                    self._profile_id,
                )
            except Exception as e:
                self._log.warning(
                    "signal_emission_failed",
                    set_id=card.id,
                    signal_type=request.type.value,
                    persisted=persisted,
                    error=str(e),
                )
                if persisted:
                    raise PartialPairError(
                        f"signal {persisted + 1} of {len(requests)} for card {card.id} failed; "
                        f"{persisted} already persisted",
                        set_id=card.id,
                        persisted=persisted,
                    ) from e
                raise SignalEmissionError(
                    f"could not record card {card.id}: {e}",
                    set_id=card.id,
                ) from e
            persisted += 1

    async def _after_resolution(self, card: Card) -> None:
        self._sampler = self._sampler.mark_resolved(card)
        await self._refresh_genome()
        await self._refresh_signals()
        self._rebuild_queue()
        self._log.info(
            "card_resolved",
            set_id=card.id,
            asked_options=len(self._sampler.asked_option_ids),
            asked_topics=len(self._sampler.asked_topics),
            queue_size=len(self._queue),
        )

    async def _refresh_genome(self) -> None:
        try:
            response = await self._port.get_genome(self._profile_id)
        except Exception as e:
            self._log.warning("genome_refresh_failed", error=str(e))
            return
        self._genome = GenomeSnapshot.from_response(response)

    async def _refresh_signals(self) -> None:
        try:
            response = await self._port.get_signals(self._profile_id, self._settings.signal_limit)
        except Exception as e:
            self._log.warning("signal_log_refresh_failed", error=str(e))
            return
        raw_signals: Any = response.get("signals") or []
        self._signals = [Signal.from_dict(raw) for raw in raw_signals if isinstance(raw, dict)]

    def _rebuild_queue(self) -> None:
        pool = build_option_pool(self._catalog, self._genome.keywords)
        self._queue = draw_cards(
            pool,
            self._sampler,
            cards_to_build=self._settings.cards_per_round,
            rng=self._rng,
        )
        if not self._queue:
            self._log.info("card_queue_empty", pool_size=len(pool))
