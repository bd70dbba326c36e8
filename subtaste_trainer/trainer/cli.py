"""
Command-line entrypoint for the Subtaste trainer.

    python -m subtaste_trainer.trainer.cli cards --count 3 --seed 7
    python -m subtaste_trainer.trainer.cli governance --profile <id>
    python -m subtaste_trainer.trainer.cli recompute --profile <id>
    python -m subtaste_trainer.trainer.cli raw --profile <id>

cards runs offline against the static catalog (plus an optional keywords JSON
file); governance, recompute and raw talk to the taste API configured via env/.env.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import random
import sys
from pathlib import Path
from typing import Any

import httpx

from subtaste_trainer.config import get_settings
from subtaste_trainer.core.exceptions import TasteApiError
from subtaste_trainer.genome_client.taste_api import TasteApiClient
from subtaste_trainer.governance.scorer import compute_governance
from subtaste_trainer.sampler.cards import draw_cards
from subtaste_trainer.sampler.catalog import STATIC_CATALOG
from subtaste_trainer.sampler.models import GenomeSnapshot, Signal
from subtaste_trainer.sampler.pool import build_option_pool
from subtaste_trainer.trainer.session import TrainingSession
from subtaste_trainer.trainer_logging import get_logger

logger = get_logger(__name__)


def _load_keywords(path: Path | None) -> dict[str, Any] | None:
    if path is None:
        return None
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return data


def _cmd_cards(args: argparse.Namespace) -> int:
    keywords = _load_keywords(args.keywords)
    pool = build_option_pool(STATIC_CATALOG, keywords)
    rng = random.Random(args.seed) if args.seed is not None else random.Random()
    cards = draw_cards(pool, cards_to_build=args.count, rng=rng)
    print(json.dumps([card.to_dict() for card in cards], indent=2, ensure_ascii=False))
    return 0


async def _governance(args: argparse.Namespace) -> dict[str, Any]:
    settings = get_settings()
    profile_id = args.profile or settings.profile_id
    # Unlike TrainingSession, fetch failures here are fatal rather than logged.
    async with TasteApiClient.from_settings(settings) as client:
        genome = GenomeSnapshot.from_response(await client.get_genome(profile_id))
        response = await client.get_signals(profile_id, settings.signal_limit)
    signals = [Signal.from_dict(raw) for raw in response.get("signals") or [] if isinstance(raw, dict)]
    metrics = compute_governance(signals, genome.designation, genome.confidence)
    return {
        "profileId": profile_id,
        "primary": genome.designation,
        "confidence": genome.confidence,
        "metrics": metrics.to_dict(),
    }


async def _recompute(args: argparse.Namespace) -> dict[str, Any]:
    settings = get_settings()
    profile_id = args.profile or settings.profile_id
    async with TasteApiClient.from_settings(settings) as client:
        session = TrainingSession(client, settings=settings, profile_id=profile_id)
        genome = await session.recompute()
    return {
        "profileId": profile_id,
        "primary": genome.designation,
        "confidence": genome.confidence,
    }


async def _raw(args: argparse.Namespace) -> dict[str, Any]:
    settings = get_settings()
    profile_id = args.profile or settings.profile_id
    async with TasteApiClient.from_settings(settings) as client:
        return await client.get_raw_genome(profile_id)


_REMOTE_COMMANDS = {
    "governance": _governance,
    "recompute": _recompute,
    "raw": _raw,
}


def _cmd_remote(args: argparse.Namespace) -> int:
    runner = _REMOTE_COMMANDS[args.command]
    try:
        out = asyncio.run(runner(args))
    except (TasteApiError, httpx.HTTPError) as e:
        logger.error("cli_remote_failed", command=args.command, error=str(e))
        print(f"[subtaste] {args.command} failed: {e}", file=sys.stderr)
        return 1
    print(json.dumps(out, indent=2, ensure_ascii=False))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Subtaste taste-training sampler and governance tools.")
    sub = parser.add_subparsers(dest="command", required=True)

    cards = sub.add_parser("cards", help="Draw cards from the static catalog (offline).")
    cards.add_argument("--count", type=int, default=1, help="Number of cards to draw.")
    cards.add_argument("--seed", type=int, default=None, help="Seed for a reproducible draw.")
    cards.add_argument("--keywords", type=Path, default=None, help="Genome keywords JSON for derived options.")
    cards.set_defaults(handler=_cmd_cards)

    for name, help_text in (
        ("governance", "Fetch genome + signals and print velocity/trust metrics."),
        ("recompute", "Trigger a genome recompute on the engine."),
        ("raw", "Print the full stored genome (admin diagnostics)."),
    ):
        remote = sub.add_parser(name, help=help_text)
        remote.add_argument("--profile", default=None, help="Profile id (default: SUBTASTE_PROFILE_ID).")
        remote.set_defaults(handler=_cmd_remote)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "cards" and args.count < 1:
        parser.error("--count must be >= 1")
    return args.handler(args)


if __name__ == "__main__":
    raise SystemExit(main())
