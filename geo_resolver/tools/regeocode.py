"""Re-geocode stored records from the command line.

Usage:
    python -m geo_resolver.tools.regeocode                      # every kind, full chain
    python -m geo_resolver.tools.regeocode --kind teams
    python -m geo_resolver.tools.regeocode --provider google    # upgrade with one provider
    python -m geo_resolver.tools.regeocode --dry-run            # resolve, but roll back
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from geo_resolver.adapters.persistence.database import async_session
from geo_resolver.adapters.persistence.repositories import SqlRecordRepository
from geo_resolver.application.use_cases.bulk_reresolve import BulkReresolveUseCase, BulkSummary
from geo_resolver.application.use_cases.resolve_coordinates import ResolveCoordinatesUseCase
from geo_resolver.config import settings
from geo_resolver.domain.exceptions import UnknownProviderError
from geo_resolver.domain.value_objects.enums import ProviderId, RecordKind
from geo_resolver.infrastructure.api.dependencies import build_geocoders

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)


async def regeocode(
    kinds: list[RecordKind],
    provider: ProviderId | None = None,
    dry_run: bool = False,
) -> dict[str, BulkSummary]:
    """Refresh coordinates for each kind in its own transaction."""
    resolver = ResolveCoordinatesUseCase(geocoders=build_geocoders(settings))
    summaries: dict[str, BulkSummary] = {}

    for kind in kinds:
        async with async_session() as session:
            repo = SqlRecordRepository(session, kind)
            bulk_uc = BulkReresolveUseCase(
                resolver, repo, delay_seconds=settings.bulk_delay_seconds
            )
            records = await repo.get_all()
            summaries[kind.value] = await bulk_uc.execute(records, provider=provider)

            if dry_run:
                await session.rollback()
            else:
                await session.commit()

    return summaries


def main():
    parser = argparse.ArgumentParser(description="Refresh stored coordinates")
    parser.add_argument(
        "--kind", choices=[k.value for k in RecordKind], action="append",
        help="Record kind to refresh (repeatable; default: all)",
    )
    parser.add_argument(
        "--provider", choices=[p.value for p in ProviderId],
        help="Use only this provider instead of the full chain",
    )
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Resolve everything but do not persist the new coordinates",
    )
    args = parser.parse_args()

    kinds = [RecordKind(k) for k in args.kind] if args.kind else list(RecordKind)
    provider = ProviderId(args.provider) if args.provider else None

    try:
        summaries = asyncio.run(regeocode(kinds, provider=provider, dry_run=args.dry_run))
    except UnknownProviderError as e:
        logger.error("%s", e)
        sys.exit(1)

    print(f"\n{'='*50}")
    for kind, summary in summaries.items():
        print(
            f"{kind:<14} refreshed={summary.refreshed:<5} unchanged={summary.unchanged:<5} "
            f"failed={summary.failed:<5} skipped={summary.skipped}"
        )
    if args.dry_run:
        print("(dry run: nothing was saved)")
    print(f"{'='*50}\n")


if __name__ == "__main__":
    main()
