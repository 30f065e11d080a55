#!/usr/bin/env python3
"""Recompute every question and answer score from the vote ledger.

Scores are maintained incrementally on every vote; this repairs any that
drifted (e.g. after manual database edits). Safe to run while the API is
serving traffic: each target is locked while it is recounted.
"""

import asyncio
import sys

import logfire

from stackit.application.usecase.vote import ReconcileScoresUseCase
from stackit.config import Settings
from stackit.util.di.container import create_container
from stackit.util.logging import setup_logging
from stackit.util.observability import configure_logfire


async def reconcile() -> int:
    container = create_container()
    try:
        async with container() as request_container:
            use_case = await request_container.get(ReconcileScoresUseCase)
            result = await use_case.execute()
    finally:
        await container.close()

    for correction in result.corrected:
        logfire.info(
            "Score corrected",
            target_type=correction.target_type,
            target_id=correction.target_id,
            previous=correction.previous,
            current=correction.current,
        )
    return len(result.corrected)


def main() -> int:
    """Reconcile scores and report how many were corrected."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    try:
        corrected = asyncio.run(reconcile())
        logfire.info("Score reconciliation completed", corrected=corrected)
        print(f"Corrected {corrected} score(s)")
        return 0

    except Exception as e:
        logfire.error(
            "Score reconciliation failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
