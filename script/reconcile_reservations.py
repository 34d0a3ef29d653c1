#!/usr/bin/env python3
"""
Orphaned Reservation Reconcile Script

Clears the reserved flag on slots that no booking backs. Meant to run from
cron next to the API; POST /api/maintenance/reconcile does the same on demand.

Usage:
    python script/reconcile_reservations.py [--grace-seconds 300]
"""

import argparse
import asyncio

from src.platform.config.di import container
from src.platform.database.orm_db_setting import dispose_engines
from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.command.reconcile_orphaned_reservations_use_case import (
    ReconcileOrphanedReservationsUseCase,
)
from src.service.turf_booking.driven_adapter.model import register_models


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Release orphaned slot reservations')
    parser.add_argument(
        '--grace-seconds',
        type=int,
        default=None,
        help='Skip reservations younger than this (defaults to RECONCILE_GRACE_SECONDS)',
    )
    return parser.parse_args()


async def main(grace_seconds: int | None = None) -> int:
    register_models()
    use_case = ReconcileOrphanedReservationsUseCase(
        slot_reservation_repo=container.slot_reservation_repo(),
        grace_seconds=grace_seconds,
    )
    try:
        released = await use_case.execute()
    finally:
        await dispose_engines()
    print(f'🧹 Released {released} orphaned reservation(s)')
    return released


if __name__ == '__main__':
    args = _parse_args()
    try:
        asyncio.run(main(grace_seconds=args.grace_seconds))
    except Exception as e:
        Logger.base.error(f'❌ Reconcile failed: {e}')
        exit(1)
