from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import WriteFailureError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.turf_booking.app.interface.i_slot_reservation_repo import ISlotReservationRepo


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ReconcileOrphanedReservationsUseCase:
    """
    Clear reserved flags that no booking backs.

    Such slots are left behind when a compensation or a cancellation release
    fails. Reservations younger than the grace period are skipped because they
    may belong to a reservation that is still creating its bookings.
    """

    def __init__(
        self,
        *,
        slot_reservation_repo: ISlotReservationRepo,
        clock: Callable[[], datetime] = _utc_now,
        grace_seconds: Optional[int] = None,
    ) -> None:
        self.slot_reservation_repo = slot_reservation_repo
        self.clock = clock
        self.grace_seconds = (
            settings.RECONCILE_GRACE_SECONDS if grace_seconds is None else grace_seconds
        )
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        slot_reservation_repo: ISlotReservationRepo = Depends(
            Provide[Container.slot_reservation_repo]
        ),
    ) -> Self:
        return cls(slot_reservation_repo=slot_reservation_repo)

    @Logger.io
    async def execute(self) -> int:
        with self.tracer.start_as_current_span('use_case.reconcile_orphaned_reservations') as span:
            reserved_before = self.clock() - timedelta(seconds=self.grace_seconds)
            orphans = await self.slot_reservation_repo.find_orphaned_reservations(
                reserved_before=reserved_before
            )

            released = 0
            for slot in orphans:
                slot_id = slot.id or 0
                try:
                    if await self.slot_reservation_repo.release(
                        slot_id=slot_id, reserved_before=reserved_before
                    ):
                        released += 1
                except WriteFailureError as e:
                    Logger.base.error(f'❌ [RECONCILE] Slot {slot_id} not released: {e}')

            span.set_attribute('reconcile.found', len(orphans))
            span.set_attribute('reconcile.released', released)
            metrics.record_reconcile(found=len(orphans), released=released)
            Logger.base.info(f'🧹 [RECONCILE] found={len(orphans)} released={released}')
            return released
