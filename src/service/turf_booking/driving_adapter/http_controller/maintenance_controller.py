from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.command.reconcile_orphaned_reservations_use_case import (
    ReconcileOrphanedReservationsUseCase,
)
from src.service.turf_booking.domain.entity.user_entity import UserEntity
from src.service.turf_booking.driving_adapter.http_controller.auth.role_auth import require_admin
from src.service.turf_booking.driving_adapter.http_controller.schema.booking_schema import (
    ReconcileResponse,
)


router = APIRouter()


@router.post('/reconcile')
@Logger.io
async def reconcile_orphaned_reservations(
    current_user: UserEntity = Depends(require_admin),
    use_case: ReconcileOrphanedReservationsUseCase = Depends(
        ReconcileOrphanedReservationsUseCase.depends
    ),
) -> ReconcileResponse:
    return ReconcileResponse(released=await use_case.execute())
