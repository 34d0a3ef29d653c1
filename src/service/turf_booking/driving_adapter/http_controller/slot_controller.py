from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.command.delete_slot_use_case import DeleteSlotUseCase
from src.service.turf_booking.domain.entity.user_entity import UserEntity
from src.service.turf_booking.driving_adapter.http_controller.auth.role_auth import require_owner


router = APIRouter()


@router.delete('/{slot_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_slot(
    slot_id: int,
    current_user: UserEntity = Depends(require_owner),
    use_case: DeleteSlotUseCase = Depends(DeleteSlotUseCase.depends),
) -> None:
    await use_case.execute(slot_id=slot_id, requester=current_user)
