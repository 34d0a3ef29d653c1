from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.query.get_owner_analytics_use_case import (
    GetOwnerAnalyticsUseCase,
)
from src.service.turf_booking.domain.entity.user_entity import UserEntity
from src.service.turf_booking.driving_adapter.http_controller.auth.role_auth import require_owner
from src.service.turf_booking.driving_adapter.http_controller.schema.analytics_schema import (
    OwnerAnalyticsResponse,
)


router = APIRouter()


@router.get('')
@Logger.io
async def get_owner_analytics(
    current_user: UserEntity = Depends(require_owner),
    use_case: GetOwnerAnalyticsUseCase = Depends(GetOwnerAnalyticsUseCase.depends),
) -> OwnerAnalyticsResponse:
    """Revenue over the last 90 days across the caller's venues"""
    analytics = await use_case.execute(requester=current_user)
    return OwnerAnalyticsResponse.from_analytics(analytics)
