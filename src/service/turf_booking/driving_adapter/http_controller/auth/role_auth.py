from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Cookie, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError
from src.service.turf_booking.domain.entity.user_entity import UserEntity
from src.service.turf_booking.domain.enum.user_role import UserRole
from src.service.turf_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


_bearer = HTTPBearer(auto_error=False)


class RoleAuthStrategy:
    @staticmethod
    def can_manage_venues(user: UserEntity) -> bool:
        return user.role in (UserRole.OWNER, UserRole.ADMIN)

    @staticmethod
    def is_admin(user: UserEntity) -> bool:
        return user.role == UserRole.ADMIN


@inject
async def get_current_user(
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    cookie_token: Optional[str] = Cookie(None, alias=settings.AUTH_COOKIE_NAME),
) -> UserEntity:
    """Bearer header wins over the cookie"""
    token = credentials.credentials if credentials else cookie_token
    return jwt_auth.get_current_user_info_from_jwt(token)


async def require_owner(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
    if not RoleAuthStrategy.can_manage_venues(current_user):
        raise ForbiddenError('Only venue owners can perform this action')
    return current_user


async def require_admin(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
    if not RoleAuthStrategy.is_admin(current_user):
        raise ForbiddenError('Only admins can perform this action')
    return current_user
