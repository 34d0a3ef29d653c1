import attrs

from src.service.turf_booking.domain.enum.user_role import UserRole


@attrs.define(frozen=True)
class UserEntity:
    """Caller identity decoded from the access token; never persisted here"""

    id: int
    email: str = ''
    name: str = ''
    role: UserRole = UserRole.USER
    is_active: bool = True

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_owner(self) -> bool:
        return self.role == UserRole.OWNER
