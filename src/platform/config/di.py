"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings, settings
from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.turf_booking.driven_adapter.notification.background_notification_sender import (
    BackgroundNotificationSender,
)
from src.service.turf_booking.driven_adapter.notification.logging_notification_sender import (
    LoggingNotificationSender,
)
from src.service.turf_booking.driven_adapter.notification.smtp_notification_sender import (
    SmtpNotificationSender,
)
from src.service.turf_booking.driven_adapter.repo.booking_command_repo_impl import (
    BookingCommandRepoImpl,
)
from src.service.turf_booking.driven_adapter.repo.booking_query_repo_impl import (
    BookingQueryRepoImpl,
)
from src.service.turf_booking.driven_adapter.repo.idempotency_store_impl import (
    IdempotencyStoreImpl,
)
from src.service.turf_booking.driven_adapter.repo.review_repo_impl import ReviewRepoImpl
from src.service.turf_booking.driven_adapter.repo.slot_inventory_repo_impl import (
    SlotInventoryRepoImpl,
)
from src.service.turf_booking.driven_adapter.repo.slot_reservation_repo_impl import (
    SlotReservationRepoImpl,
)
from src.service.turf_booking.driven_adapter.repo.venue_command_repo_impl import (
    VenueCommandRepoImpl,
)
from src.service.turf_booking.driven_adapter.repo.venue_query_repo_impl import VenueQueryRepoImpl
from src.service.turf_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


def _notification_channel() -> str:
    return 'smtp' if settings.SMTP_HOST else 'log'


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database: writes on the primary, listings may go to the replica
    database = providers.Singleton(Database, read_only=False)
    read_database = providers.Singleton(Database, read_only=True)

    # Multi-table transactions (venue cascade delete)
    unit_of_work = providers.Factory(SqlAlchemyUnitOfWork, session_factory=database.provided.session)

    # Repositories (stateless - use session_factory per call)
    venue_command_repo = providers.Singleton(
        VenueCommandRepoImpl, session_factory=database.provided.session
    )
    venue_query_repo = providers.Singleton(
        VenueQueryRepoImpl, session_factory=read_database.provided.session
    )
    slot_inventory_repo = providers.Singleton(
        SlotInventoryRepoImpl, session_factory=database.provided.session
    )
    # Reservation state is read from the primary so checks see the latest writes
    slot_reservation_repo = providers.Singleton(
        SlotReservationRepoImpl, session_factory=database.provided.session
    )
    booking_command_repo = providers.Singleton(
        BookingCommandRepoImpl, session_factory=database.provided.session
    )
    booking_query_repo = providers.Singleton(
        BookingQueryRepoImpl, session_factory=database.provided.session
    )
    idempotency_store = providers.Singleton(
        IdempotencyStoreImpl, session_factory=database.provided.session
    )
    review_repo = providers.Singleton(ReviewRepoImpl, session_factory=database.provided.session)

    # Background task group (set by main.py lifespan)
    # Used for fire-and-forget email delivery
    task_group = providers.Object(None)

    # Notifications: SMTP when configured, otherwise written to the log
    notification_delivery = providers.Selector(
        providers.Callable(_notification_channel),
        smtp=providers.Singleton(SmtpNotificationSender),
        log=providers.Singleton(LoggingNotificationSender),
    )
    notification_sender = providers.Singleton(
        BackgroundNotificationSender,
        delivery=notification_delivery,
        task_group=task_group.provider,
    )

    # Auth service
    jwt_auth = providers.Singleton(JwtAuth)


container = Container()
