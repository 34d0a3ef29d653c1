from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.dto.notification import BookingConfirmation, CancellationNotice
from src.service.turf_booking.app.interface.i_notification_sender import INotificationSender
from src.service.turf_booking.driven_adapter.notification.email_templates import (
    booking_cancellation_email,
    booking_confirmation_email,
)


class LoggingNotificationSender(INotificationSender):
    """Writes emails to the log instead of sending them (used when SMTP_HOST is empty)"""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str, str]] = []

    def _deliver(self, *, to: str, subject: str, body: str) -> None:
        self.sent.append((to, subject, body))
        Logger.base.info(f'📧 [NOTIFY] to={to} subject="{subject}"\n{body}')

    async def send_booking_confirmation(self, *, confirmation: BookingConfirmation) -> None:
        subject, body = booking_confirmation_email(confirmation)
        self._deliver(to=confirmation.recipient_email, subject=subject, body=body)

    async def send_booking_cancellation(self, *, notice: CancellationNotice) -> None:
        subject, body = booking_cancellation_email(notice)
        self._deliver(to=notice.recipient_email, subject=subject, body=body)
