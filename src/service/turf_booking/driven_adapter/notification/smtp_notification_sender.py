from email.message import EmailMessage
import smtplib

import anyio.to_thread

from src.platform.config.core_setting import Settings, settings
from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.dto.notification import BookingConfirmation, CancellationNotice
from src.service.turf_booking.app.interface.i_notification_sender import INotificationSender
from src.service.turf_booking.driven_adapter.notification.email_templates import (
    booking_cancellation_email,
    booking_confirmation_email,
)


class SmtpNotificationSender(INotificationSender):
    def __init__(self, config: Settings = settings) -> None:
        self.config = config

    def _build_message(self, *, to: str, subject: str, body: str) -> EmailMessage:
        message = EmailMessage()
        message['From'] = self.config.EMAIL_SENDER
        message['To'] = to
        message['Subject'] = subject
        message.set_content(body)
        return message

    def _send_blocking(self, message: EmailMessage) -> None:
        with smtplib.SMTP(
            self.config.SMTP_HOST, self.config.SMTP_PORT, timeout=self.config.SMTP_TIMEOUT
        ) as client:
            if self.config.SMTP_USE_TLS:
                client.starttls()
            if self.config.SMTP_USERNAME:
                client.login(
                    self.config.SMTP_USERNAME, self.config.SMTP_PASSWORD.get_secret_value()
                )
            client.send_message(message)

    async def _deliver(self, *, to: str, subject: str, body: str) -> None:
        message = self._build_message(to=to, subject=subject, body=body)
        await anyio.to_thread.run_sync(self._send_blocking, message)
        Logger.base.info(f'📧 [NOTIFY] Sent "{subject}" to {to}')

    @Logger.io
    async def send_booking_confirmation(self, *, confirmation: BookingConfirmation) -> None:
        subject, body = booking_confirmation_email(confirmation)
        await self._deliver(to=confirmation.recipient_email, subject=subject, body=body)

    @Logger.io
    async def send_booking_cancellation(self, *, notice: CancellationNotice) -> None:
        subject, body = booking_cancellation_email(notice)
        await self._deliver(to=notice.recipient_email, subject=subject, body=body)
