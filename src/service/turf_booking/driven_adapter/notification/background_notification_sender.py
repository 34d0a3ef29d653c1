from typing import Awaitable, Callable, Optional

from anyio.abc import TaskGroup

from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.turf_booking.app.dto.notification import BookingConfirmation, CancellationNotice
from src.service.turf_booking.app.interface.i_notification_sender import INotificationSender


class BackgroundNotificationSender(INotificationSender):
    """
    Hands emails to the application task group so requests never wait on SMTP.

    ``task_group`` is looked up per call because the lifespan installs it after
    the container is built. Without a task group (scripts, tests) delivery runs
    inline. Delivery errors are logged and counted, never raised to the caller.
    """

    def __init__(
        self,
        *,
        delivery: INotificationSender,
        task_group: Callable[[], Optional[TaskGroup]],
    ) -> None:
        self.delivery = delivery
        self.task_group = task_group

    async def send_booking_confirmation(self, *, confirmation: BookingConfirmation) -> None:
        await self._dispatch(
            kind='confirmation',
            recipient=confirmation.recipient_email,
            send=lambda: self.delivery.send_booking_confirmation(confirmation=confirmation),
        )

    async def send_booking_cancellation(self, *, notice: CancellationNotice) -> None:
        await self._dispatch(
            kind='cancellation',
            recipient=notice.recipient_email,
            send=lambda: self.delivery.send_booking_cancellation(notice=notice),
        )

    async def _dispatch(
        self, *, kind: str, recipient: str, send: Callable[[], Awaitable[None]]
    ) -> None:
        tg = self.task_group()
        if tg is None:
            await self._deliver(kind, recipient, send)
            return
        tg.start_soon(self._deliver, kind, recipient, send)  # type: ignore[arg-type]

    @staticmethod
    async def _deliver(kind: str, recipient: str, send: Callable[[], Awaitable[None]]) -> None:
        try:
            await send()
        except Exception as e:
            metrics.record_notification(kind=kind, result='failed')
            Logger.base.error(f'📧 [NOTIFY] {kind} to {recipient} not sent: {e}')
        else:
            metrics.record_notification(kind=kind, result='sent')
