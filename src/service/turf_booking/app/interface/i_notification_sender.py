from abc import ABC, abstractmethod

from src.service.turf_booking.app.dto.notification import BookingConfirmation, CancellationNotice


class INotificationSender(ABC):
    @abstractmethod
    async def send_booking_confirmation(self, *, confirmation: BookingConfirmation) -> None:
        pass

    @abstractmethod
    async def send_booking_cancellation(self, *, notice: CancellationNotice) -> None:
        pass
