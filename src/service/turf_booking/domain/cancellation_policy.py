from datetime import datetime, timedelta

from src.platform.exception.exceptions import TooLateError


def cancellation_deadline(*, slot_start: datetime, cutoff_minutes: int) -> datetime:
    return slot_start - timedelta(minutes=cutoff_minutes)


def ensure_cancellable(*, slot_start: datetime, now: datetime, cutoff_minutes: int) -> None:
    """Raise TooLateError once ``now`` reaches the cutoff before the slot starts"""
    if now >= cancellation_deadline(slot_start=slot_start, cutoff_minutes=cutoff_minutes):
        raise TooLateError(
            f'Bookings can only be cancelled more than {cutoff_minutes} minutes in advance'
        )
