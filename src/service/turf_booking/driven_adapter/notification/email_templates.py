"""Plain-text bodies for booking emails."""

from src.service.turf_booking.app.dto.notification import BookingConfirmation, CancellationNotice


def booking_confirmation_email(confirmation: BookingConfirmation) -> tuple[str, str]:
    slot_lines = '\n'.join(f'  - {slot_time}' for slot_time in confirmation.slot_times)
    subject = f'Booking confirmed at {confirmation.venue_name}'
    body = (
        f'Hi {confirmation.recipient_name or "there"},\n\n'
        f'Your booking at {confirmation.venue_name} ({confirmation.venue_location}) is confirmed.\n\n'
        f'Slots:\n{slot_lines}\n\n'
        f'Advance paid: {confirmation.advance_paid}\n'
        f'Remaining (pay at venue): {confirmation.remaining}\n\n'
        f'Booking reference: {", ".join(str(booking_id) for booking_id in confirmation.booking_ids)}\n'
    )
    return subject, body


def booking_cancellation_email(notice: CancellationNotice) -> tuple[str, str]:
    subject = f'Booking cancelled at {notice.venue_name}'
    reason_line = f'Reason: {notice.reason}\n' if notice.reason else ''
    body = (
        f'Hi {notice.recipient_name or "there"},\n\n'
        f'Your booking {notice.booking_id} for {notice.slot_time} at {notice.venue_name} '
        f'has been cancelled.\n'
        f'{reason_line}'
    )
    return subject, body
