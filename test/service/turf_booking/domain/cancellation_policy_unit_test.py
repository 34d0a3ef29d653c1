from datetime import datetime, timedelta, timezone

import pytest

from src.platform.exception.exceptions import TooLateError
from src.service.turf_booking.domain.cancellation_policy import (
    cancellation_deadline,
    ensure_cancellable,
)


pytestmark = pytest.mark.unit

SLOT_START = datetime(2026, 11, 2, 12, 30, tzinfo=timezone.utc)


class TestCancellationPolicy:
    def test_deadline_is_cutoff_before_start(self) -> None:
        assert cancellation_deadline(slot_start=SLOT_START, cutoff_minutes=60) == datetime(
            2026, 11, 2, 11, 30, tzinfo=timezone.utc
        )

    def test_61_minutes_before_is_allowed(self) -> None:
        ensure_cancellable(
            slot_start=SLOT_START, now=SLOT_START - timedelta(minutes=61), cutoff_minutes=60
        )

    @pytest.mark.parametrize('minutes_before', [60, 59, 30, 0, -15])
    def test_inside_cutoff_or_after_start_is_too_late(self, minutes_before: int) -> None:
        with pytest.raises(TooLateError):
            ensure_cancellable(
                slot_start=SLOT_START,
                now=SLOT_START - timedelta(minutes=minutes_before),
                cutoff_minutes=60,
            )
