from prometheus_client import Counter, Gauge, Histogram


class BookingMetrics:
    """
    Slot reservation metrics

    Labels stay low-cardinality (outcome names, never venue or user ids) so the
    series count does not grow with inventory.
    """

    def __init__(self) -> None:
        # ========== Reservation ==========
        self.reservation_requests = Counter(
            'slot_reservation_requests_total',
            'Reservation requests by outcome',
            ['result'],  # success/replayed/conflict/partial_inventory/write_failure/invalid
        )

        self.reservation_duration = Histogram(
            'slot_reservation_duration_seconds',
            'Time spent coordinating a reservation',
            ['result'],
            buckets=[0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0],
        )

        self.slots_per_reservation = Histogram(
            'slot_reservation_size',
            'Slots requested per reservation',
            buckets=[1, 2, 3, 4, 6, 8, 12, 24],
        )

        self.compensation_failures = Counter(
            'slot_compensation_failures_total',
            'Undo actions that failed during rollback',
            ['operation'],
        )

        # ========== Cancellation ==========
        self.cancellations = Counter(
            'booking_cancellations_total',
            'Cancellation attempts by outcome',
            ['result'],  # cancelled/too_late/forbidden/release_failed
        )

        # ========== Reconciliation ==========
        self.orphans_released = Counter(
            'slot_orphans_released_total', 'Orphaned slot reservations released'
        )

        self.orphans_pending = Gauge(
            'slot_orphans_pending', 'Orphaned reservations found in the last reconcile pass'
        )

        # ========== Notification ==========
        self.notifications = Counter(
            'booking_notifications_total',
            'Outbound notifications by kind and outcome',
            ['kind', 'result'],
        )

    # ========== Helper Methods ==========

    def record_reservation(self, *, result: str, duration: float, slot_count: int) -> None:
        self.reservation_requests.labels(result=result).inc()
        self.reservation_duration.labels(result=result).observe(duration)
        self.slots_per_reservation.observe(slot_count)

    def record_compensation_failure(self, *, operation: str) -> None:
        self.compensation_failures.labels(operation=operation).inc()

    def record_cancellation(self, *, result: str) -> None:
        self.cancellations.labels(result=result).inc()

    def record_reconcile(self, *, found: int, released: int) -> None:
        self.orphans_pending.set(found)
        self.orphans_released.inc(released)

    def record_notification(self, *, kind: str, result: str) -> None:
        self.notifications.labels(kind=kind, result=result).inc()


metrics = BookingMetrics()
