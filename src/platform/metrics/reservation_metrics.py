from prometheus_client import Counter, Histogram


class ReservationMetrics:
    """
    Seat reservation core metrics

    Tracks hold engine outcomes, per-seat lock contention, booking lifecycle
    transitions and expiry sweeper activity.
    """

    def __init__(self):
        # ========== Hold Engine ==========
        self.seat_hold_requests = Counter(
            'seat_hold_requests_total',
            'Seat hold/release attempts',
            ['operation', 'result'],  # operation: hold/release
        )

        self.seat_hold_duration = Histogram(
            'seat_hold_duration_seconds',
            'Hold/release processing time including lock wait',
            ['operation'],
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0],
        )

        self.seat_lock_wait = Histogram(
            'seat_lock_wait_seconds',
            'Time spent waiting for a per-seat lock',
            ['result'],  # acquired/timeout
            buckets=[0.0001, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
        )

        # ========== Booking Lifecycle ==========
        self.booking_transitions = Counter(
            'booking_transitions_total',
            'Booking state transitions',
            ['status'],  # pending/confirmed/cancelled/expired
        )

        # ========== Expiry Sweeper ==========
        self.sweeper_runs = Counter(
            'expiry_sweeper_runs_total',
            'Expiry sweeper runs',
            ['result'],  # ok/error
        )

        self.sweeper_failures = Counter(
            'expiry_sweeper_booking_failures_total',
            'Bookings the sweeper failed to reclaim',
        )

    # ========== Helper Methods ==========

    def record_seat_operation(self, *, operation: str, result: str, duration: float):
        self.seat_hold_requests.labels(operation=operation, result=result).inc()
        self.seat_hold_duration.labels(operation=operation).observe(duration)

    def record_seat_lock_wait(self, *, result: str, duration: float):
        self.seat_lock_wait.labels(result=result).observe(duration)

    def record_booking_transition(self, *, status: str, count: int = 1):
        self.booking_transitions.labels(status=status).inc(count)

    def record_sweep(self, *, result: str, failures: int = 0):
        self.sweeper_runs.labels(result=result).inc()
        if failures:
            self.sweeper_failures.inc(failures)


# Global metrics instance
metrics = ReservationMetrics()
