"""
Business rule failures of the reservation core.

All are expected outcomes surfaced to the caller; none is retried by the engine.
"""

from src.platform.exception.exceptions import ConflictError, DomainError


class SeatUnavailableError(ConflictError):
    def __init__(self, message: str = 'Seat is not available') -> None:
        super().__init__(message)


class BookingExpiredError(DomainError):
    def __init__(self, message: str = 'Booking has expired') -> None:
        super().__init__(message)


class HoldLimitExceededError(DomainError):
    def __init__(self, max_seats: int) -> None:
        super().__init__(f'Cannot hold more than {max_seats} seats per booking')


class SeatNotHeldByBookingError(DomainError):
    def __init__(self, message: str = 'Seat is not held by this booking') -> None:
        super().__init__(message)


class InvalidBookingStateError(DomainError):
    pass


class NoSeatsHeldError(DomainError):
    def __init__(self, message: str = 'No held seats found for this booking') -> None:
        super().__init__(message)


class CancellationWindowClosedError(DomainError):
    def __init__(self, cutoff_minutes: int) -> None:
        super().__init__(
            f'Cannot cancel booking within {cutoff_minutes} minutes of showtime start'
        )


class InventoryAlreadyMaterializedError(DomainError):
    def __init__(self, message: str = 'Seats are already materialized for this showtime') -> None:
        super().__init__(message)
