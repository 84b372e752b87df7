from enum import StrEnum


class BookingStatus(StrEnum):
    PENDING = 'PENDING'
    CONFIRMED = 'CONFIRMED'
    CANCELLED = 'CANCELLED'
    EXPIRED = 'EXPIRED'

    @property
    def is_terminal(self) -> bool:
        return self is not BookingStatus.PENDING
