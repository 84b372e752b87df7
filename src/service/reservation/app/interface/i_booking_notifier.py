from abc import ABC, abstractmethod

from src.service.reservation.domain.domain_event.booking_confirmed_event import (
    BookingConfirmedEvent,
)


class IBookingNotifier(ABC):
    """Notification collaborator (email / QR delivery); fire-and-forget"""

    @abstractmethod
    async def send_booking_confirmation(self, *, event: BookingConfirmedEvent) -> None:
        pass
