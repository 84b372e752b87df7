from decimal import Decimal

import pytest
from uuid_utils.compat import uuid7

from src.service.reservation.domain.entity.seat_slot_entity import SeatSlot
from src.service.reservation.domain.enum.seat_status import SeatStatus
from test.shared.utils import DEFAULT_NOW


def _slot() -> SeatSlot:
    return SeatSlot.materialize(
        seat_id=uuid7(), showtime_id=uuid7(), price=Decimal('15.00'), row_name='B', seat_position=4
    )


class TestSeatSlotLifecycle:
    def test_materialized_slot_is_available(self):
        slot = _slot()

        assert slot.status == SeatStatus.AVAILABLE
        assert slot.booking_id is None
        assert slot.held_until is None
        assert slot.seat_number == 'B4'

    def test_hold_book_release(self):
        booking_id = uuid7()

        held = _slot().hold(booking_id=booking_id, until=DEFAULT_NOW)
        assert held.is_held_by(booking_id)
        assert not held.is_held_by(uuid7())
        assert held.held_until == DEFAULT_NOW

        booked = held.book()
        assert booked.status == SeatStatus.BOOKED
        assert booked.booking_id == booking_id
        assert booked.held_until is None
        assert not booked.is_held_by(booking_id)

        released = booked.release()
        assert released.is_available
        assert released.booking_id is None

    def test_price_survives_transitions(self):
        slot = _slot()

        assert slot.hold(booking_id=uuid7(), until=DEFAULT_NOW).book().price == Decimal('15.00')


class TestSeatSlotInvariant:
    def test_held_without_expiry_is_rejected(self):
        with pytest.raises(ValueError):
            SeatSlot(
                id=uuid7(),
                seat_id=uuid7(),
                showtime_id=uuid7(),
                price=Decimal('15.00'),
                status=SeatStatus.HELD,
                booking_id=uuid7(),
            )

    def test_available_with_holder_is_rejected(self):
        with pytest.raises(ValueError):
            SeatSlot(
                id=uuid7(),
                seat_id=uuid7(),
                showtime_id=uuid7(),
                price=Decimal('15.00'),
                booking_id=uuid7(),
            )

    def test_booked_with_expiry_is_rejected(self):
        with pytest.raises(ValueError):
            SeatSlot(
                id=uuid7(),
                seat_id=uuid7(),
                showtime_id=uuid7(),
                price=Decimal('15.00'),
                status=SeatStatus.BOOKED,
                booking_id=uuid7(),
                held_until=DEFAULT_NOW,
            )
