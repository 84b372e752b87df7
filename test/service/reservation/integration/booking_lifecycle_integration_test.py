from datetime import timedelta
from decimal import Decimal

import orjson
import pytest

from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.service.reservation.app.query.get_availability_stats_use_case import (
    GetAvailabilityStatsUseCase,
)
from src.service.reservation.app.query.get_booking_use_case import GetBookingUseCase
from src.service.reservation.domain.enum.booking_status import BookingStatus
from src.service.reservation.domain.enum.seat_status import SeatStatus
from src.service.reservation.domain.reservation_errors import (
    BookingExpiredError,
    CancellationWindowClosedError,
    InvalidBookingStateError,
    NoSeatsHeldError,
    SeatUnavailableError,
)
from test.shared.utils import seed_showtime


async def _hold_seats(hold_seat_use_case, *, booking, showtime, seat_slots, user_id=1):
    summary = None
    for seat in seat_slots:
        summary = await hold_seat_use_case.hold_seat(
            booking_id=booking.booking_id,
            seat_id=seat.seat_id,
            showtime_id=showtime.id,
            user_id=user_id,
        )
    return summary


async def _load_booking(uow_factory, booking_id):
    async with uow_factory() as uow:
        return await uow.booking_command_repo.get_by_id(booking_id=booking_id)


async def _stats(uow_factory, showtime_id):
    return await GetAvailabilityStatsUseCase(uow_factory=uow_factory).get_stats(
        showtime_id=showtime_id
    )


class TestConfirm:
    async def test_confirm_books_seats_and_sends_notice(
        self,
        showtime_with_seats,
        create_booking_use_case,
        hold_seat_use_case,
        confirm_booking_use_case,
        notifier,
        uow_factory,
    ):
        showtime, seat_slots = showtime_with_seats
        booking = await create_booking_use_case.create_booking(showtime_id=showtime.id, user_id=1)
        await _hold_seats(
            hold_seat_use_case, booking=booking, showtime=showtime, seat_slots=seat_slots[:2]
        )

        event = await confirm_booking_use_case.confirm_booking(booking_id=booking.booking_id)

        assert event.seat_count == 2
        assert event.total_price == Decimal('30.00')
        assert sorted(seat.seat_number for seat in event.seats) == ['A1', 'A2']

        stored = await _load_booking(uow_factory, booking.booking_id)
        assert stored.status == BookingStatus.CONFIRMED
        assert stored.confirmed_at is not None

        stats = await _stats(uow_factory, showtime.id)
        assert (stats.available, stats.held, stats.booked) == (8, 0, 2)

        payload = orjson.loads(notifier.sent_payloads[-1])
        assert payload['bookingId'] == str(booking.booking_id)
        assert payload['movieTitle'] == 'The Long Night'
        assert payload['seatCount'] == 2
        assert payload['totalPrice'] == '30.00'

    async def test_confirm_without_seats(
        self, showtime_with_seats, create_booking_use_case, confirm_booking_use_case
    ):
        showtime, _ = showtime_with_seats
        booking = await create_booking_use_case.create_booking(showtime_id=showtime.id, user_id=1)

        with pytest.raises(NoSeatsHeldError):
            await confirm_booking_use_case.confirm_booking(booking_id=booking.booking_id)

    async def test_confirmed_booking_cannot_hold_more(
        self,
        showtime_with_seats,
        create_booking_use_case,
        hold_seat_use_case,
        confirm_booking_use_case,
    ):
        showtime, seat_slots = showtime_with_seats
        booking = await create_booking_use_case.create_booking(showtime_id=showtime.id, user_id=1)
        await _hold_seats(
            hold_seat_use_case, booking=booking, showtime=showtime, seat_slots=seat_slots[:1]
        )
        await confirm_booking_use_case.confirm_booking(booking_id=booking.booking_id)

        with pytest.raises(InvalidBookingStateError):
            await hold_seat_use_case.hold_seat(
                booking_id=booking.booking_id,
                seat_id=seat_slots[1].seat_id,
                showtime_id=showtime.id,
                user_id=1,
            )
        with pytest.raises(InvalidBookingStateError):
            await confirm_booking_use_case.confirm_booking(booking_id=booking.booking_id)


class TestExpiry:
    async def test_confirm_at_expiry_instant_reclaims_the_booking(
        self,
        showtime_with_seats,
        create_booking_use_case,
        hold_seat_use_case,
        confirm_booking_use_case,
        uow_factory,
        clock,
    ):
        showtime, seat_slots = showtime_with_seats
        booking = await create_booking_use_case.create_booking(showtime_id=showtime.id, user_id=1)
        await _hold_seats(
            hold_seat_use_case, booking=booking, showtime=showtime, seat_slots=seat_slots[:2]
        )
        clock.set(booking.expires_at)

        with pytest.raises(BookingExpiredError):
            await confirm_booking_use_case.confirm_booking(booking_id=booking.booking_id)

        stored = await _load_booking(uow_factory, booking.booking_id)
        assert stored.status == BookingStatus.EXPIRED
        assert stored.seat_count == 0
        assert stored.total_price == Decimal('0.00')
        stats = await _stats(uow_factory, showtime.id)
        assert stats.available == len(seat_slots)

    async def test_expired_seats_can_be_held_by_others(
        self,
        showtime_with_seats,
        create_booking_use_case,
        hold_seat_use_case,
        sweep_use_case,
        clock,
    ):
        showtime, seat_slots = showtime_with_seats
        stale = await create_booking_use_case.create_booking(showtime_id=showtime.id, user_id=1)
        await _hold_seats(
            hold_seat_use_case, booking=stale, showtime=showtime, seat_slots=seat_slots[:1]
        )

        clock.advance(minutes=16)
        fresh = await create_booking_use_case.create_booking(showtime_id=showtime.id, user_id=2)
        with pytest.raises(SeatUnavailableError):
            await _hold_seats(
                hold_seat_use_case,
                booking=fresh,
                showtime=showtime,
                seat_slots=seat_slots[:1],
                user_id=2,
            )

        assert await sweep_use_case.sweep() == 1
        summary = await _hold_seats(
            hold_seat_use_case,
            booking=fresh,
            showtime=showtime,
            seat_slots=seat_slots[:1],
            user_id=2,
        )
        assert summary.seat_count == 1

    async def test_sweeper_skips_bookings_at_their_expiry_instant(
        self, showtime_with_seats, create_booking_use_case, sweep_use_case, clock
    ):
        showtime, _ = showtime_with_seats
        booking = await create_booking_use_case.create_booking(showtime_id=showtime.id, user_id=1)

        clock.set(booking.expires_at)
        assert await sweep_use_case.sweep() == 0

        clock.advance(seconds=1)
        assert await sweep_use_case.sweep() == 1

    async def test_sweep_is_idempotent(
        self,
        showtime_with_seats,
        create_booking_use_case,
        hold_seat_use_case,
        confirm_booking_use_case,
        sweep_use_case,
        uow_factory,
        clock,
    ):
        showtime, seat_slots = showtime_with_seats
        lapsed = await create_booking_use_case.create_booking(showtime_id=showtime.id, user_id=1)
        await _hold_seats(
            hold_seat_use_case, booking=lapsed, showtime=showtime, seat_slots=seat_slots[:3]
        )
        confirmed = await create_booking_use_case.create_booking(
            showtime_id=showtime.id, user_id=2
        )
        await _hold_seats(
            hold_seat_use_case,
            booking=confirmed,
            showtime=showtime,
            seat_slots=seat_slots[3:5],
            user_id=2,
        )
        await confirm_booking_use_case.confirm_booking(booking_id=confirmed.booking_id)

        clock.advance(hours=1)
        assert await sweep_use_case.sweep() == 1
        assert await sweep_use_case.sweep() == 0

        assert (await _load_booking(uow_factory, lapsed.booking_id)).status == (
            BookingStatus.EXPIRED
        )
        assert (await _load_booking(uow_factory, confirmed.booking_id)).status == (
            BookingStatus.CONFIRMED
        )
        stats = await _stats(uow_factory, showtime.id)
        assert (stats.available, stats.held, stats.booked) == (8, 0, 2)


class TestInlineReclaim:
    """A lapsed PENDING booking is expired by whichever operation touches it first"""

    @pytest.fixture
    async def lapsed_booking(
        self, showtime_with_seats, create_booking_use_case, hold_seat_use_case, clock
    ):
        showtime, seat_slots = showtime_with_seats
        booking = await create_booking_use_case.create_booking(showtime_id=showtime.id, user_id=1)
        await _hold_seats(
            hold_seat_use_case, booking=booking, showtime=showtime, seat_slots=seat_slots[:2]
        )
        clock.advance(minutes=16)
        return showtime, seat_slots, booking

    async def _assert_reclaimed(self, uow_factory, *, booking, showtime, seat_slots):
        stored = await _load_booking(uow_factory, booking.booking_id)
        assert stored.status == BookingStatus.EXPIRED
        assert stored.seat_count == 0
        assert stored.total_price == Decimal('0.00')
        stats = await _stats(uow_factory, showtime.id)
        assert (stats.available, stats.held) == (len(seat_slots), 0)

    async def test_hold_of_a_free_seat(self, lapsed_booking, hold_seat_use_case, uow_factory):
        showtime, seat_slots, booking = lapsed_booking

        with pytest.raises(BookingExpiredError):
            await _hold_seats(
                hold_seat_use_case, booking=booking, showtime=showtime, seat_slots=seat_slots[5:6]
            )

        await self._assert_reclaimed(
            uow_factory, booking=booking, showtime=showtime, seat_slots=seat_slots
        )

    async def test_hold_of_an_unknown_seat(self, lapsed_booking, hold_seat_use_case, uow_factory):
        showtime, seat_slots, booking = lapsed_booking

        with pytest.raises(BookingExpiredError):
            await hold_seat_use_case.hold_seat(
                booking_id=booking.booking_id,
                seat_id=booking.booking_id,
                showtime_id=showtime.id,
                user_id=1,
            )

        await self._assert_reclaimed(
            uow_factory, booking=booking, showtime=showtime, seat_slots=seat_slots
        )

    async def test_hold_for_another_showtime(
        self, lapsed_booking, hold_seat_use_case, uow_factory, clock
    ):
        showtime, seat_slots, booking = lapsed_booking
        _, other_showtime, other_slots = await seed_showtime(
            uow_factory, clock=clock, screen_name='Screen 2'
        )

        with pytest.raises(BookingExpiredError):
            await hold_seat_use_case.hold_seat(
                booking_id=booking.booking_id,
                seat_id=other_slots[0].seat_id,
                showtime_id=other_showtime.id,
                user_id=1,
            )

        await self._assert_reclaimed(
            uow_factory, booking=booking, showtime=showtime, seat_slots=seat_slots
        )
        other_stats = await _stats(uow_factory, other_showtime.id)
        assert other_stats.available == len(other_slots)

    async def test_release_of_a_held_seat(
        self, lapsed_booking, release_seat_use_case, uow_factory
    ):
        showtime, seat_slots, booking = lapsed_booking

        with pytest.raises(BookingExpiredError):
            await release_seat_use_case.release_seat(
                booking_id=booking.booking_id,
                seat_id=seat_slots[0].seat_id,
                showtime_id=showtime.id,
                user_id=1,
            )

        await self._assert_reclaimed(
            uow_factory, booking=booking, showtime=showtime, seat_slots=seat_slots
        )

    async def test_release_of_an_unknown_seat(
        self, lapsed_booking, release_seat_use_case, uow_factory
    ):
        showtime, seat_slots, booking = lapsed_booking

        with pytest.raises(BookingExpiredError):
            await release_seat_use_case.release_seat(
                booking_id=booking.booking_id,
                seat_id=booking.booking_id,
                showtime_id=showtime.id,
                user_id=1,
            )

        await self._assert_reclaimed(
            uow_factory, booking=booking, showtime=showtime, seat_slots=seat_slots
        )

    async def test_cancel_inside_the_cutoff_window(
        self,
        uow_factory,
        clock,
        create_booking_use_case,
        hold_seat_use_case,
        cancel_booking_use_case,
    ):
        _, showtime, seat_slots = await seed_showtime(
            uow_factory, clock=clock, starts_in=timedelta(minutes=30)
        )
        booking = await create_booking_use_case.create_booking(showtime_id=showtime.id, user_id=1)
        await _hold_seats(
            hold_seat_use_case, booking=booking, showtime=showtime, seat_slots=seat_slots[:1]
        )
        clock.advance(minutes=16)

        with pytest.raises(BookingExpiredError):
            await cancel_booking_use_case.cancel_booking(booking_id=booking.booking_id)

        await self._assert_reclaimed(
            uow_factory, booking=booking, showtime=showtime, seat_slots=seat_slots
        )

    async def test_unknown_seat_on_a_live_booking_is_not_found(
        self, showtime_with_seats, create_booking_use_case, release_seat_use_case, uow_factory
    ):
        showtime, _ = showtime_with_seats
        booking = await create_booking_use_case.create_booking(showtime_id=showtime.id, user_id=1)

        with pytest.raises(NotFoundError):
            await release_seat_use_case.release_seat(
                booking_id=booking.booking_id,
                seat_id=booking.booking_id,
                showtime_id=showtime.id,
                user_id=1,
            )

        stored = await _load_booking(uow_factory, booking.booking_id)
        assert stored.status == BookingStatus.PENDING


class TestCancel:
    @pytest.fixture
    async def confirmed_booking(
        self,
        showtime_with_seats,
        create_booking_use_case,
        hold_seat_use_case,
        confirm_booking_use_case,
    ):
        showtime, seat_slots = showtime_with_seats
        booking = await create_booking_use_case.create_booking(showtime_id=showtime.id, user_id=1)
        await _hold_seats(
            hold_seat_use_case, booking=booking, showtime=showtime, seat_slots=seat_slots[:2]
        )
        await confirm_booking_use_case.confirm_booking(booking_id=booking.booking_id)
        return showtime, booking

    async def test_cancel_more_than_an_hour_before_start(
        self, confirmed_booking, cancel_booking_use_case, uow_factory, clock
    ):
        showtime, booking = confirmed_booking
        clock.set(showtime.start_time - timedelta(minutes=61))

        summary = await cancel_booking_use_case.cancel_booking(booking_id=booking.booking_id)

        assert summary.status == BookingStatus.CANCELLED
        assert summary.seat_count == 0
        assert summary.total_price == Decimal('0.00')
        async with uow_factory() as uow:
            slots = await uow.seat_slot_query_repo.list_by_showtime(showtime_id=showtime.id)
        assert all(slot.status == SeatStatus.AVAILABLE for slot in slots)

    @pytest.mark.parametrize('minutes_before_start', [60, 59, 0])
    async def test_cancel_inside_cutoff_is_rejected(
        self, confirmed_booking, cancel_booking_use_case, uow_factory, clock, minutes_before_start
    ):
        showtime, booking = confirmed_booking
        clock.set(showtime.start_time - timedelta(minutes=minutes_before_start))

        with pytest.raises(CancellationWindowClosedError):
            await cancel_booking_use_case.cancel_booking(booking_id=booking.booking_id)

        stored = await _load_booking(uow_factory, booking.booking_id)
        assert stored.status == BookingStatus.CONFIRMED
        assert stored.seat_count == 2

    async def test_cancel_twice(self, confirmed_booking, cancel_booking_use_case):
        _, booking = confirmed_booking
        await cancel_booking_use_case.cancel_booking(booking_id=booking.booking_id)

        with pytest.raises(InvalidBookingStateError):
            await cancel_booking_use_case.cancel_booking(booking_id=booking.booking_id)

    async def test_cancel_pending_booking_releases_held_seats(
        self,
        uow_factory,
        clock,
        create_booking_use_case,
        hold_seat_use_case,
        cancel_booking_use_case,
    ):
        _, showtime, seat_slots = await seed_showtime(
            uow_factory, clock=clock, starts_in=timedelta(hours=3)
        )
        booking = await create_booking_use_case.create_booking(showtime_id=showtime.id, user_id=1)
        await _hold_seats(
            hold_seat_use_case, booking=booking, showtime=showtime, seat_slots=seat_slots[:3]
        )

        summary = await cancel_booking_use_case.cancel_booking(booking_id=booking.booking_id)

        assert summary.status == BookingStatus.CANCELLED
        stats = await _stats(uow_factory, showtime.id)
        assert stats.available == len(seat_slots)


class TestOwnership:
    async def test_other_users_cannot_read_a_booking(
        self, showtime_with_seats, create_booking_use_case, uow_factory
    ):
        showtime, _ = showtime_with_seats
        booking = await create_booking_use_case.create_booking(showtime_id=showtime.id, user_id=1)
        use_case = GetBookingUseCase(uow_factory=uow_factory)

        detail = await use_case.get_booking_detail(booking_id=booking.booking_id, user_id=1)
        assert detail.movie_title == 'The Long Night'
        assert detail.status == BookingStatus.PENDING

        with pytest.raises(ForbiddenError):
            await use_case.ensure_owner(booking_id=booking.booking_id, user_id=2)
