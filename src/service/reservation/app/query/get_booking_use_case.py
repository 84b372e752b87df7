from typing import Callable, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.dto.booking_dto import BookedSeat, BookingDetail
from src.service.reservation.domain.entity.booking_entity import Booking


class GetBookingUseCase:
    def __init__(self, *, uow_factory: Callable[[], AbstractUnitOfWork]) -> None:
        self.uow_factory = uow_factory

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
    ) -> Self:
        return cls(uow_factory=uow_factory)

    async def _get_owned(
        self, uow: AbstractUnitOfWork, *, booking_id: UUID, user_id: int
    ) -> Booking:
        booking = await uow.booking_query_repo.get_by_id(booking_id=booking_id)
        if not booking:
            raise NotFoundError('Booking not found')
        if not booking.is_owned_by(user_id):
            raise ForbiddenError('Access denied: not the booking owner')
        return booking

    @Logger.io
    async def ensure_owner(self, *, booking_id: UUID, user_id: int) -> Booking:
        async with self.uow_factory() as uow:
            return await self._get_owned(uow, booking_id=booking_id, user_id=user_id)

    @Logger.io
    async def get_booking_detail(self, *, booking_id: UUID, user_id: int) -> BookingDetail:
        async with self.uow_factory() as uow:
            booking = await self._get_owned(uow, booking_id=booking_id, user_id=user_id)
            showtime = await uow.catalog_query_repo.get_showtime(showtime_id=booking.showtime_id)
            seat_slots = await uow.seat_slot_query_repo.list_by_booking(booking_id=booking.id)

        return BookingDetail(
            booking_id=booking.id,
            showtime_id=booking.showtime_id,
            movie_title=showtime.movie_title if showtime else '',
            cinema_name=showtime.cinema_name if showtime else '',
            screen_name=showtime.screen_name if showtime else '',
            start_time=showtime.start_time if showtime else None,
            seat_count=booking.seat_count,
            total_price=booking.total_price,
            expires_at=booking.expires_at,
            status=booking.status,
            confirmed_at=booking.confirmed_at,
            seats=[BookedSeat.from_slot(seat_slot) for seat_slot in seat_slots],
        )
