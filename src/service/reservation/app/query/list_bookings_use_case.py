from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.dto.booking_dto import BookingPage


DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class ListBookingsUseCase:
    """The caller's bookings, newest first, zero-based pages"""

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

    @Logger.io
    async def list_bookings(
        self, *, user_id: int, page: int = 0, size: int = DEFAULT_PAGE_SIZE
    ) -> BookingPage:
        if page < 0:
            raise DomainError('Page must not be negative')
        if not 1 <= size <= MAX_PAGE_SIZE:
            raise DomainError(f'Page size must be between 1 and {MAX_PAGE_SIZE}')

        async with self.uow_factory() as uow:
            cards, total = await uow.booking_query_repo.list_by_user(
                user_id=user_id, offset=page * size, limit=size
            )

        return BookingPage(items=cards, page=page, size=size, total=total)
