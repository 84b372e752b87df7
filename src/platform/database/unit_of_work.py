"""
Unit of Work - one session per unit, repositories share it

- UoW owns the session lifecycle
- commit() is explicit, leaving the block without commit rolls back
- Use cases coordinate several repositories through one UoW

Usage:
    async with uow_factory() as uow:
        booking = await uow.booking_command_repo.get_by_id(booking_id=..., for_update=True)
        ...
        await uow.commit()
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Callable

from sqlalchemy.ext.asyncio import AsyncSession


if TYPE_CHECKING:
    from src.service.catalog.app.interface.i_catalog_command_repo import ICatalogCommandRepo
    from src.service.catalog.app.interface.i_catalog_query_repo import ICatalogQueryRepo
    from src.service.reservation.app.interface.i_booking_command_repo import (
        IBookingCommandRepo,
    )
    from src.service.reservation.app.interface.i_booking_query_repo import IBookingQueryRepo
    from src.service.reservation.app.interface.i_seat_slot_command_repo import (
        ISeatSlotCommandRepo,
    )
    from src.service.reservation.app.interface.i_seat_slot_query_repo import (
        ISeatSlotQueryRepo,
    )


class AbstractUnitOfWork(abc.ABC):
    # Reservation repositories
    booking_command_repo: IBookingCommandRepo
    booking_query_repo: IBookingQueryRepo
    seat_slot_command_repo: ISeatSlotCommandRepo
    seat_slot_query_repo: ISeatSlotQueryRepo

    # Catalog collaborator
    catalog_query_repo: ICatalogQueryRepo
    catalog_command_repo: ICatalogCommandRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        """Commit the transaction"""
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session_factory: Callable[[], AsyncSession]):
        self.session_factory = session_factory

    async def __aenter__(self):
        from src.service.catalog.driven_adapter.repo.catalog_command_repo_impl import (
            CatalogCommandRepoImpl,
        )
        from src.service.catalog.driven_adapter.repo.catalog_query_repo_impl import (
            CatalogQueryRepoImpl,
        )
        from src.service.reservation.driven_adapter.repo.booking_command_repo_impl import (
            BookingCommandRepoImpl,
        )
        from src.service.reservation.driven_adapter.repo.booking_query_repo_impl import (
            BookingQueryRepoImpl,
        )
        from src.service.reservation.driven_adapter.repo.seat_slot_command_repo_impl import (
            SeatSlotCommandRepoImpl,
        )
        from src.service.reservation.driven_adapter.repo.seat_slot_query_repo_impl import (
            SeatSlotQueryRepoImpl,
        )

        self.session = self.session_factory()

        # Repositories share the unit's session
        self.booking_command_repo = BookingCommandRepoImpl(session=self.session)
        self.booking_query_repo = BookingQueryRepoImpl(session=self.session)
        self.seat_slot_command_repo = SeatSlotCommandRepoImpl(session=self.session)
        self.seat_slot_query_repo = SeatSlotQueryRepoImpl(session=self.session)
        self.catalog_query_repo = CatalogQueryRepoImpl(session=self.session)
        self.catalog_command_repo = CatalogCommandRepoImpl(session=self.session)

        return await super().__aenter__()

    async def __aexit__(self, *args):
        try:
            await super().__aexit__(*args)
        finally:
            await self.session.close()

    async def _commit(self):
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
