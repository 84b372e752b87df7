from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.catalog.domain.entity.screen_entity import Screen


class RegisterScreenUseCase:
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
    async def register_screen(
        self, *, cinema_name: str, name: str, num_rows: int, num_cols: int
    ) -> Screen:
        screen = Screen.create(
            cinema_name=cinema_name, name=name, num_rows=num_rows, num_cols=num_cols
        )

        async with self.uow_factory() as uow:
            if await uow.catalog_query_repo.screen_name_exists(
                cinema_name=screen.cinema_name, name=screen.name
            ):
                raise DomainError(
                    f'Screen {screen.name} already exists in cinema {screen.cinema_name}'
                )

            await uow.catalog_command_repo.create_screen(
                screen=screen, seats=screen.build_seat_grid(num_rows=num_rows, num_cols=num_cols)
            )
            await uow.commit()

        Logger.base.info(
            f'🎬 [SCREEN] Registered {screen.cinema_name}/{screen.name} with {screen.capacity} seats'
        )
        return screen
