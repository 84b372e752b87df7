from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.command.register_screen_use_case import RegisterScreenUseCase
from src.service.catalog.driving_adapter.http_controller.schema.catalog_schema import (
    ScreenCreateRequest,
    ScreenResponse,
)
from src.service.reservation.driving_adapter.http_controller.auth.current_user import (
    get_current_user_id,
)


router = APIRouter()


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def register_screen(
    request: ScreenCreateRequest,
    user_id: int = Depends(get_current_user_id),
    use_case: RegisterScreenUseCase = Depends(RegisterScreenUseCase.depends),
) -> ScreenResponse:
    screen = await use_case.register_screen(
        cinema_name=request.cinema_name,
        name=request.name,
        num_rows=request.num_rows,
        num_cols=request.num_cols,
    )
    return ScreenResponse.from_screen(screen)
