from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.command.remove_showtime_use_case import RemoveShowtimeUseCase
from src.service.catalog.app.command.schedule_showtime_use_case import ScheduleShowtimeUseCase
from src.service.catalog.driving_adapter.http_controller.schema.catalog_schema import (
    ShowtimeCreateRequest,
    ShowtimeResponse,
)
from src.service.reservation.driving_adapter.http_controller.auth.current_user import (
    get_current_user_id,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def schedule_showtime(
    request: ShowtimeCreateRequest,
    user_id: int = Depends(get_current_user_id),
    use_case: ScheduleShowtimeUseCase = Depends(ScheduleShowtimeUseCase.depends),
) -> ShowtimeResponse:
    with tracer.start_as_current_span('controller.schedule_showtime') as span:
        span.set_attribute('screen.id', str(request.screen_id))

        showtime = await use_case.schedule_showtime(
            movie_title=request.movie_title,
            screen_id=request.screen_id,
            start_time=request.start_time,
            end_time=request.end_time,
            price=request.price,
        )
        span.set_attribute('showtime.id', str(showtime.id))
        return ShowtimeResponse.from_showtime(showtime)


@router.delete('/{showtime_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def remove_showtime(
    showtime_id: UUID,
    user_id: int = Depends(get_current_user_id),
    use_case: RemoveShowtimeUseCase = Depends(RemoveShowtimeUseCase.depends),
) -> Response:
    await use_case.remove_showtime(showtime_id=showtime_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
