from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.query.get_availability_stats_use_case import (
    GetAvailabilityStatsUseCase,
)
from src.service.reservation.app.query.list_showtime_seats_use_case import (
    ListShowtimeSeatsUseCase,
)
from src.service.reservation.driving_adapter.http_controller.schema.seat_schema import (
    AvailabilityStatsResponse,
    SeatLayoutResponse,
)


router = APIRouter()


@router.get('/{showtime_id}/seats')
@Logger.io(truncate_content=True)
async def list_showtime_seats(
    showtime_id: UUID,
    use_case: ListShowtimeSeatsUseCase = Depends(ListShowtimeSeatsUseCase.depends),
) -> List[SeatLayoutResponse]:
    seats = await use_case.list_seats(showtime_id=showtime_id)
    return [SeatLayoutResponse.from_item(item) for item in seats]


@router.get('/{showtime_id}/seats/stats')
@Logger.io
async def get_availability_stats(
    showtime_id: UUID,
    use_case: GetAvailabilityStatsUseCase = Depends(GetAvailabilityStatsUseCase.depends),
) -> AvailabilityStatsResponse:
    stats = await use_case.get_stats(showtime_id=showtime_id)
    return AvailabilityStatsResponse.from_stats(stats)
