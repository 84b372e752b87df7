from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.reservation.app.command.confirm_booking_use_case import ConfirmBookingUseCase
from src.service.reservation.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.reservation.app.command.hold_seat_use_case import HoldSeatUseCase
from src.service.reservation.app.command.release_seat_use_case import ReleaseSeatUseCase
from src.service.reservation.app.query.get_booking_use_case import GetBookingUseCase
from src.service.reservation.app.query.list_bookings_use_case import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    ListBookingsUseCase,
)
from src.service.reservation.driving_adapter.http_controller.auth.current_user import (
    get_current_user_id,
    require_booking_owner,
)
from src.service.reservation.driving_adapter.http_controller.schema.booking_schema import (
    BookingConfirmationResponse,
    BookingDetailResponse,
    BookingPageResponse,
    BookingSummaryResponse,
    SeatActionRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('/showtime/{showtime_id}', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_booking(
    showtime_id: UUID,
    user_id: int = Depends(get_current_user_id),
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> BookingSummaryResponse:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('showtime.id', str(showtime_id))
        span.set_attribute('user.id', user_id)

        summary = await use_case.create_booking(showtime_id=showtime_id, user_id=user_id)
        span.set_attribute('booking.id', str(summary.booking_id))
        return BookingSummaryResponse.from_summary(summary)


@router.get('/my_booking')
@Logger.io
async def list_my_bookings(
    page: int = Query(0, ge=0),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    user_id: int = Depends(get_current_user_id),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> BookingPageResponse:
    booking_page = await use_case.list_bookings(user_id=user_id, page=page, size=size)
    return BookingPageResponse.from_page(booking_page)


@router.get('/{booking_id}')
@Logger.io
async def get_booking(
    booking_id: UUID,
    user_id: int = Depends(get_current_user_id),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingDetailResponse:
    detail = await use_case.get_booking_detail(booking_id=booking_id, user_id=user_id)
    return BookingDetailResponse.from_detail(detail)


@router.post('/{booking_id}/hold-seat')
@Logger.io
async def hold_seat(
    booking_id: UUID,
    request: SeatActionRequest,
    user_id: int = Depends(require_booking_owner),
    use_case: HoldSeatUseCase = Depends(HoldSeatUseCase.depends),
) -> BookingSummaryResponse:
    summary = await use_case.hold_seat(
        booking_id=booking_id,
        seat_id=request.seat_id,
        showtime_id=request.showtime_id,
        user_id=user_id,
    )
    return BookingSummaryResponse.from_summary(summary)


@router.post('/{booking_id}/release-seat')
@Logger.io
async def release_seat(
    booking_id: UUID,
    request: SeatActionRequest,
    user_id: int = Depends(require_booking_owner),
    use_case: ReleaseSeatUseCase = Depends(ReleaseSeatUseCase.depends),
) -> BookingSummaryResponse:
    summary = await use_case.release_seat(
        booking_id=booking_id,
        seat_id=request.seat_id,
        showtime_id=request.showtime_id,
        user_id=user_id,
    )
    return BookingSummaryResponse.from_summary(summary)


@router.post('/{booking_id}/confirm')
@Logger.io
async def confirm_booking(
    booking_id: UUID,
    user_id: int = Depends(require_booking_owner),
    use_case: ConfirmBookingUseCase = Depends(ConfirmBookingUseCase.depends),
) -> BookingConfirmationResponse:
    event = await use_case.confirm_booking(booking_id=booking_id)
    return BookingConfirmationResponse.from_event(event)


@router.post('/{booking_id}/cancel')
@Logger.io
async def cancel_booking(
    booking_id: UUID,
    user_id: int = Depends(require_booking_owner),
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> BookingSummaryResponse:
    summary = await use_case.cancel_booking(booking_id=booking_id)
    return BookingSummaryResponse.from_summary(summary)
