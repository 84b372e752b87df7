from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from opentelemetry import trace

from src.platform.config.di import Container
from src.service.reservation.app.query.get_booking_use_case import GetBookingUseCase
from src.service.reservation.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


bearer_scheme = HTTPBearer(auto_error=False)


@inject
async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> int:
    return jwt_auth.get_user_id_from_jwt(credentials.credentials if credentials else None)


async def require_booking_owner(
    booking_id: UUID,
    user_id: int = Depends(get_current_user_id),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> int:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_booking_owner',
        attributes={'booking.id': str(booking_id), 'user.id': user_id},
    ):
        await use_case.ensure_owner(booking_id=booking_id, user_id=user_id)
        return user_id
