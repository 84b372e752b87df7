from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.platform.exception.exceptions import ConflictError, DomainError


class ShowtimeConflictError(ConflictError):
    def __init__(self, message: str = 'Showtime conflicts with an existing showtime') -> None:
        super().__init__(message)


def truncate_to_seconds(value: datetime) -> datetime:
    return value.replace(microsecond=0)


@attrs.define
class Showtime:
    id: UUID
    movie_title: str
    screen_id: UUID
    start_time: datetime
    end_time: datetime
    price: Decimal
    cinema_name: str = ''
    screen_name: str = ''
    created_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        movie_title: str,
        screen_id: UUID,
        start_time: datetime,
        end_time: datetime,
        price: Decimal,
    ) -> 'Showtime':
        if not movie_title.strip():
            raise DomainError('Movie title is required')
        if start_time.tzinfo is None or end_time.tzinfo is None:
            raise DomainError('Showtime start and end must carry a timezone')
        if end_time <= start_time:
            raise DomainError('Showtime end must be after its start')
        if price < 0:
            raise DomainError('Price must not be negative')
        return cls(
            id=uuid7(),
            movie_title=movie_title.strip(),
            screen_id=screen_id,
            start_time=start_time.astimezone(timezone.utc),
            end_time=end_time.astimezone(timezone.utc),
            price=price.quantize(Decimal('0.01')),
        )

    def overlaps(self, *, start_time: datetime, end_time: datetime) -> bool:
        """
        Strict overlap of [start, end) intervals at whole-second precision.

        Intervals that only touch (one ends exactly when the other starts) do not overlap.
        """
        return truncate_to_seconds(self.start_time) < truncate_to_seconds(
            end_time
        ) and truncate_to_seconds(self.end_time) > truncate_to_seconds(start_time)
