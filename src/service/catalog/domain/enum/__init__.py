"""Catalog Domain Enums"""

from src.service.catalog.domain.enum.seat_type import SeatType

__all__ = ['SeatType']
