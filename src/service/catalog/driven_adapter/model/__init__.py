from src.service.catalog.driven_adapter.model.screen_model import ScreenModel
from src.service.catalog.driven_adapter.model.seat_model import SeatModel
from src.service.catalog.driven_adapter.model.showtime_model import ShowtimeModel

__all__ = ['ScreenModel', 'SeatModel', 'ShowtimeModel']
