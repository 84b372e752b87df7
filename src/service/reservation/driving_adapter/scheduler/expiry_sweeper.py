import anyio
from anyio.abc import TaskGroup

from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.command.sweep_expired_bookings_use_case import (
    SweepExpiredBookingsUseCase,
)


class ExpiredBookingSweeper:
    """Periodically reclaim lapsed PENDING bookings"""

    def __init__(
        self,
        *,
        use_case: SweepExpiredBookingsUseCase,
        interval_seconds: float = 1800.0,
    ) -> None:
        self.use_case = use_case
        self.interval_seconds = interval_seconds

    async def start(self, *, task_group: TaskGroup) -> None:
        task_group.start_soon(self.run_forever)
        Logger.base.info(f'⏰ [Sweeper] Started, every {self.interval_seconds}s')

    async def sweep_once(self) -> int:
        return await self.use_case.sweep()

    async def run_forever(self) -> None:
        while True:
            try:
                await self.sweep_once()
            except Exception as e:
                # Store outage or similar; try again next round
                Logger.base.error(f'❌ [Sweeper] Sweep run failed: {e}')
            await anyio.sleep(self.interval_seconds)
