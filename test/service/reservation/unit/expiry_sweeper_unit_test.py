from unittest.mock import AsyncMock

import anyio

from src.service.reservation.driving_adapter.scheduler.expiry_sweeper import (
    ExpiredBookingSweeper,
)


class TestExpiredBookingSweeper:
    async def test_sweep_once_delegates_to_use_case(self):
        use_case = AsyncMock()
        use_case.sweep = AsyncMock(return_value=3)

        assert await ExpiredBookingSweeper(use_case=use_case).sweep_once() == 3

    async def test_failed_run_does_not_stop_the_loop(self):
        use_case = AsyncMock()
        use_case.sweep = AsyncMock(side_effect=[RuntimeError('database is locked'), 0, 0, 0])
        sweeper = ExpiredBookingSweeper(use_case=use_case, interval_seconds=0.01)

        with anyio.move_on_after(0.2):
            async with anyio.create_task_group() as tg:
                await sweeper.start(task_group=tg)
                while use_case.sweep.await_count < 3:
                    await anyio.sleep(0.01)
                tg.cancel_scope.cancel()

        assert use_case.sweep.await_count >= 3
