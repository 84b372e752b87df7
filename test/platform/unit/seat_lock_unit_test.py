import anyio
import pytest
from uuid_utils.compat import uuid7

from src.platform.state.seat_lock import SeatLockManager, SeatLockTimeoutError


class TestSeatLockManager:
    def test_same_key_maps_to_same_shard(self):
        manager = SeatLockManager(shards=16)
        seat_id, showtime_id = uuid7(), uuid7()

        assert manager.shard_index(seat_id=seat_id, showtime_id=showtime_id) == manager.shard_index(
            seat_id=seat_id, showtime_id=showtime_id
        )
        assert 0 <= manager.shard_index(seat_id=seat_id, showtime_id=showtime_id) < 16

    def test_rejects_empty_shard_set(self):
        with pytest.raises(ValueError):
            SeatLockManager(shards=0)

    async def test_serializes_holders_of_one_seat(self):
        manager = SeatLockManager(shards=8, timeout_seconds=5)
        seat_id, showtime_id = uuid7(), uuid7()
        inside = 0
        peak = 0

        async def critical_section() -> None:
            nonlocal inside, peak
            async with manager.acquire(seat_id=seat_id, showtime_id=showtime_id):
                inside += 1
                peak = max(peak, inside)
                await anyio.sleep(0.01)
                inside -= 1

        async with anyio.create_task_group() as tg:
            for _ in range(5):
                tg.start_soon(critical_section)

        assert peak == 1

    async def test_times_out_while_seat_is_busy(self):
        manager = SeatLockManager(shards=1, timeout_seconds=0.05)
        seat_id, showtime_id = uuid7(), uuid7()
        held = anyio.Event()
        done = anyio.Event()

        async def holder() -> None:
            async with manager.acquire(seat_id=seat_id, showtime_id=showtime_id):
                held.set()
                await done.wait()

        async with anyio.create_task_group() as tg:
            tg.start_soon(holder)
            await held.wait()

            with pytest.raises(SeatLockTimeoutError):
                async with manager.acquire(seat_id=seat_id, showtime_id=showtime_id):
                    pass

            done.set()

        # The holder has let go; a later caller gets the lock
        with anyio.fail_after(1):
            async with manager.acquire(seat_id=seat_id, showtime_id=showtime_id):
                pass

    async def test_booking_locks_are_independent_of_seat_locks(self):
        manager = SeatLockManager(shards=1, timeout_seconds=0.05)

        async with manager.acquire(seat_id=uuid7(), showtime_id=uuid7()):
            async with manager.acquire_booking(booking_id=uuid7()):
                pass
