"""
Per-seat and per-booking mutual exclusion

In-process sharded mutexes. Seat locks are keyed by (seat_id, showtime_id), booking
locks by booking_id; each family has its own fixed set of anyio.Lock shards, the
shard picked by hashing the key, so two callers on the same key always meet on the
same lock while unrelated keys rarely contend.

Locks are taken before the unit of work opens and released after it commits or rolls
back. Lock order is always seat before booking, and booking-only callers never take
a seat lock:

    async with seat_lock_manager.acquire(seat_id=seat_id, showtime_id=showtime_id):
        async with seat_lock_manager.acquire_booking(booking_id=booking_id):
            async with uow_factory() as uow:
                ...
                await uow.commit()
"""

from contextlib import asynccontextmanager
import time
from typing import AsyncIterator, Hashable, Optional
from uuid import UUID

import anyio

from src.platform.exception.exceptions import ServiceUnavailableError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics


class SeatLockTimeoutError(ServiceUnavailableError):
    def __init__(self, message: str = 'Seat is busy, please retry') -> None:
        super().__init__(message)


class _ShardedLock:
    def __init__(self, *, shards: int) -> None:
        self.shards = shards
        # Created lazily so each lock binds to the running event loop
        self._locks: list[Optional[anyio.Lock]] = [None] * shards

    def index(self, key: Hashable) -> int:
        return hash(key) % self.shards

    def lock_for(self, key: Hashable) -> anyio.Lock:
        index = self.index(key)
        lock = self._locks[index]
        if lock is None:
            lock = anyio.Lock()
            self._locks[index] = lock
        return lock


class SeatLockManager:
    def __init__(self, *, shards: int = 256, timeout_seconds: float = 5.0) -> None:
        if shards < 1:
            raise ValueError('shards must be >= 1')
        self.timeout_seconds = timeout_seconds
        self._seat_locks = _ShardedLock(shards=shards)
        self._booking_locks = _ShardedLock(shards=shards)

    def shard_index(self, *, seat_id: UUID, showtime_id: UUID) -> int:
        return self._seat_locks.index((seat_id, showtime_id))

    @asynccontextmanager
    async def _hold(self, lock: anyio.Lock, *, description: str) -> AsyncIterator[None]:
        started = time.perf_counter()
        try:
            with anyio.fail_after(self.timeout_seconds):
                await lock.acquire()
        except TimeoutError:
            metrics.record_seat_lock_wait(result='timeout', duration=time.perf_counter() - started)
            Logger.base.warning(
                f'⏳ [SEAT_LOCK] Timed out after {self.timeout_seconds}s on {description}'
            )
            raise SeatLockTimeoutError()

        metrics.record_seat_lock_wait(result='acquired', duration=time.perf_counter() - started)
        try:
            yield
        finally:
            lock.release()

    @asynccontextmanager
    async def acquire(self, *, seat_id: UUID, showtime_id: UUID) -> AsyncIterator[None]:
        lock = self._seat_locks.lock_for((seat_id, showtime_id))
        async with self._hold(lock, description=f'seat={seat_id} showtime={showtime_id}'):
            yield

    @asynccontextmanager
    async def acquire_booking(self, *, booking_id: UUID) -> AsyncIterator[None]:
        lock = self._booking_locks.lock_for(booking_id)
        async with self._hold(lock, description=f'booking={booking_id}'):
            yield
