"""Polling watcher for contract events.

One ``EventWatcher`` follows one (contract, event) pair. Each tick reads the
chain head, fetches logs for every block since the cursor, enriches them with
block timestamps (and whatever ``enrich`` adds), and hands the batch to
``on_batch`` newest-first. The next tick is only scheduled once the current one
has finished, and ticks of the same watcher never overlap.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any

from loguru import logger

from flaunch_sdk.core.config import get_max_block_range, get_poll_interval_ms
from flaunch_sdk.core.events.types import (
    EventBatch,
    EventLog,
    WatcherCursor,
    event_log_fields,
)

RawLog = Mapping[str, Any]
FetchLogs = Callable[[int, int], Awaitable[Sequence[RawLog]]]
GetBlockNumber = Callable[[], Awaitable[int]]
GetBlock = Callable[[int], Awaitable[Mapping[str, Any]]]
Enrich = Callable[[RawLog, int], Any]
OnBatch = Callable[[EventBatch], Any]
OnError = Callable[[Exception], Any]

# Concurrent get_block calls per tick when timestamping a range.
BLOCK_FETCH_CONCURRENCY = 8


def default_enrich(raw_log: RawLog, timestamp_ms: int) -> EventLog:
    return EventLog(**event_log_fields(raw_log, timestamp_ms))


async def block_timestamp_ms(get_block: GetBlock, block_number: int) -> int:
    block = await get_block(block_number)
    return int(block["timestamp"]) * 1_000


async def _maybe_await(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


class WatchHandle:
    """Caller-facing controls for a running watch."""

    def __init__(self, watcher: EventWatcher):
        self._watcher = watcher

    @property
    def cursor(self) -> WatcherCursor:
        return self._watcher.cursor

    async def poll_now(self) -> None:
        await self._watcher.poll_now()

    def cancel(self) -> None:
        self._watcher.cancel()

    # Same as cancel().
    cleanup = cancel

    async def aclose(self) -> None:
        await self._watcher.aclose()


class EventWatcher:
    def __init__(
        self,
        *,
        name: str,
        fetch_logs: FetchLogs,
        get_block_number: GetBlockNumber,
        get_block: GetBlock,
        on_batch: OnBatch,
        enrich: Enrich | None = None,
        start_block: int | None = None,
        poll_interval_ms: int | None = None,
        max_block_range: int | None = None,
        on_error: OnError | None = None,
    ) -> None:
        if poll_interval_ms is None:
            poll_interval_ms = get_poll_interval_ms()
        if poll_interval_ms <= 0:
            raise ValueError("poll_interval_ms must be > 0")
        if max_block_range is None:
            max_block_range = get_max_block_range()
        if max_block_range is not None and max_block_range <= 0:
            raise ValueError("max_block_range must be > 0")
        if start_block is not None and start_block < 0:
            raise ValueError("start_block must be >= 0")

        self.name = name
        self._fetch_logs = fetch_logs
        self._get_block_number = get_block_number
        self._get_block = get_block
        self._on_batch = on_batch
        self._enrich = enrich or default_enrich
        self._on_error = on_error
        self.start_block = start_block
        self.poll_interval_s = poll_interval_ms / 1_000
        self.max_block_range = max_block_range

        self.cursor: WatcherCursor | None = None
        self._lock = asyncio.Lock()
        self._stopped = asyncio.Event()
        self._task: asyncio.Task | None = None
        self.logger = logger.bind(watcher=name)

    @property
    def is_active(self) -> bool:
        return self.cursor is not None and self.cursor.is_active

    async def start(self) -> WatchHandle:
        if self.cursor is not None:
            raise RuntimeError(f"Watcher {self.name} was already started")
        if self._stopped.is_set():
            raise RuntimeError(f"Watcher {self.name} was cancelled before it started")

        if self.start_block is not None:
            await _maybe_await(
                self._on_batch(EventBatch(logs=[], is_fetching_from_start=True))
            )
            last_block = self.start_block - 1
        else:
            last_block = int(await self._get_block_number())

        self.cursor = WatcherCursor(last_observed_block=last_block)
        self._task = asyncio.create_task(self._run(), name=f"watch:{self.name}")
        self.logger.debug(
            f"Watching {self.name} from block {last_block + 1} every {self.poll_interval_s}s"
        )
        return WatchHandle(self)

    async def _run(self) -> None:
        while self.is_active:
            try:
                await asyncio.wait_for(
                    self._stopped.wait(), timeout=self.poll_interval_s
                )
            except TimeoutError:
                pass
            if not self.is_active:
                break
            await self.poll_now()

    async def poll_now(self) -> None:
        if not self.is_active:
            return
        async with self._lock:
            # Cancelled while waiting for the previous tick.
            if self.is_active:
                await self._tick()

    async def _tick(self) -> None:
        cursor = self.cursor
        try:
            head = int(await self._get_block_number())
            if head <= cursor.last_observed_block:
                return

            raw_logs = await self._fetch_range(cursor.last_observed_block + 1, head)
            logs = await self._enrich_all(list(reversed(raw_logs)))

            await _maybe_await(
                self._on_batch(EventBatch(logs=logs, is_fetching_from_start=False))
            )
            cursor.last_observed_block = head
        except Exception as exc:  # noqa: BLE001
            await self._report(exc)

    async def _fetch_range(self, from_block: int, to_block: int) -> list[RawLog]:
        if self.max_block_range is None:
            return list(await self._fetch_logs(from_block, to_block))

        logs: list[RawLog] = []
        start = from_block
        while start <= to_block:
            end = min(start + self.max_block_range - 1, to_block)
            logs.extend(await self._fetch_logs(start, end))
            start = end + 1
        return logs

    async def _enrich_all(self, raw_logs: list[RawLog]) -> list[Any]:
        block_numbers = sorted({int(log["blockNumber"]) for log in raw_logs})
        sem = asyncio.Semaphore(BLOCK_FETCH_CONCURRENCY)

        async def timestamp(block_number: int) -> int:
            async with sem:
                return await block_timestamp_ms(self._get_block, block_number)

        timestamps = await asyncio.gather(*(timestamp(n) for n in block_numbers))
        by_block = dict(zip(block_numbers, timestamps, strict=True))
        return [
            self._enrich(log, by_block[int(log["blockNumber"])]) for log in raw_logs
        ]

    async def _report(self, exc: Exception) -> None:
        self.logger.error(f"Error polling {self.name} events: {exc}")
        if self._on_error is None:
            return
        try:
            await _maybe_await(self._on_error(exc))
        except Exception as hook_exc:  # noqa: BLE001
            self.logger.error(f"on_error hook for {self.name} failed: {hook_exc}")

    def cancel(self) -> None:
        if self.cursor is not None:
            self.cursor.is_active = False
        self._stopped.set()

    async def aclose(self) -> None:
        """Cancel and wait for the polling task (and any in-flight tick) to finish."""
        self.cancel()
        if self._task is not None:
            await asyncio.gather(self._task, return_exceptions=True)
            self._task = None


async def start_watch(**kwargs: Any) -> WatchHandle:
    return await EventWatcher(**kwargs).start()
