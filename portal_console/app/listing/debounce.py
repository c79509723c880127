from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

Sleeper = Callable[[float], Awaitable[Any]]


class Debouncer:
    """Coalesces bursts of calls; only the last one scheduled within ``wait_ms`` runs."""

    def __init__(self, wait_ms: int = 600, sleeper: Sleeper | None = None) -> None:
        self.wait_ms = max(0, wait_ms)
        self._sleeper = sleeper or asyncio.sleep
        self._pending: asyncio.Task | None = None

    @property
    def pending(self) -> asyncio.Task | None:
        if self._pending is not None and self._pending.done():
            return None
        return self._pending

    def schedule(self, action: Callable[[], Awaitable[Any]]) -> asyncio.Task:
        self.cancel()
        self._pending = asyncio.get_running_loop().create_task(self._run(action))
        return self._pending

    def cancel(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    async def flush(self) -> None:
        task = self.pending
        if task is not None:
            await task

    async def _run(self, action: Callable[[], Awaitable[Any]]) -> None:
        if self.wait_ms:
            await self._sleeper(self.wait_ms / 1000)
        # past the wait the action can no longer be superseded
        if self._pending is asyncio.current_task():
            self._pending = None
        await action()
