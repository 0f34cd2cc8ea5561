from __future__ import annotations

import asyncio
from collections import deque
from typing import Callable, Deque, Optional

Task = Callable[[], object]


class Scheduler:
    """
    Cooperative next-turn task queue.

    Deferred tasks never run inside the call that deferred them. When an asyncio
    loop is running, the queue drains on the loop's next iteration; otherwise it
    waits for an explicit `run_pending()`.
    """

    def __init__(self) -> None:
        self._queue: Deque[Task] = deque()
        self._wakeup: Optional[asyncio.Handle] = None
        self._wakeup_loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def pending(self) -> int:
        return len(self._queue)

    def defer_to_next_turn(self, task: Task) -> None:
        self._queue.append(task)
        self._schedule_wakeup()

    def run_pending(self) -> int:
        """
        Drain the queue, including tasks deferred while draining.
        A failing task propagates; whatever is still queued stays queued.
        """
        ran = 0
        while self._queue:
            task = self._queue.popleft()
            ran += 1
            task()
        return ran

    async def idle(self) -> None:
        """Wait until every deferred task has run."""
        while self._queue:
            self._schedule_wakeup()
            await asyncio.sleep(0)

    def _schedule_wakeup(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        # A wakeup left on another (possibly closed) loop never fires here.
        if self._wakeup is not None and self._wakeup_loop is loop:
            return
        self._wakeup_loop = loop
        self._wakeup = loop.call_soon(self._on_turn)

    def _on_turn(self) -> None:
        self._wakeup = None
        self._wakeup_loop = None
        try:
            self.run_pending()
        finally:
            # A task raised; leftovers get their own turn.
            if self._queue:
                self._schedule_wakeup()


_default: Optional[Scheduler] = None


def get_scheduler() -> Scheduler:
    global _default
    if _default is None:
        _default = Scheduler()
    return _default
