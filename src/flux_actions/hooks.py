from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Set

from flux_actions.core.logging import get_logger

PreEmit = Callable[..., Any]
ShouldEmit = Callable[..., bool]
ProcessResult = Callable[[Any], None]


def _no_replacement(*args: Any) -> None:
    return None


def _always(*args: Any) -> bool:
    return True


def _discard(result: Any) -> None:
    return None


@dataclass
class Hooks:
    """
    Emission hooks for a publisher.

    pre_emit:        runs first with the trigger arguments; returning anything but
                     None replaces them (see `core.payload.normalize_replacement`).
    should_emit:     runs with the (possibly replaced) arguments; False suppresses
                     the emission.
    process_result:  receives each subscriber's return value.
    """

    pre_emit: PreEmit = _no_replacement
    should_emit: ShouldEmit = _always
    process_result: ProcessResult = _discard

    def run_pre_emit(self, *args: Any) -> Any:
        return self.pre_emit(*args)

    def run_should_emit(self, *args: Any) -> bool:
        return bool(self.should_emit(*args))

    def run_process_result(self, result: Any) -> None:
        self.process_result(result)


@dataclass
class AwaitResults(Hooks):
    """
    Hooks that keep track of awaitable subscriber results (e.g. from `async def`
    subscribers) so the caller can wait for them.
    """

    _in_flight: Set["asyncio.Future[Any]"] = field(default_factory=set, init=False, repr=False)
    _order: List["asyncio.Future[Any]"] = field(default_factory=list, init=False, repr=False)

    def run_process_result(self, result: Any) -> None:
        if not inspect.isawaitable(result):
            super().run_process_result(result)
            return
        fut = asyncio.ensure_future(result)
        self._in_flight.add(fut)
        self._order.append(fut)
        fut.add_done_callback(self._on_done)
        self.process_result(fut)

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    async def wait(self) -> List[Any]:
        """
        Wait for every tracked result; returns them in the order subscribers produced them.
        The first failure is re-raised once all have settled.
        """
        if not self._order:
            return []
        futs, self._order = self._order, []
        results = await asyncio.gather(*futs, return_exceptions=True)
        for r in results:
            if isinstance(r, BaseException):
                raise r
        return list(results)

    def _on_done(self, fut: "asyncio.Future[Any]") -> None:
        self._in_flight.discard(fut)
        if fut.cancelled():
            return
        exc: Optional[BaseException] = fut.exception()
        if exc is not None:
            get_logger(component="hooks").warning("subscriber_failed", error=repr(exc))
