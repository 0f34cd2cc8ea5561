from __future__ import annotations

from typing import Any, Callable, Optional, Tuple

from flux_actions.core.events import EventBus
from flux_actions.core.logging import get_logger
from flux_actions.core.payload import normalize_replacement
from flux_actions.core.scheduler import Scheduler, get_scheduler
from flux_actions.errors import InvalidArgument
from flux_actions.hooks import Hooks

Callback = Callable[..., Any]


class Subscription:
    """
    Handle returned by `listen` / `listen_once`. Calling it unsubscribes; extra calls are no-ops.
    """

    __slots__ = ("_bus", "_label", "_handler", "_log", "aborted")

    def __init__(self, bus: EventBus, label: str, log: Any = None) -> None:
        self._bus = bus
        self._label = label
        self._log = log
        self._handler: Optional[Callable[[Tuple[Any, ...]], None]] = None
        self.aborted = False

    def __call__(self) -> None:
        if self.aborted:
            return
        self.aborted = True
        if self._handler is not None:
            self._bus.deregister(self._label, self._handler)
            self._handler = None
        if self._log is not None:
            self._log.debug("unsubscribed", handlers=self._bus.handler_count(self._label))

    unsubscribe = __call__

    def __repr__(self) -> str:
        return "Subscription(label=%r, aborted=%r)" % (self._label, self.aborted)


class Publisher:
    """
    Base of every broadcastable object: owns an event bus and the emission hooks.

    `trigger_sync` emits right away; `trigger` defers the emission to the next
    scheduler turn. Subscribers receive the emitted values as positional arguments.
    """

    event_label: str = "event"

    def __init__(
        self,
        hooks: Optional[Hooks] = None,
        *,
        bus: Optional[EventBus] = None,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        self.hooks = hooks if hooks is not None else Hooks()
        self.bus = bus if bus is not None else EventBus()
        self._scheduler = scheduler
        self._log = get_logger(publisher=type(self).__name__, label=self.event_label)

    @property
    def is_publisher(self) -> bool:
        return True

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler if self._scheduler is not None else get_scheduler()

    # Hooks. Override here or pass a `Hooks` instance.

    def pre_emit(self, *args: Any) -> Any:
        return self.hooks.run_pre_emit(*args)

    def should_emit(self, *args: Any) -> bool:
        return self.hooks.run_should_emit(*args)

    def process_result(self, result: Any) -> None:
        self.hooks.run_process_result(result)

    # Subscriptions

    def listen(self, callback: Callback) -> Subscription:
        if not callable(callback):
            raise InvalidArgument("listen has to be given a valid callback function")
        return self._subscribe(callback)

    def listen_once(self, callback: Callback) -> Subscription:
        if not callable(callback):
            raise InvalidArgument("listen_once has to be given a valid callback function")

        sub: Optional[Subscription] = None

        def once(*args: Any) -> Any:
            # Unsubscribe first so a re-entrant trigger can't call back a second time.
            if sub is not None:
                sub()
            return callback(*args)

        sub = self._subscribe(once)
        return sub

    def _subscribe(self, callback: Callback) -> Subscription:
        sub = Subscription(self.bus, self.event_label, self._log)

        def handler(args: Tuple[Any, ...]) -> None:
            # Checked at call time: covers emissions already queued before unsubscribing.
            if sub.aborted:
                return
            self.process_result(callback(*args))

        sub._handler = handler
        self.bus.register(self.event_label, handler)
        self._log.debug("subscribed", handlers=self.bus.handler_count(self.event_label))
        return sub

    # Triggering

    def trigger_sync(self, *args: Any) -> None:
        replacement = normalize_replacement(self.pre_emit(*args))
        if replacement is not None:
            args = replacement

        if not self.should_emit(*args):
            self._log.debug("emission_suppressed", args=args)
            return

        n = self.bus.emit(self.event_label, args)
        self._log.debug("emitted", args=args, handlers=n)

    def trigger(self, *args: Any) -> None:
        self.scheduler.defer_to_next_turn(lambda: self.trigger_sync(*args))
