from __future__ import annotations

from typing import Any, Callable, Dict, List

Handler = Callable[[Any], Any]


class EventBus:
    """
    Minimal synchronous pub/sub channel owned by a single publisher.

    Handlers registered under a label are called in registration order.
    """

    def __init__(self) -> None:
        self._subs: Dict[str, List[Handler]] = {}

    def register(self, label: str, handler: Handler) -> None:
        self._subs.setdefault(label, []).append(handler)

    def deregister(self, label: str, handler: Handler) -> None:
        handlers = self._subs.get(label)
        if not handlers:
            return
        for i, h in enumerate(handlers):
            if h is handler:
                del handlers[i]
                break
        if not handlers:
            del self._subs[label]

    def emit(self, label: str, payload: Any) -> int:
        # Snapshot: handlers added or removed while fanning out don't change this emission.
        handlers = list(self._subs.get(label, []))
        for h in handlers:
            h(payload)
        return len(handlers)

    def handler_count(self, label: str) -> int:
        return len(self._subs.get(label, []))
