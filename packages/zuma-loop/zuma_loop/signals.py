"""In-memory pub/sub signal bus with per-tick flush semantics."""
from __future__ import annotations

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

Handler = Callable[[str, dict[str, Any]], None]


class SignalBus:
    """Queues published signals and delivers them when flushed.

    Handlers run in subscription order. Signals published from inside a
    handler are queued for the next flush, never delivered re-entrantly.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[Handler]] = {}
        self._queue: list[tuple[str, dict[str, Any]]] = []

    def subscribe(self, signal_name: str, handler: Handler) -> None:
        self._subscribers.setdefault(signal_name, []).append(handler)

    def unsubscribe(self, signal_name: str, handler: Handler) -> None:
        handlers = self._subscribers.get(signal_name)
        if handlers is None:
            return
        try:
            handlers.remove(handler)
        except ValueError:
            pass

    def publish(self, signal_name: str, **data: Any) -> None:
        self._queue.append((signal_name, data))

    @property
    def pending(self) -> int:
        return len(self._queue)

    def flush(self) -> int:
        """Deliver queued signals. Returns how many were delivered."""
        snapshot = self._queue
        self._queue = []
        for signal_name, data in snapshot:
            handlers = self._subscribers.get(signal_name, [])
            if not handlers:
                logger.debug("signal %s dropped: no subscribers", signal_name)
            for handler in list(handlers):
                handler(signal_name, data)
        return len(snapshot)

    def clear(self) -> None:
        self._queue.clear()


def make_signal_system(bus: SignalBus) -> Callable[[Any, Any], None]:
    def signal_system(state: Any, ctx: Any) -> None:
        bus.flush()

    return signal_system
