"""Observer notifications with pluggable delivery."""

from __future__ import annotations

import queue
import threading
from collections.abc import Callable
from functools import partial
from typing import Any

Dispatcher = Callable[[Callable[[], None]], None]


def direct_dispatch(call: Callable[[], None]) -> None:
    """Deliver a notification in the emitting thread."""
    call()


class QueueDispatcher:
    """
    Hands notifications to the thread that owns the observers.

    Background tasks only enqueue; the owning thread calls ``drain`` (for
    instance from its event loop) to deliver them in emission order.
    """

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[Callable[[], None]] = queue.SimpleQueue()

    def __call__(self, call: Callable[[], None]) -> None:
        self._queue.put(call)

    def pending(self) -> bool:
        return not self._queue.empty()

    def drain(self) -> int:
        """Deliver every queued notification; returns how many ran."""
        count = 0
        while True:
            try:
                call = self._queue.get_nowait()
            except queue.Empty:
                return count
            call()
            count += 1


class Signal:
    """A named notification that observers can connect to."""

    def __init__(self, name: str, dispatch: Dispatcher = direct_dispatch):
        self.name = name
        self.dispatch = dispatch
        self._slots: list[Callable[..., Any]] = []
        self._lock = threading.Lock()

    def connect(self, slot: Callable[..., Any]) -> None:
        with self._lock:
            self._slots.append(slot)

    def disconnect(self, slot: Callable[..., Any]) -> None:
        with self._lock:
            self._slots.remove(slot)

    def emit(self, *args: Any) -> None:
        with self._lock:
            slots = list(self._slots)
        for slot in slots:
            self.dispatch(partial(slot, *args))

    def __repr__(self) -> str:
        return f"Signal({self.name!r}, slots={len(self._slots)})"
