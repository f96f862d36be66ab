from __future__ import annotations
import threading
from typing import Callable, List

from popcorn.metadata.api_clients.errors import RequestCancelled


class CancelToken:
    """
    Cooperative abort signal shared between the GUI thread (which cancels)
    and one worker thread (which checks).

    Callbacks registered with ``on_cancel`` run once, on the cancelling
    thread; a callback registered after cancellation runs immediately.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: List[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            callbacks, self._callbacks = self._callbacks, []
        for cb in callbacks:
            cb()

    def on_cancel(self, cb: Callable[[], None]) -> None:
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(cb)
                return
        cb()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise RequestCancelled("request cancelled")
