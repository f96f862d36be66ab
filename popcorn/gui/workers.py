from __future__ import annotations
from typing import Any, Callable, Set, Tuple

from PySide6.QtCore import QObject, QThread, Signal, Slot

from popcorn.utils import log_debug


# ───────────────────────── Worker skeletons ───────────────────────────────
class _FetchWorker(QObject):
    """Runs one job on its own QThread and reports the result."""
    finished = Signal(object)

    def __init__(self, job: Callable[[], Any]):
        super().__init__()
        self._job = job

    @Slot()
    def run(self):
        try:
            result = self._job()
        except Exception as e:
            log_debug(f"fetch-worker error: {e!r}")
            result = e
        self.finished.emit(result)


class _Relay(QObject):
    """Lives on the GUI thread so queued signals land there."""
    released = Signal(object)

    def __init__(self, done: Callable[[Any], None]):
        super().__init__()
        self._done = done

    @Slot(object)
    def deliver(self, result: Any) -> None:
        self._done(result)

    @Slot()
    def thread_done(self) -> None:
        self.released.emit(self)


# ───────────────────────── Runner used by the sessions ────────────────────
class QtRunner(QObject):
    """
    ``submit(job, done)``: *job* runs on a fresh QThread, *done* runs on the
    thread that owns this runner (the GUI thread) once the job returns.
    """

    def __init__(self, parent: QObject | None = None):
        super().__init__(parent)
        self._active: Set[Tuple[QThread, _FetchWorker, _Relay]] = set()

    def submit(self, job: Callable[[], Any], done: Callable[[Any], None]) -> None:
        thr    = QThread(self)
        worker = _FetchWorker(job)
        relay  = _Relay(done)
        worker.moveToThread(thr)

        entry = (thr, worker, relay)
        self._active.add(entry)

        worker.finished.connect(relay.deliver)
        worker.finished.connect(thr.quit)
        thr.finished.connect(relay.thread_done)
        relay.released.connect(lambda _r, e=entry: self._release(e))

        thr.started.connect(worker.run)
        thr.start()

    def _release(self, entry: Tuple[QThread, _FetchWorker, _Relay]) -> None:
        if entry in self._active:
            self._active.discard(entry)
            entry[0].deleteLater()

    @property
    def pending(self) -> int:
        return len(self._active)

    def shutdown(self, wait_ms: int = 2000) -> None:
        """
        Wait for running jobs; called after the sessions cancelled them.

        A request stuck before its first byte ignores the cancel until the
        HTTP timeout, so after *wait_ms* we keep waiting. The runner owns the
        threads and must not be destroyed while one is still running.
        """
        for thr, _worker, _relay in list(self._active):
            thr.quit()
            if not thr.wait(wait_ms):
                log_debug("runner: worker thread still busy at shutdown, waiting")
                thr.wait()
        self._active.clear()
