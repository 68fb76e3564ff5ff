"""
Background execution of PDF operations.

Only one operation may run at a time. The GUI uses this to stay responsive;
the command line runs operations directly on the main thread.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from pdfutils.errors import OperationCancelled

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_operation_ongoing = False


def is_operation_ongoing() -> bool:
    """Checked before exiting the application."""
    with _lock:
        return _operation_ongoing


def _try_acquire() -> bool:
    global _operation_ongoing
    with _lock:
        if _operation_ongoing:
            return False
        _operation_ongoing = True
        return True


def _release() -> None:
    global _operation_ongoing
    with _lock:
        _operation_ongoing = False


def _call_now(func: Callable, *args) -> None:
    func(*args)


class OperationRunner:
    """
    Runs target(progress_callback, cancel_callback) on a daemon thread.

    scheduler(func, *args) delivers callbacks to the GUI thread; with tkinter
    that is lambda f, *a: root.after(0, f, *a). Once the window is destroyed
    the scheduler raises one of scheduler_errors and the callback is dropped.
    """

    def __init__(self, scheduler: Optional[Callable] = None, scheduler_errors: tuple = (RuntimeError,)):
        self.scheduler = scheduler or _call_now
        self.scheduler_errors = scheduler_errors
        self.thread: Optional[threading.Thread] = None
        self._cancel_event = threading.Event()

    def _deliver(self, func: Callable, *args) -> None:
        try:
            self.scheduler(func, *args)
        except self.scheduler_errors as e:
            logger.debug("Dropped %s, the GUI is gone: %s", getattr(func, "__name__", func), e)

    def start(
        self,
        name: str,
        target: Callable,
        on_progress: Optional[Callable[[int, int, str], None]] = None,
        on_done: Optional[Callable[[object], None]] = None,
        on_error: Optional[Callable[[BaseException], None]] = None,
        on_cancelled: Optional[Callable[[], None]] = None,
    ) -> bool:
        """Return False without starting anything if an operation is already running."""
        if not _try_acquire():
            logger.info("Rejected '%s': another operation is in progress", name)
            return False

        self._cancel_event.clear()

        def progress(done, total, message=""):
            if on_progress:
                self._deliver(on_progress, done, total, message)

        def run():
            try:
                logger.info("Operation '%s' started", name)
                result = target(progress, self._cancel_event.is_set)
            except OperationCancelled:
                logger.info("Operation '%s' cancelled", name)
                _release()
                if on_cancelled:
                    self._deliver(on_cancelled)
            except Exception as e:
                logger.exception("Operation '%s' failed", name)
                _release()
                if on_error:
                    self._deliver(on_error, e)
            else:
                logger.info("Operation '%s' finished", name)
                _release()
                if on_done:
                    self._deliver(on_done, result)

        self.thread = threading.Thread(target=run, name=f"operation-{name}", daemon=True)
        try:
            self.thread.start()
        except RuntimeError:
            _release()
            raise
        return True

    def cancel(self) -> None:
        """Best effort, operations check the flag between pages."""
        self._cancel_event.set()

    def join(self, timeout: Optional[float] = None) -> None:
        if self.thread is not None:
            self.thread.join(timeout)
