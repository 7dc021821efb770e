"""A thread-safe, single-assignment result holder with callbacks."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

ResultCallback = Callable[[Any, "BaseException | None"], None]


class Future:
    """Holds a value or an error once it is set; later settings are ignored."""

    def __init__(self) -> None:
        self._done = threading.Event()
        self._lock = threading.Lock()
        self._value: Any = None
        self._error: BaseException | None = None
        self._callbacks: list[ResultCallback] = []

    def get(self, timeout: float | None = None) -> Any:
        """Wait for the result and return it, raising the stored error if any.

        Raises :class:`TimeoutError` if the result is not ready in ``timeout`` seconds.
        """
        if not self._done.wait(timeout):
            raise TimeoutError("result not ready")
        if self._error is not None:
            raise self._error
        return self._value

    def ready(self) -> bool:
        """Return whether a result has been set."""
        return self._done.is_set()

    def set_result(self, value: Any = None, error: BaseException | None = None) -> bool:
        """Store the result and notify listeners; return False if one was already set."""
        with self._lock:
            if self._done.is_set():
                return False
            self._value, self._error = value, error
            self._done.set()
            callbacks = list(self._callbacks)
        for callback in callbacks:
            callback(value, error)
        return True

    def listen(self, callback: ResultCallback) -> None:
        """Call ``callback(value, error)`` now if ready, otherwise when the result is set."""
        with self._lock:
            if not self._done.is_set():
                self._callbacks.append(callback)
                return
        callback(self._value, self._error)

    def join(self, timeout: float | None = None) -> None:
        """Wait for the result, then call every registered listener with it again."""
        self._done.wait(timeout)
        with self._lock:
            callbacks = list(self._callbacks)
            value, error = self._value, self._error
        for callback in callbacks:
            callback(value, error)


def call(fn: Callable[[], Any]) -> Future:
    """Run ``fn`` on a background thread and return a future of its outcome."""
    future = Future()

    def run() -> None:
        try:
            value = fn()
        except Exception as exc:  # noqa: BLE001 - the error travels in the future
            future.set_result(None, exc)
        else:
            future.set_result(value, None)

    threading.Thread(target=run, daemon=True).start()
    return future