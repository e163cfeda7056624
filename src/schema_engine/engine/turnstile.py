"""FIFO admission of processing cycles, with cancellation tokens."""

import threading
from collections import deque
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from ..core.errors import BusyError, SubmissionCancelled
from ..core.id import new_token_id


class CancellationToken:
    """
    Lets a caller withdraw a submission that is still waiting for its turn.

    Cancelling after the submission has started has no effect on it.
    """

    def __init__(self) -> None:
        self.id = new_token_id()
        self._cancelled = False
        self._callbacks: list[Callable[[], None]] = []
        self._lock = threading.Lock()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            callbacks = list(self._callbacks)
            self._callbacks.clear()

        for callback in callbacks:
            callback()

    def on_cancel(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register a callback; returns a function that unregisters it."""
        with self._lock:
            if not self._cancelled:
                self._callbacks.append(callback)
                return lambda: self._discard(callback)
        callback()
        return lambda: None

    def _discard(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def __repr__(self) -> str:
        return f"CancellationToken(id={self.id!r}, cancelled={self._cancelled})"


class Turnstile:
    """
    Admits one cycle at a time, in arrival order.

    At most ``max_waiting`` callers may wait behind the active cycle; the
    next one fails fast with ``BusyError``.
    """

    def __init__(self, max_waiting: int = 16) -> None:
        if max_waiting < 0:
            raise ValueError("max_waiting must not be negative")

        self.max_waiting = max_waiting
        self._cond = threading.Condition()
        self._waiting: deque[object] = deque()
        self._owner: int | None = None

    @property
    def busy(self) -> bool:
        return self._owner is not None

    @property
    def waiting(self) -> int:
        return len(self._waiting)

    @contextmanager
    def turn(self, token: CancellationToken | None = None) -> Iterator[None]:
        """
        Wait for this caller's turn and hold it for the ``with`` body.

        Raises:
            BusyError: Too many callers are already waiting
            SubmissionCancelled: The token was cancelled before the turn began
        """
        self._enter(token)
        try:
            yield
        finally:
            self._leave()

    def _enter(self, token: CancellationToken | None) -> None:
        me = threading.get_ident()

        with self._cond:
            if token is not None and token.cancelled:
                raise SubmissionCancelled("submission cancelled before it was queued")

            if self._owner == me:
                # Waiting here would wait on ourselves
                raise BusyError("submission from inside an active cycle")

            if self._owner is None and not self._waiting:
                self._owner = me
                return

            if len(self._waiting) >= self.max_waiting:
                raise BusyError(f"{len(self._waiting)} submissions already waiting")

            ticket = object()
            self._waiting.append(ticket)

        release = token.on_cancel(self._wake) if token is not None else None
        try:
            with self._cond:
                while True:
                    if token is not None and token.cancelled:
                        self._waiting.remove(ticket)
                        self._cond.notify_all()
                        raise SubmissionCancelled("submission cancelled while queued")
                    if self._owner is None and self._waiting[0] is ticket:
                        break
                    self._cond.wait()

                self._waiting.popleft()
                self._owner = me
        finally:
            if release is not None:
                release()

    def _leave(self) -> None:
        with self._cond:
            self._owner = None
            self._cond.notify_all()

    def _wake(self) -> None:
        with self._cond:
            self._cond.notify_all()


__all__ = ["CancellationToken", "Turnstile"]
