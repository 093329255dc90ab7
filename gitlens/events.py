"""Disposable handles and a minimal synchronous event emitter.

Listeners run on the thread that calls :meth:`Emitter.fire`, one after the
other in subscription order. Errors raised by a listener propagate to the
caller of ``fire``.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional

Listener = Callable[..., Any]


class Disposable:
    """Runs a cleanup callback exactly once."""

    def __init__(self, callback: Optional[Callable[[], Any]] = None) -> None:
        self._callback = callback
        self._disposed = False

    @classmethod
    def from_(cls, *disposables: "Disposable") -> "Disposable":
        """Combine several handles into one that disposes them in order."""
        items = list(disposables)

        def _dispose_all() -> None:
            for item in items:
                item.dispose()

        return cls(_dispose_all)

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        callback, self._callback = self._callback, None
        if callback is not None:
            callback()


class Emitter:
    """Notifies subscribed listeners when :meth:`fire` is called."""

    def __init__(self) -> None:
        self._listeners: List[Listener] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Listener) -> Disposable:
        """Register ``listener`` and return the handle that unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return Disposable(_unsubscribe)

    def fire(self, *args: Any) -> None:
        # Snapshot so listeners may unsubscribe while being notified.
        for listener in list(self._listeners):
            listener(*args)

    def dispose(self) -> None:
        self._listeners.clear()


__all__ = ["Disposable", "Emitter", "Listener"]
