from __future__ import annotations

import threading
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class Lazy(Generic[T]):
    """A value computed on first access and shared for the process lifetime.

    The first caller runs the initializer under a lock; later callers read the
    stored value without taking it. A failing initializer leaves the cell
    empty so the next access retries.
    """

    __slots__ = ("_init", "_lock", "_ready", "_value")

    def __init__(self, init: Callable[[], T]) -> None:
        self._init = init
        self._lock = threading.Lock()
        self._ready = False
        self._value: T | None = None

    def force(self) -> T:
        if self._ready:
            return self._value  # type: ignore[return-value]
        with self._lock:
            if not self._ready:
                self._value = self._init()
                self._ready = True
        return self._value  # type: ignore[return-value]

    @property
    def initialized(self) -> bool:
        return self._ready
