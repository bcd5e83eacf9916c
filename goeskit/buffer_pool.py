"""Bounded pool of reusable buffers passed between a producer and a consumer."""

from __future__ import annotations

import threading
from collections import deque
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class PoolClosedError(RuntimeError):
    """The write side of a closed pool was used."""


class BufferPool(Generic[T]):
    """Recycles at most ``capacity`` items created by ``factory``.

    The writer takes an item with pop_for_write, fills it and hands it over
    with push_write. The reader takes it with pop_for_read and gives it back
    with push_read. After close the reader drains what is left, then gets None.
    """

    def __init__(self, capacity: int, factory: Callable[[], T] = list) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._factory = factory
        self._elements = 0
        self._closed = False
        self._cond = threading.Condition()
        self._write: deque[T] = deque()
        self._read: deque[T] = deque()

    def size(self) -> int:
        """Number of items created so far."""
        with self._cond:
            return self._elements

    def closed(self) -> bool:
        with self._cond:
            return self._closed

    def close(self) -> None:
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def pop_for_write(self) -> T:
        """Return an item to write to, waiting for one if the pool is full."""
        with self._cond:
            if self._closed:
                raise PoolClosedError("pool is closed")
            if not self._write:
                if self._elements < self._capacity:
                    self._elements += 1
                    self._write.append(self._factory())
                else:
                    self._cond.wait_for(lambda: bool(self._write))
            return self._write.popleft()

    def push_write(self, item: T) -> None:
        """Hand a written item to the read side."""
        with self._cond:
            if self._closed:
                raise PoolClosedError("pool is closed")
            self._read.append(item)
            self._cond.notify_all()

    def pop_for_read(self) -> T | None:
        """Return the next written item, or None once closed and drained."""
        with self._cond:
            self._cond.wait_for(lambda: bool(self._read) or self._closed)
            if not self._read:
                return None
            return self._read.popleft()

    def push_read(self, item: T) -> None:
        """Return a read item for reuse; it is dropped if the pool is closed."""
        with self._cond:
            if not self._closed:
                self._write.append(item)
                self._cond.notify_all()