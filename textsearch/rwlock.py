"""
Multiple-reader / single-writer lock.

Readers share the lock; a writer holds it alone. A thread that already holds
the read lock (or the write lock) may take the read lock again, which lets
composite read operations call other read operations. Waiting writers block
new readers so a steady stream of queries cannot starve a merge.
"""

import threading
from contextlib import contextmanager
from typing import Iterator


class ReadWriteLock:
    def __init__(self) -> None:
        self._condition = threading.Condition(threading.Lock())
        self._readers: dict[int, int] = {}  # thread ident -> hold count
        self._writer: int | None = None
        self._write_holds = 0
        self._waiting_writers = 0

    def acquire_read(self) -> None:
        me = threading.get_ident()
        with self._condition:
            if me in self._readers or self._writer == me:
                self._readers[me] = self._readers.get(me, 0) + 1
                return
            while self._writer is not None or self._waiting_writers:
                self._condition.wait()
            self._readers[me] = 1

    def release_read(self) -> None:
        me = threading.get_ident()
        with self._condition:
            holds = self._readers.get(me)
            if not holds:
                raise RuntimeError("cannot release a read lock that is not held")
            if holds == 1:
                del self._readers[me]
                if not self._readers:
                    self._condition.notify_all()
            else:
                self._readers[me] = holds - 1

    def acquire_write(self) -> None:
        me = threading.get_ident()
        with self._condition:
            if self._writer == me:
                self._write_holds += 1
                return
            if me in self._readers:
                raise RuntimeError("cannot upgrade a read lock to a write lock")
            self._waiting_writers += 1
            try:
                while self._writer is not None or self._readers:
                    self._condition.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = me
            self._write_holds = 1

    def release_write(self) -> None:
        with self._condition:
            if self._writer != threading.get_ident():
                raise RuntimeError("cannot release a write lock that is not held")
            self._write_holds -= 1
            if self._write_holds == 0:
                self._writer = None
                self._condition.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()
