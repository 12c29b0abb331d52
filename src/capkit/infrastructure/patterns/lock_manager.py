"""Lock management components for read-mostly shared state."""
import threading
from contextlib import contextmanager
from typing import Iterator


class ReaderWriterLock:
    """
    Reader/writer lock favoring writers.

    Any number of readers may hold the lock together; a writer holds it
    alone. Waiting writers block new readers so registration is not starved
    by a steady stream of resolutions.
    """

    def __init__(self):
        self._condition = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._condition:
            while self._writer or self._writers_waiting:
                self._condition.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._condition:
            self._readers -= 1
            if self._readers == 0:
                self._condition.notify_all()

    def acquire_write(self) -> None:
        with self._condition:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._condition.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._condition:
            self._writer = False
            self._condition.notify_all()

    @property
    def readers(self) -> int:
        return self._readers


class LockManager:
    """Uniform read/write locking over an exclusive or reader/writer lock."""

    LOCK_TYPES = ("reader_writer", "exclusive")

    def __init__(self, lock_type: str = "reader_writer"):
        """
        Initialize lock manager.

        Args:
            lock_type: 'reader_writer' for shared reads, 'exclusive' for a single re-entrant lock

        Raises:
            ValueError: If the lock type is unknown
        """
        if lock_type not in self.LOCK_TYPES:
            raise ValueError(f"Unknown lock type '{lock_type}'. Available types: {list(self.LOCK_TYPES)}")

        self.lock_type = lock_type
        if lock_type == "reader_writer":
            self._rw_lock = ReaderWriterLock()
        else:
            self._lock = threading.RLock()

    @contextmanager
    def read_lock(self) -> Iterator[None]:
        """Context manager for shared read access."""
        if self.lock_type == "reader_writer":
            self._rw_lock.acquire_read()
            try:
                yield
            finally:
                self._rw_lock.release_read()
        else:
            with self._lock:
                yield

    @contextmanager
    def write_lock(self) -> Iterator[None]:
        """Context manager for exclusive write access."""
        if self.lock_type == "reader_writer":
            self._rw_lock.acquire_write()
            try:
                yield
            finally:
                self._rw_lock.release_write()
        else:
            with self._lock:
                yield
