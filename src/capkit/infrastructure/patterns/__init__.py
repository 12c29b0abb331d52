"""Infrastructure patterns."""

from .lock_manager import LockManager, ReaderWriterLock

__all__ = ["LockManager", "ReaderWriterLock"]
