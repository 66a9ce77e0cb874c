from .rw_lock import ReadWriteLock, LockType

__all__ = ["ReadWriteLock", "LockType"]
