import threading
from contextlib import contextmanager
from enum import Enum
from typing import Iterator


class LockType(Enum):
    """
    🔒 Modes a ReadWriteLock can be held in 🔒

    📖 SHARED: Read lock - any number of readers at once
    ✏️ EXCLUSIVE: Write lock - one writer, no readers

    Lock Compatibility:
    ┌─────────────┬─────────┬───────────┐
    │             │ SHARED  │ EXCLUSIVE │
    ├─────────────┼─────────┼───────────┤
    │ SHARED      │    ✅    │     ❌    │
    │ EXCLUSIVE   │    ❌    │     ❌    │
    └─────────────┴─────────┴───────────┘
    """
    SHARED = "SHARED"
    EXCLUSIVE = "EXCLUSIVE"


class ReadWriteLock:
    """
    Shared/exclusive lock guarding one space.

    Readers proceed together; a writer waits for active readers to drain
    and blocks new readers while it waits, so a stream of selects cannot
    starve an insert. The lock is not reentrant.
    """

    def __init__(self):
        self._condition = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    def acquire_shared(self) -> None:
        with self._condition:
            while self._writer or self._waiting_writers:
                self._condition.wait()
            self._readers += 1

    def release_shared(self) -> None:
        with self._condition:
            if self._readers == 0:
                raise RuntimeError("release_shared() without a shared holder")
            self._readers -= 1
            if self._readers == 0:
                self._condition.notify_all()

    def acquire_exclusive(self) -> None:
        with self._condition:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._condition.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True

    def release_exclusive(self) -> None:
        with self._condition:
            if not self._writer:
                raise RuntimeError("release_exclusive() without an exclusive holder")
            self._writer = False
            self._condition.notify_all()

    @contextmanager
    def hold(self, lock_type: LockType) -> Iterator[None]:
        """Hold the lock in the given mode for the duration of a with-block."""
        if lock_type == LockType.SHARED:
            self.acquire_shared()
            try:
                yield
            finally:
                self.release_shared()
        else:
            self.acquire_exclusive()
            try:
                yield
            finally:
                self.release_exclusive()

    def shared(self):
        return self.hold(LockType.SHARED)

    def exclusive(self):
        return self.hold(LockType.EXCLUSIVE)

    def get_state(self) -> dict:
        with self._condition:
            return {
                "readers": self._readers,
                "writer": self._writer,
                "waiting_writers": self._waiting_writers,
            }
