import threading
from typing import Protocol


class Lock(Protocol):
    """Mutual exclusion around the read-modify-flush section of a mutation."""

    def acquire(self) -> bool:
        """Returns True when the lock was granted."""
        ...

    def release(self) -> None:
        """Releases the lock. Releasing a lock that is not held does nothing."""
        ...


class ThreadLock:
    """In-process lock for managers sharing one configuration file within a process."""

    def __init__(self, timeout: float = -1.0):
        self.timeout = timeout
        self._lock = threading.Lock()

    def acquire(self) -> bool:
        if self.timeout == 0:
            return self._lock.acquire(blocking=False)
        return self._lock.acquire(timeout=self.timeout)

    def release(self) -> None:
        if self._lock.locked():
            self._lock.release()

    @property
    def is_acquired(self) -> bool:
        return self._lock.locked()
