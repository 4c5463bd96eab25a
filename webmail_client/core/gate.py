"""
Non-queueing mutual exclusion for named resources.

A ResourceGate keeps one locked flag per resource key (a mailbox, the
message pane, a draft's send action). Acquisition never blocks and never
queues: if the resource is busy the request is refused and the caller
drops it.
"""
import logging
import threading
from contextlib import contextmanager
from typing import Dict, Hashable, Iterator


logger = logging.getLogger(__name__)


def mailbox_key(name: str) -> str:
    """Gate key for a mailbox's cache."""
    return f"mailbox:{name}"


MESSAGE_PANE = "message-pane"


class ResourceGate:
    """
    Mapping from resource key to a locked flag.

    Thread-safe design but the client only touches it from the event loop
    thread; the lock just keeps check-and-set atomic.
    """

    def __init__(self):
        self._locked: Dict[Hashable, bool] = {}
        self._lock = threading.Lock()

    def is_locked(self, resource: Hashable) -> bool:
        with self._lock:
            return self._locked.get(resource, False)

    def try_acquire(self, resource: Hashable) -> bool:
        """
        Lock a resource if it is free.

        Returns:
            True if the caller now holds the resource, False if it was
            already held (the caller should drop its request).
        """
        with self._lock:
            if self._locked.get(resource, False):
                logger.debug(f"Gate denied for {resource!r}")
                return False
            self._locked[resource] = True
            return True

    def release(self, resource: Hashable) -> None:
        """Unconditionally unlock a resource."""
        with self._lock:
            self._locked[resource] = False

    @contextmanager
    def hold(self, resource: Hashable) -> Iterator[bool]:
        """
        Scoped acquisition with guaranteed release.

        Yields whether the resource was acquired. When it was, the resource
        is released on every exit path, including exceptions; when it was
        not, the holder's lock is left alone.

        Example:
            with gate.hold(mailbox_key("INBOX")) as acquired:
                if not acquired:
                    return
                ...
        """
        acquired = self.try_acquire(resource)
        try:
            yield acquired
        finally:
            if acquired:
                self.release(resource)
