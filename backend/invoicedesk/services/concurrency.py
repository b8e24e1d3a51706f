# Overview: Ownership of the database file while it is being replaced.

from __future__ import annotations

import threading
from contextlib import contextmanager

from ..errors import StoreUnavailableError
from ..extensions import db


DEFAULT_DRAIN_TIMEOUT = 10.0


class StoreGuard:
    """
    Single owner of the right to swap the SQLite file under the engine.

    Every request registers itself on entry (enter) and on teardown (leave).
    Restore takes the exclusive section: new requests are refused, requests
    already running are allowed to finish, then every pooled connection is
    closed, the file is replaced and the engine reconnects lazily on the
    next query. Callers that arrive during the swap get
    StoreUnavailableError instead of whatever the half-copied file would
    produce.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._idle = threading.Condition()
        self._swapping = False
        self._active = 0
        self._local = threading.local()

    @property
    def swapping(self) -> bool:
        with self._idle:
            return self._swapping

    @property
    def active(self) -> int:
        with self._idle:
            return self._active

    def enter(self) -> None:
        """Register the calling thread's request; refused during a swap."""
        with self._idle:
            if self._swapping:
                raise StoreUnavailableError("Store is being restored")
            self._active += 1
        self._local.entered = True

    def leave(self) -> None:
        """Undo enter(); a no-op for requests that were refused."""
        if not getattr(self._local, "entered", False):
            return
        self._local.entered = False
        with self._idle:
            self._active -= 1
            self._idle.notify_all()

    @contextmanager
    def exclusive(self, timeout: float = DEFAULT_DRAIN_TIMEOUT):
        if not self._lock.acquire(blocking=False):
            raise StoreUnavailableError("Another restore is in progress")
        # The restoring request itself is in flight
        own = 1 if getattr(self._local, "entered", False) else 0
        drained = False
        try:
            with self._idle:
                self._swapping = True
                drained = self._idle.wait_for(lambda: self._active <= own, timeout=timeout)
            if not drained:
                raise StoreUnavailableError("Requests still running; restore aborted")

            db.session.remove()
            db.engine.dispose()
            yield
        finally:
            if drained:
                # Connections opened from here on see the new file
                db.engine.dispose()
            with self._idle:
                self._swapping = False
            self._lock.release()


store_guard = StoreGuard()
