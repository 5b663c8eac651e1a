"""Reader/writer lock guarding the registry map."""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from propreg.errors import LockFailure

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """Many concurrent readers or one writer.

    Writers that are waiting block newly arriving readers, so a steady stream
    of reads cannot starve a write. The lock is not reentrant.

    If an exception escapes a ``write()`` block the protected state may be
    half-updated, so the lock becomes poisoned: every later acquisition
    raises ``LockFailure``.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0
        self._poisoned = False

    @property
    def poisoned(self) -> bool:
        with self._cond:
            return self._poisoned

    def _check_poison(self) -> None:
        if self._poisoned:
            raise LockFailure("Registry lock is poisoned by a failed write")

    @contextmanager
    def read(self) -> Iterator[None]:
        """Hold shared access for the duration of the block."""
        with self._cond:
            self._check_poison()
            while self._writer or self._waiting_writers:
                self._cond.wait()
                self._check_poison()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        """Hold exclusive access for the duration of the block."""
        with self._cond:
            self._check_poison()
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
                    self._check_poison()
            finally:
                self._waiting_writers -= 1
                self._cond.notify_all()
            self._writer = True
        try:
            yield
        except Exception:
            with self._cond:
                self._poisoned = True
            logger.error("Write failed while holding the registry lock; lock poisoned")
            raise
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()
