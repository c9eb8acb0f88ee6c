# src/supplier_domain/application/supplier_snapshot_stream.py
"""Iterator over live supplier snapshots."""

import logging
import queue
import time
from typing import Callable, Optional

from src.common.exceptions.custom_exceptions import SubscriptionError
from src.supplier_domain.domain.entities.supplier import Supplier
from src.supplier_domain.domain.repositories.supplier_repository import (
    ErrorCallback,
    SnapshotCallback,
    SubscriptionHandle,
)

logger = logging.getLogger(__name__)

Subscriber = Callable[[SnapshotCallback, ErrorCallback], SubscriptionHandle]

_CLOSED = object()

LIVENESS_CHECK_SECONDS = 5.0


class SupplierSnapshotStream:
    """
    Lazy, infinite stream of the current supplier set.

    The subscription opens on the first ``next()``. Snapshots are buffered in an
    unbounded queue so the delivering thread never waits on the consumer.
    A channel error is raised from ``next()`` as SubscriptionError and ends the
    stream. After ``cancel()`` iteration stops and buffered snapshots are dropped.
    """

    def __init__(self, subscriber: Subscriber) -> None:
        self._subscriber = subscriber
        self._queue: "queue.Queue[object]" = queue.Queue()
        self._handle: Optional[SubscriptionHandle] = None
        self._finished = False

    def __iter__(self) -> "SupplierSnapshotStream":
        return self

    def __next__(self) -> list[Supplier]:
        return self.next_snapshot()

    def __enter__(self) -> "SupplierSnapshotStream":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.cancel()

    @property
    def is_open(self) -> bool:
        return self._handle is not None and not self._finished

    def next_snapshot(self, timeout: Optional[float] = None) -> list[Supplier]:
        """
        Returns the next snapshot, opening the subscription if needed.

        Raises StopIteration once cancelled, SubscriptionError if the channel
        failed or stopped without reporting an error, and TimeoutError if no
        snapshot arrives within ``timeout`` seconds.
        """
        if self._finished:
            raise StopIteration
        if self._handle is None:
            logger.debug("Opening supplier snapshot stream")
            self._handle = self._subscriber(self._queue.put, self._queue.put)
            # cancel() may have run on another thread while the channel was opening
            if self._finished:
                self._handle.cancel()
                raise StopIteration

        item = self._take(timeout)
        if item is _CLOSED or self._finished:
            self._finished = True
            raise StopIteration
        if isinstance(item, SubscriptionError):
            self._finished = True
            raise item
        return item

    def _take(self, timeout: Optional[float]) -> object:
        """Waits for the next queued item, checking the channel between waits."""
        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            wait = LIVENESS_CHECK_SECONDS
            if deadline is not None:
                wait = min(wait, max(deadline - time.monotonic(), 0))
            try:
                return self._queue.get(timeout=wait)
            except queue.Empty:
                pass

            if self._finished:
                raise StopIteration
            if not self._handle.channel_active:
                self._finished = True
                self._handle.cancel()
                logger.warning("Supplier snapshot channel stopped without reporting an error")
                raise SubscriptionError("Live supplier channel stopped unexpectedly")
            if deadline is not None and time.monotonic() >= deadline:
                raise TimeoutError(f"No supplier snapshot within {timeout} seconds")

    def cancel(self) -> None:
        """Closes the subscription. Safe to call more than once, also before the first snapshot."""
        self._finished = True
        if self._handle is not None:
            self._handle.cancel()
        self._discard_buffered()
        self._queue.put(_CLOSED)

    def _discard_buffered(self) -> None:
        while True:
            try:
                self._queue.get_nowait()
            except queue.Empty:
                return
