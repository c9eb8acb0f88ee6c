# src/supplier_domain/domain/repositories/supplier_repository.py
"""Supplier repository interface and the live subscription handle."""
import threading
from abc import ABC, abstractmethod
from typing import Callable, Optional

from src.common.exceptions.custom_exceptions import SubscriptionError
from src.supplier_domain.domain.entities.supplier import Supplier
from src.supplier_domain.domain.entities.supplier_namespace import SupplierNamespace

SnapshotCallback = Callable[[list[Supplier]], None]
ErrorCallback = Callable[[SubscriptionError], None]


class SubscriptionHandle:
    """
    Controls one live subscription.

    Deliveries and cancellation are serialized on a re-entrant lock: once
    ``cancel()`` returns, no callback of this subscription fires again. A
    delivery already running on another thread finishes before ``cancel()``
    returns. Cancelling from inside a callback is allowed.
    """

    def __init__(
        self,
        release: Optional[Callable[[], None]] = None,
        is_active: Optional[Callable[[], bool]] = None,
    ) -> None:
        self._lock = threading.RLock()
        self._release = release
        self._is_active = is_active
        self._cancelled = False
        self._released = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def channel_active(self) -> bool:
        """False once the subscription ended or the underlying channel reports it stopped."""
        if self._cancelled:
            return False
        return self._is_active is None or bool(self._is_active())

    def bind(self, release: Callable[[], None], is_active: Optional[Callable[[], bool]] = None) -> None:
        """Attaches the function that closes the underlying channel, and optionally its liveness check."""
        with self._lock:
            self._release = release
            self._is_active = is_active
            terminated = self._cancelled
        if terminated:
            self._release_channel()

    def cancel(self) -> None:
        """Stops further callbacks and releases the channel. Safe to call more than once."""
        with self._lock:
            self._cancelled = True
        self._release_channel()

    def deliver(self, on_snapshot: SnapshotCallback, suppliers: list[Supplier]) -> bool:
        """Invokes the snapshot callback unless the subscription has ended."""
        with self._lock:
            if self._cancelled:
                return False
            on_snapshot(suppliers)
            return True

    def fail(self, on_error: ErrorCallback, error: SubscriptionError) -> None:
        """Delivers a channel error once and terminates the subscription."""
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            on_error(error)
        self._release_channel()

    def _release_channel(self) -> None:
        with self._lock:
            if self._released or self._release is None:
                return
            self._released = True
            release = self._release
        release()


class ISupplierRepository(ABC):
    """Document store for the suppliers of a single namespace."""

    namespace: SupplierNamespace

    @abstractmethod
    def put(self, identifier: str, supplier: Supplier) -> None:
        """Saves the supplier, fully replacing any record with the same identifier."""
        pass

    @abstractmethod
    def get(self, identifier: str) -> Optional[Supplier]:
        """Retrieves a supplier by identifier, or None when absent."""
        pass

    @abstractmethod
    def subscribe(self, on_snapshot: SnapshotCallback, on_error: ErrorCallback) -> SubscriptionHandle:
        """Opens a live channel delivering the full supplier set now and after every change."""
        pass
