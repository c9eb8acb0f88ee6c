# src/supplier_domain/infrastructure/persistence/in_memory_supplier_repository.py
"""In-process implementation of the Supplier repository."""

import logging
import threading
from typing import Optional

from src.supplier_domain.domain.entities.supplier import Supplier
from src.supplier_domain.domain.entities.supplier_namespace import SupplierNamespace
from src.supplier_domain.domain.repositories.supplier_repository import (
    ErrorCallback,
    ISupplierRepository,
    SnapshotCallback,
    SubscriptionHandle,
)

logger = logging.getLogger(__name__)


class InMemorySupplierRepository(ISupplierRepository):
    """
    Dict-backed store with the same snapshot semantics as the remote one.

    Snapshots are published synchronously on the writing thread while the store
    lock is held, so every subscriber sees writes in order and none is skipped.
    """

    def __init__(self, namespace: SupplierNamespace) -> None:
        self.namespace = namespace
        self._documents: dict[str, Supplier] = {}
        self._subscribers: list[tuple[SubscriptionHandle, SnapshotCallback]] = []
        self._lock = threading.RLock()

    def put(self, identifier: str, supplier: Supplier) -> None:
        with self._lock:
            self._documents[identifier] = supplier
            logger.debug(f"Stored supplier {identifier} in {self.namespace.address}")
            self._publish()

    def get(self, identifier: str) -> Optional[Supplier]:
        with self._lock:
            return self._documents.get(identifier)

    def subscribe(self, on_snapshot: SnapshotCallback, on_error: ErrorCallback) -> SubscriptionHandle:
        handle = SubscriptionHandle()
        with self._lock:
            self._subscribers.append((handle, on_snapshot))
            handle.bind(lambda: self._remove_subscriber(handle))
            handle.deliver(on_snapshot, self._snapshot())
        return handle

    def _snapshot(self) -> list[Supplier]:
        return list(self._documents.values())

    def _publish(self) -> None:
        for handle, on_snapshot in list(self._subscribers):
            handle.deliver(on_snapshot, self._snapshot())

    def _remove_subscriber(self, handle: SubscriptionHandle) -> None:
        with self._lock:
            self._subscribers = [entry for entry in self._subscribers if entry[0] is not handle]
