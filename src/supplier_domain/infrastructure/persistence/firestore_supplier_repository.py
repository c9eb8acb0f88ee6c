# src/supplier_domain/infrastructure/persistence/firestore_supplier_repository.py
"""Firestore implementation of the Supplier repository."""

import logging
import threading
from typing import Any, Optional

from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.cloud import firestore

from src.common.exceptions.custom_exceptions import PersistenceError, SubscriptionError
from src.common.utils.date_utils import format_datetime_for_document, parse_datetime_from_document
from src.supplier_domain.domain.entities.supplier import Supplier
from src.supplier_domain.domain.entities.supplier_namespace import SupplierNamespace
from src.supplier_domain.domain.repositories.supplier_repository import (
    ErrorCallback,
    ISupplierRepository,
    SnapshotCallback,
    SubscriptionHandle,
)

logger = logging.getLogger(__name__)

_STORE_ERRORS = (GoogleAPIError, GoogleAuthError)


class FirestoreSupplierRepository(ISupplierRepository):
    """Firestore implementation of the Supplier Repository."""

    def __init__(
        self, namespace: SupplierNamespace, client: firestore.Client, root_collection: str = "artifacts"
    ) -> None:
        """Initializes the repository for one namespace collection."""
        self.namespace = namespace
        self._client = client
        self._collection_path = namespace.collection_path(root_collection)
        self._collection = client.collection(self._collection_path)

    def put(self, identifier: str, supplier: Supplier) -> None:
        """Writes the whole document; set() without merge replaces every field atomically."""
        try:
            self._collection.document(identifier).set(self._to_document(supplier))
        except _STORE_ERRORS as e:
            raise PersistenceError(f"Error saving supplier {identifier}: {e}", original_exception=e)
        logger.debug(f"Saved supplier {identifier} to {self._collection_path}")

    def get(self, identifier: str) -> Optional[Supplier]:
        try:
            snapshot = self._collection.document(identifier).get()
        except _STORE_ERRORS as e:
            raise PersistenceError(f"Error fetching supplier {identifier}: {e}", original_exception=e)

        if not snapshot.exists:
            return None
        try:
            return self._from_document(snapshot.id, snapshot.to_dict() or {})
        except (KeyError, TypeError, ValueError) as e:
            raise PersistenceError(f"Malformed supplier document {identifier}: {e}", original_exception=e)

    def subscribe(self, on_snapshot: SnapshotCallback, on_error: ErrorCallback) -> SubscriptionHandle:
        """
        Opens a Firestore watch on the namespace collection.

        Firestore invokes the listener on its own consumer thread with the full
        collection every time. Closing the watch joins that thread, so a release
        requested from inside a callback is handed off to a helper thread.

        The client library retries its watch stream internally and does not report
        stream failures to the listener, so only undecodable snapshots reach
        ``on_error``. A watch that stopped for good shows up through
        ``SubscriptionHandle.channel_active``, which reads ``Watch.is_active``.
        """
        handle = SubscriptionHandle()
        watch_thread: dict[str, Optional[int]] = {"ident": None}

        def _on_collection_snapshot(documents, changes, read_time) -> None:
            watch_thread["ident"] = threading.get_ident()
            try:
                suppliers = [self._from_document(doc.id, doc.to_dict() or {}) for doc in documents]
            except (KeyError, TypeError, ValueError) as e:
                handle.fail(
                    on_error,
                    SubscriptionError(f"Undecodable snapshot from {self._collection_path}: {e}", original_exception=e),
                )
                return
            logger.debug(f"Snapshot of {len(suppliers)} suppliers from {self._collection_path} at {read_time}")
            handle.deliver(on_snapshot, suppliers)

        try:
            watch = self._collection.on_snapshot(_on_collection_snapshot)
        except _STORE_ERRORS as e:
            raise PersistenceError(f"Error opening live listing on {self._collection_path}: {e}", original_exception=e)

        def _release() -> None:
            if watch_thread["ident"] == threading.get_ident():
                threading.Thread(target=watch.unsubscribe, name="supplier-watch-close", daemon=True).start()
            else:
                watch.unsubscribe()
            logger.info(f"Live listing on {self._collection_path} closed")

        handle.bind(_release, lambda: watch.is_active)
        logger.info(f"Live listing on {self._collection_path} opened")
        return handle

    def _to_document(self, supplier: Supplier) -> dict[str, Any]:
        """Maps a Supplier to the document wire shape."""
        return {
            "identifier": supplier.identifier,
            "name": supplier.name,
            "address": supplier.address,
            "contact": supplier.contact,
            "logoRef": supplier.logo_ref,
            "notes": supplier.notes,
            "createdAt": format_datetime_for_document(supplier.created_at),
        }

    def _from_document(self, document_id: str, data: dict[str, Any]) -> Supplier:
        """Maps a stored document back to a Supplier. Accepts the legacy 'cnpj' and 'logoUrl' keys."""
        identifier = data.get("identifier") or data.get("cnpj") or document_id
        return Supplier(
            identifier=identifier,
            name=data["name"],
            address=data.get("address") or "",
            contact=data.get("contact") or "",
            notes=data.get("notes") or "",
            logo_ref=data.get("logoRef") or data.get("logoUrl") or "",
            created_at=parse_datetime_from_document(data.get("createdAt")),
        )
