# src/supplier_domain/application/supplier_registry.py
"""Application service for registering, looking up and live-listing suppliers."""

import logging
import threading
from typing import Callable, Iterable, Optional

from src.common.config.registry_config import RegistryConfig
from src.common.dtos.supplier_dtos import SupplierInputDTO
from src.common.exceptions.custom_exceptions import NotReadyError, ValidationError
from src.common.utils.date_utils import utc_now
from src.supplier_domain.application.supplier_snapshot_stream import SupplierSnapshotStream
from src.supplier_domain.domain.entities.supplier import Supplier
from src.supplier_domain.domain.entities.supplier_namespace import SupplierNamespace
from src.supplier_domain.domain.repositories.supplier_repository import (
    ErrorCallback,
    ISupplierRepository,
    SnapshotCallback,
    SubscriptionHandle,
)
from src.supplier_domain.domain.services.cnpj_codec import normalize_identifier

logger = logging.getLogger(__name__)

RepositoryFactory = Callable[[SupplierNamespace], ISupplierRepository]


class SupplierRegistry:
    """Supplier lifecycle on top of a namespaced store: last write wins, no deletion."""

    def __init__(
        self,
        config: RegistryConfig,
        user_id_provider: Callable[[], Optional[str]],
        repository_factory: RepositoryFactory,
    ) -> None:
        """Initializes the SupplierRegistry. The namespace is resolved on first use."""
        self.config = config
        self.user_id_provider = user_id_provider
        self.repository_factory = repository_factory
        self._repository: Optional[ISupplierRepository] = None
        self._lock = threading.Lock()

    @property
    def namespace(self) -> Optional[SupplierNamespace]:
        return self._repository.namespace if self._repository is not None else None

    def _get_repository(self) -> ISupplierRepository:
        """Derives the namespace once from the signed-in user and keeps its repository."""
        with self._lock:
            if self._repository is None:
                user_id = self.user_id_provider()
                if not user_id:
                    raise NotReadyError("No signed-in user; supplier operations are unavailable")
                namespace = SupplierNamespace(application_id=self.config.application_id, user_id=user_id)
                self._repository = self.repository_factory(namespace)
                logger.info(f"Supplier registry bound to namespace {namespace.address}")
            return self._repository

    def add_supplier(self, supplier_input: SupplierInputDTO) -> Supplier:
        """
        Registers a supplier, replacing any existing record with the same CNPJ.

        The creation timestamp of an existing record is kept; a new identifier
        gets the current time. Raises ValidationError when name or identifier is
        missing (nothing is written), NotReadyError before sign-in and
        PersistenceError when the store fails.
        """
        repository = self._get_repository()

        if not supplier_input.name or not supplier_input.name.strip():
            raise ValidationError("Supplier name is required.", field_name="name")
        if not supplier_input.identifier:
            raise ValidationError("Supplier CNPJ is required.", field_name="identifier")
        identifier = normalize_identifier(supplier_input.identifier)
        if not identifier:
            raise ValidationError("Supplier CNPJ must contain digits.", field_name="identifier")

        existing = repository.get(identifier)
        created_at = existing.created_at if existing is not None and existing.created_at else utc_now()

        supplier = Supplier(
            identifier=identifier,
            name=supplier_input.name,
            address=supplier_input.address or "",
            contact=supplier_input.contact or "",
            notes=supplier_input.notes or "",
            logo_ref=supplier_input.logo_ref or "",
            created_at=created_at,
        )
        repository.put(identifier, supplier)

        action = "Replaced" if existing is not None else "Registered"
        logger.info(f"{action} supplier {identifier} ({supplier.name})")
        return supplier

    def find_supplier(self, raw_identifier: str) -> Optional[Supplier]:
        """Looks up a supplier by CNPJ in any punctuation. Returns None when not registered."""
        repository = self._get_repository()

        identifier = normalize_identifier(raw_identifier)
        if not identifier:
            raise ValidationError("A CNPJ is required to search.", field_name="identifier")
        return repository.get(identifier)

    def observe_all(self) -> SupplierSnapshotStream:
        """Returns a new, independent stream of the full supplier set. Subscribes on first read."""
        repository = self._get_repository()
        return SupplierSnapshotStream(repository.subscribe)

    def subscribe_all(self, on_snapshot: SnapshotCallback, on_error: ErrorCallback) -> SubscriptionHandle:
        """Callback form of observe_all for presentation layers that push state."""
        return self._get_repository().subscribe(on_snapshot, on_error)


def sort_for_display(suppliers: Iterable[Supplier]) -> list[Supplier]:
    """Orders suppliers by name, then identifier, for listing."""
    return sorted(suppliers, key=lambda supplier: (supplier.name.casefold(), supplier.identifier))
