"""Main application entry point: signs in and follows the live supplier listing."""

import logging

from src.common.config.registry_config import RegistryConfig
from src.common.config.settings import settings
from src.common.exceptions.custom_exceptions import ApplicationError
from src.common.logger_config import setup_logging
from src.supplier_domain.application.session_service import SessionService
from src.supplier_domain.application.supplier_registry import SupplierRegistry, sort_for_display
from src.supplier_domain.domain.services.cnpj_codec import format_identifier
from src.supplier_domain.infrastructure.api_clients.firebase_auth_api_client import FirebaseAuthApiClient
from src.supplier_domain.infrastructure.persistence.firestore_client import build_firestore_client
from src.supplier_domain.infrastructure.persistence.firestore_supplier_repository import (
    FirestoreSupplierRepository,
)
from src.supplier_domain.infrastructure.persistence.in_memory_supplier_repository import (
    InMemorySupplierRepository,
)

logger = logging.getLogger(__name__)


def setup_supplier_registry(config: RegistryConfig) -> SupplierRegistry:
    """Initializes and wires up supplier registry dependencies."""
    if settings.SUPPLIER_STORE_BACKEND == "memory":
        logger.info("Using the in-memory supplier store")
        return SupplierRegistry(
            config=config,
            user_id_provider=lambda: settings.LOCAL_USER_ID,
            repository_factory=InMemorySupplierRepository,
        )

    session_service = SessionService(auth_client=FirebaseAuthApiClient(config), config=config)
    auth_session = session_service.sign_in()
    client = build_firestore_client(config, auth_session, session_service.auth_client)

    return SupplierRegistry(
        config=config,
        user_id_provider=session_service.current_user_id,
        repository_factory=lambda namespace: FirestoreSupplierRepository(
            namespace, client, root_collection=config.root_collection
        ),
    )


def follow_supplier_listing(registry: SupplierRegistry) -> None:
    """Logs every snapshot of the supplier set until interrupted."""
    with registry.observe_all() as stream:
        for suppliers in stream:
            logger.info(f"--- {len(suppliers)} supplier(s) in {registry.namespace.address} ---")
            for supplier in sort_for_display(suppliers):
                logger.info(f"  {format_identifier(supplier.identifier)}  {supplier.name}  {supplier.contact}")


if __name__ == "__main__":
    setup_logging()
    registry_config = RegistryConfig.from_settings(settings)

    try:
        supplier_registry = setup_supplier_registry(registry_config)
        follow_supplier_listing(supplier_registry)
    except KeyboardInterrupt:
        logger.info("Stopped following the supplier listing.")
    except ApplicationError as e:
        logger.error(f"Supplier registry stopped: {e}")
        raise
