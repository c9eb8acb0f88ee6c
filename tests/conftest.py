# tests/conftest.py
import pytest
from unittest.mock import Mock
from datetime import datetime
import pytz

# Import necessary DTOs, entities and settings
from src.common.config.registry_config import RegistryConfig
from src.common.config.settings import settings
from src.common.dtos.supplier_dtos import AuthSessionDTO, SupplierInputDTO
from src.supplier_domain.application.supplier_registry import SupplierRegistry
from src.supplier_domain.domain.entities.supplier import Supplier
from src.supplier_domain.domain.entities.supplier_namespace import SupplierNamespace
from src.supplier_domain.domain.repositories.supplier_repository import ISupplierRepository
from src.supplier_domain.infrastructure.persistence.in_memory_supplier_repository import (
    InMemorySupplierRepository,
)


@pytest.fixture(autouse=True)
def mock_settings_firebase_info(mocker) -> None:
    """Mocks the Firebase settings for consistent testing."""
    mocker.patch.object(settings, "APP_ID", "providex-test")
    mocker.patch.object(settings, "FIREBASE_PROJECT_ID", "providex-project")
    mocker.patch.object(settings, "FIREBASE_API_KEY", "test_api_key")
    mocker.patch.object(settings, "FIREBASE_AUTH_TOKEN", None)
    mocker.patch.object(settings, "GOOGLE_APPLICATION_CREDENTIALS", None)


@pytest.fixture
def registry_config() -> RegistryConfig:
    """RegistryConfig built from the mocked settings."""
    return RegistryConfig.from_settings(settings)


@pytest.fixture
def sample_namespace() -> SupplierNamespace:
    """Sample namespace for user 'user-123'."""
    return SupplierNamespace(application_id="providex-test", user_id="user-123")


@pytest.fixture
def in_memory_repository(sample_namespace) -> InMemorySupplierRepository:
    """Empty in-memory supplier store."""
    return InMemorySupplierRepository(sample_namespace)


@pytest.fixture
def supplier_registry(registry_config, in_memory_repository) -> SupplierRegistry:
    """SupplierRegistry for a signed-in user, backed by the in-memory store."""
    return SupplierRegistry(
        config=registry_config,
        user_id_provider=lambda: "user-123",
        repository_factory=lambda namespace: in_memory_repository,
    )


@pytest.fixture
def mock_supplier_repository() -> Mock:
    """Mock for ISupplierRepository."""
    # We specify the interface for a more accurate mock spec
    repository = Mock(spec=ISupplierRepository)
    repository.get.return_value = None
    return repository


@pytest.fixture
def mocked_supplier_registry(registry_config, mock_supplier_repository) -> SupplierRegistry:
    """SupplierRegistry whose store is a Mock recording every call."""
    return SupplierRegistry(
        config=registry_config,
        user_id_provider=lambda: "user-123",
        repository_factory=lambda namespace: mock_supplier_repository,
    )


@pytest.fixture
def sample_supplier_input() -> SupplierInputDTO:
    """Sample registration input with a punctuated CNPJ."""
    return SupplierInputDTO(
        identifier="12.345.678/0001-95",
        name="Acme",
        address="Rua das Flores, 100 - São Paulo",
        contact="compras@acme.com.br",
        notes="Entrega às segundas",
    )


@pytest.fixture
def sample_supplier() -> Supplier:
    """Sample stored Supplier."""
    return Supplier(
        identifier="12345678000195",
        name="Acme",
        address="Rua das Flores, 100 - São Paulo",
        contact="compras@acme.com.br",
        notes="Entrega às segundas",
        logo_ref="https://cdn.example.com/acme.png",
        created_at=datetime(2024, 5, 17, 12, 30, tzinfo=pytz.utc),
    )


@pytest.fixture
def sample_auth_session() -> AuthSessionDTO:
    """Sample signed-in Firebase session."""
    return AuthSessionDTO(user_id="user-123", id_token="id-token", refresh_token="refresh-token", expires_in=3600)
