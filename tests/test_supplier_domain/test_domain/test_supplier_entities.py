"""Tests for the Supplier entity and SupplierNamespace value object."""

from dataclasses import FrozenInstanceError
from datetime import datetime

import pytest
import pytz

from src.supplier_domain.domain.entities.supplier import Supplier
from src.supplier_domain.domain.entities.supplier_namespace import SupplierNamespace


def test_supplier_defaults_optional_fields() -> None:
    supplier = Supplier(identifier="12345678000195", name="Acme")

    assert supplier.address == ""
    assert supplier.contact == ""
    assert supplier.notes == ""
    assert supplier.logo_ref == ""
    assert supplier.created_at is None


@pytest.mark.parametrize("identifier", ["", "12.345.678/0001-95", "²", "١٢٣٤٥٦٧٨٠٠٠١٩٥", " 12345678000195"])
def test_supplier_requires_normalized_identifier(identifier) -> None:
    with pytest.raises(ValueError):
        Supplier(identifier=identifier, name="Acme")


def test_supplier_is_immutable(sample_supplier) -> None:
    with pytest.raises(FrozenInstanceError):
        sample_supplier.name = "Other"


def test_supplier_with_created_at_returns_copy(sample_supplier) -> None:
    new_time = datetime(2025, 1, 1, tzinfo=pytz.utc)

    updated = sample_supplier.with_created_at(new_time)

    assert updated.created_at == new_time
    assert sample_supplier.created_at != new_time
    assert updated.identifier == sample_supplier.identifier


def test_namespace_paths(sample_namespace) -> None:
    assert sample_namespace.address == "providex-test/users/user-123/suppliers"
    assert sample_namespace.collection_path("artifacts") == "artifacts/providex-test/users/user-123/suppliers"
    assert sample_namespace.collection_path("") == "providex-test/users/user-123/suppliers"


@pytest.mark.parametrize(
    "application_id, user_id",
    [("", "user-123"), ("providex-test", ""), ("app/x", "user-123"), ("providex-test", "a/b")],
)
def test_namespace_rejects_invalid_components(application_id, user_id) -> None:
    with pytest.raises(ValueError):
        SupplierNamespace(application_id=application_id, user_id=user_id)
