"""Tests for Firestore client construction."""

from dataclasses import replace
from datetime import datetime, timedelta
from unittest.mock import Mock

import pytest
import pytz
from google.auth.exceptions import RefreshError

from src.common.dtos.supplier_dtos import AuthSessionDTO
from src.common.exceptions.custom_exceptions import APIError
from src.supplier_domain.infrastructure.api_clients.firebase_auth_api_client import FirebaseAuthApiClient
from src.supplier_domain.infrastructure.persistence import firestore_client
from src.supplier_domain.infrastructure.persistence.firestore_client import (
    SCOPES,
    FirebaseUserCredentials,
    build_credentials,
    build_firestore_client,
)

MODULE = "src.supplier_domain.infrastructure.persistence.firestore_client"


def _naive_utc_now() -> datetime:
    return datetime.now(pytz.utc).replace(tzinfo=None)


def test_service_account_file_takes_precedence(mocker, registry_config, sample_auth_session, tmp_path) -> None:
    key_file = tmp_path / "service-account.json"
    key_file.write_text("{}")
    from_file = mocker.patch(f"{MODULE}.service_account.Credentials.from_service_account_file")

    creds = build_credentials(replace(registry_config, credentials_path=str(key_file)), sample_auth_session)

    from_file.assert_called_once_with(str(key_file), scopes=SCOPES)
    assert creds is from_file.return_value


def test_signed_in_user_credentials_carry_expiry(registry_config, sample_auth_session) -> None:
    auth_client = Mock(spec=FirebaseAuthApiClient)

    creds = build_credentials(registry_config, sample_auth_session, auth_client)

    assert isinstance(creds, FirebaseUserCredentials)
    assert creds.token == "id-token"
    assert creds.expiry is not None
    assert creds.expiry > _naive_utc_now() + timedelta(minutes=50)
    assert creds.valid
    assert not creds.expired


def test_signed_in_user_credentials_refresh_through_secure_token(registry_config, sample_auth_session) -> None:
    auth_client = Mock(spec=FirebaseAuthApiClient)
    auth_client.refresh_id_token.return_value = AuthSessionDTO(
        user_id="user-123", id_token="renewed-token", refresh_token="renewed-refresh", expires_in=3600
    )
    creds = build_credentials(registry_config, sample_auth_session, auth_client)
    creds.expiry = _naive_utc_now() - timedelta(minutes=1)
    assert creds.expired

    creds.refresh(Mock())

    auth_client.refresh_id_token.assert_called_once_with("refresh-token")
    assert creds.token == "renewed-token"
    assert creds.valid
    creds.refresh(Mock())
    auth_client.refresh_id_token.assert_called_with("renewed-refresh")


def test_signed_in_user_credentials_refresh_failure_raises_refresh_error(registry_config, sample_auth_session) -> None:
    auth_client = Mock(spec=FirebaseAuthApiClient)
    auth_client.refresh_id_token.side_effect = APIError("Auth request token refresh was rejected", status_code=400)
    creds = build_credentials(registry_config, sample_auth_session, auth_client)

    with pytest.raises(RefreshError):
        creds.refresh(Mock())

    assert creds.token == "id-token"


def test_signed_in_user_credentials_default_auth_client(registry_config, sample_auth_session) -> None:
    creds = build_credentials(registry_config, sample_auth_session)

    assert isinstance(creds, FirebaseUserCredentials)
    assert creds.user_id == "user-123"


def test_falls_back_to_application_default(mocker, registry_config) -> None:
    default_creds = object()
    auth_default = mocker.patch(f"{MODULE}.google_auth_default", return_value=(default_creds, "providex-project"))

    creds = build_credentials(registry_config)

    auth_default.assert_called_once_with(scopes=SCOPES)
    assert creds is default_creds


def test_build_firestore_client_uses_project(mocker, registry_config) -> None:
    mocker.patch.object(firestore_client, "build_credentials", return_value="creds")
    client_cls = mocker.patch(f"{MODULE}.firestore.Client")

    client = build_firestore_client(registry_config)

    client_cls.assert_called_once_with(project="providex-project", credentials="creds")
    assert client is client_cls.return_value
