# src/supplier_domain/infrastructure/persistence/firestore_client.py
"""Builds the Firestore client used by the supplier repository."""

import logging
import os
from datetime import datetime, timedelta
from typing import Optional

from google.auth import credentials as auth_credentials
from google.auth import default as google_auth_default
from google.auth.exceptions import RefreshError
from google.cloud import firestore
from google.oauth2 import service_account

from src.common.config.registry_config import RegistryConfig
from src.common.dtos.supplier_dtos import AuthSessionDTO
from src.common.exceptions.custom_exceptions import APIError
from src.common.utils.date_utils import utc_now
from src.supplier_domain.infrastructure.api_clients.firebase_auth_api_client import FirebaseAuthApiClient

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/datastore"]


class FirebaseUserCredentials(auth_credentials.Credentials):
    """
    Bearer credentials carrying a Firebase ID token.

    google-auth refreshes them when ``expiry`` is reached; the refresh goes
    through the Secure Token endpoint with the session's refresh token.
    """

    def __init__(self, auth_client: FirebaseAuthApiClient, auth_session: AuthSessionDTO) -> None:
        super().__init__()
        self._auth_client = auth_client
        self._apply_session(auth_session)

    @property
    def user_id(self) -> str:
        return self._user_id

    def refresh(self, request) -> None:
        try:
            session = self._auth_client.refresh_id_token(self._refresh_token)
        except APIError as e:
            raise RefreshError(f"Could not renew Firebase ID token for user {self._user_id}: {e}") from e
        self._apply_session(session)
        logger.info(f"Renewed Firebase ID token for user {self._user_id}")

    def _apply_session(self, session: AuthSessionDTO) -> None:
        self._user_id = session.user_id
        self._refresh_token = session.refresh_token
        self.token = session.id_token
        self.expiry = _expiry_from(session.expires_in)


def _expiry_from(expires_in: Optional[int]) -> Optional[datetime]:
    """google-auth compares expiry against naive UTC."""
    if not expires_in:
        return None
    return utc_now().replace(tzinfo=None) + timedelta(seconds=expires_in)


def build_credentials(
    config: RegistryConfig,
    auth_session: Optional[AuthSessionDTO] = None,
    auth_client: Optional[FirebaseAuthApiClient] = None,
):
    """
    Picks credentials in order: service account file, signed-in Firebase user,
    Application Default Credentials.
    """
    key_path = config.credentials_path
    if key_path and os.path.exists(key_path):
        logger.info("Using service account credentials for Firestore")
        return service_account.Credentials.from_service_account_file(key_path, scopes=SCOPES)

    if auth_session is not None:
        logger.info(f"Using Firebase user credentials for Firestore (user {auth_session.user_id})")
        return FirebaseUserCredentials(auth_client or FirebaseAuthApiClient(config), auth_session)

    logger.info("Using application default credentials for Firestore")
    creds, _ = google_auth_default(scopes=SCOPES)
    return creds


def build_firestore_client(
    config: RegistryConfig,
    auth_session: Optional[AuthSessionDTO] = None,
    auth_client: Optional[FirebaseAuthApiClient] = None,
) -> firestore.Client:
    """Creates a Firestore client for the configured project."""
    return firestore.Client(
        project=config.firebase_project_id,
        credentials=build_credentials(config, auth_session, auth_client),
    )
