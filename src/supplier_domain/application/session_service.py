# src/supplier_domain/application/session_service.py
"""Application service producing the signed-in user that scopes the supplier namespace."""

import logging
from typing import Optional

from src.common.config.registry_config import RegistryConfig
from src.common.dtos.supplier_dtos import AuthSessionDTO
from src.supplier_domain.infrastructure.api_clients.firebase_auth_api_client import FirebaseAuthApiClient

logger = logging.getLogger(__name__)


class SessionService:
    """Signs in once per process and exposes the resulting user id."""

    def __init__(self, auth_client: FirebaseAuthApiClient, config: RegistryConfig) -> None:
        self.auth_client = auth_client
        self.config = config
        self._session: Optional[AuthSessionDTO] = None

    def sign_in(self) -> AuthSessionDTO:
        """
        Signs in with the configured custom token, or anonymously when none is set.

        Raises APIError when the auth provider fails; the session then stays
        unset and registry operations report NotReady.
        """
        if self.config.initial_auth_token:
            session = self.auth_client.sign_in_with_custom_token(self.config.initial_auth_token)
        else:
            session = self.auth_client.sign_in_anonymously()

        self._session = session
        logger.info(f"Signed in as user {session.user_id}")
        return session

    @property
    def session(self) -> Optional[AuthSessionDTO]:
        return self._session

    def current_user_id(self) -> Optional[str]:
        """Returns the signed-in user id, or None before sign-in completes."""
        if self._session is None:
            return None
        return self._session.user_id
