"""Client for the Firebase Auth (Identity Toolkit) REST API."""

import json
import logging

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from src.common.config.registry_config import RegistryConfig
from src.common.dtos.supplier_dtos import AuthSessionDTO
from src.common.exceptions.custom_exceptions import APIError

logger = logging.getLogger(__name__)


class FirebaseAuthApiClient:
    def __init__(self, config: RegistryConfig) -> None:
        self.base_url = config.auth_base_url
        self.api_key = config.firebase_api_key
        self.token_url = config.token_url

        # Configure session with connection pooling and retry strategy
        self.session = requests.Session()
        retry_strategy = Retry(
            total=3,
            status_forcelist=[429, 500, 502, 503, 504],
            # Sign-up is not idempotent, so POST is left out of status retries
            allowed_methods=["HEAD", "GET", "OPTIONS"],
            backoff_factor=1,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    def sign_in_anonymously(self) -> AuthSessionDTO:
        """Creates an anonymous user and returns its session."""
        data = self._post("accounts:signUp", {"returnSecureToken": True})
        try:
            return AuthSessionDTO(
                user_id=data["localId"],
                id_token=data["idToken"],
                refresh_token=data.get("refreshToken"),
                expires_in=int(data["expiresIn"]) if data.get("expiresIn") else None,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise APIError(f"Unexpected anonymous sign-in response: {e}", original_exception=e)

    def sign_in_with_custom_token(self, token: str) -> AuthSessionDTO:
        """Exchanges a custom token for an ID token, then looks up the user id it belongs to."""
        data = self._post("accounts:signInWithCustomToken", {"token": token, "returnSecureToken": True})
        try:
            id_token = data["idToken"]
        except (KeyError, TypeError) as e:
            raise APIError(f"Unexpected custom token sign-in response: {e}", original_exception=e)

        lookup = self._post("accounts:lookup", {"idToken": id_token})
        try:
            user_id = lookup["users"][0]["localId"]
        except (KeyError, IndexError, TypeError) as e:
            raise APIError(f"Unexpected account lookup response: {e}", original_exception=e)

        return AuthSessionDTO(
            user_id=user_id,
            id_token=id_token,
            refresh_token=data.get("refreshToken"),
            expires_in=int(data["expiresIn"]) if data.get("expiresIn") else None,
        )

    def refresh_id_token(self, refresh_token: str) -> AuthSessionDTO:
        """Exchanges a refresh token for a fresh ID token through the Secure Token endpoint."""
        if not refresh_token:
            raise APIError("No refresh token available to renew the session.")

        data = self._send(
            self.token_url, "token refresh", data={"grant_type": "refresh_token", "refresh_token": refresh_token}
        )
        try:
            return AuthSessionDTO(
                user_id=data["user_id"],
                id_token=data["id_token"],
                refresh_token=data.get("refresh_token") or refresh_token,
                expires_in=int(data["expires_in"]) if data.get("expires_in") else None,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise APIError(f"Unexpected token refresh response: {e}", original_exception=e)

    def _post(self, method: str, payload: dict) -> dict:
        return self._send(f"{self.base_url}/{method}", method, json=payload)

    def _send(self, url: str, method: str, **body) -> dict:
        if not self.api_key:
            raise APIError("FIREBASE_API_KEY is not set in environment variables.")

        params = {"key": self.api_key}

        try:
            response = self.session.post(url, params=params, timeout=30, **body)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.Timeout as e:
            raise APIError(f"Auth request {method} timed out: {e}", original_exception=e)
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            raise APIError(f"Auth request {method} was rejected: {e}", original_exception=e, status_code=status_code)
        except requests.exceptions.RequestException as e:
            raise APIError(f"Error calling auth endpoint {method}: {e}", original_exception=e)
        except json.JSONDecodeError as e:
            raise APIError(f"Failed to decode auth response for {method}: {e}", original_exception=e)
