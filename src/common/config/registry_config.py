"""Explicit configuration passed to the supplier registry and its collaborators."""

from dataclasses import dataclass
from typing import Optional

from src.common.config.settings import Settings


@dataclass(frozen=True)
class RegistryConfig:
    """Immutable snapshot of everything the registry needs from the environment."""

    application_id: str
    firebase_project_id: Optional[str] = None
    firebase_api_key: Optional[str] = None
    initial_auth_token: Optional[str] = None
    auth_base_url: str = "https://identitytoolkit.googleapis.com/v1"
    token_url: str = "https://securetoken.googleapis.com/v1/token"
    root_collection: str = "artifacts"
    credentials_path: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "RegistryConfig":
        return cls(
            application_id=settings.APP_ID,
            firebase_project_id=settings.FIREBASE_PROJECT_ID,
            firebase_api_key=settings.FIREBASE_API_KEY,
            initial_auth_token=settings.FIREBASE_AUTH_TOKEN,
            auth_base_url=settings.FIREBASE_AUTH_BASE_URL.rstrip("/"),
            token_url=settings.FIREBASE_TOKEN_URL,
            root_collection=settings.FIRESTORE_ROOT_COLLECTION.strip("/"),
            credentials_path=settings.GOOGLE_APPLICATION_CREDENTIALS,
        )
