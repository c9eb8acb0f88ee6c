"""Application settings and environment variables."""

import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


class Settings:
    APP_ID: str = os.getenv("APP_ID", "default-app-id")

    FIREBASE_PROJECT_ID: Optional[str] = os.getenv("FIREBASE_PROJECT_ID")
    FIREBASE_API_KEY: Optional[str] = os.getenv("FIREBASE_API_KEY")
    FIREBASE_AUTH_TOKEN: Optional[str] = os.getenv("FIREBASE_AUTH_TOKEN")  # Initial custom token, optional
    FIREBASE_AUTH_BASE_URL: str = os.getenv("FIREBASE_AUTH_BASE_URL", "https://identitytoolkit.googleapis.com/v1")
    FIREBASE_TOKEN_URL: str = os.getenv("FIREBASE_TOKEN_URL", "https://securetoken.googleapis.com/v1/token")

    FIRESTORE_ROOT_COLLECTION: str = os.getenv("FIRESTORE_ROOT_COLLECTION", "artifacts")
    GOOGLE_APPLICATION_CREDENTIALS: Optional[str] = os.getenv("GOOGLE_APPLICATION_CREDENTIALS")

    SUPPLIER_STORE_BACKEND: str = os.getenv("SUPPLIER_STORE_BACKEND", "firestore")  # firestore, memory
    LOCAL_USER_ID: str = os.getenv("LOCAL_USER_ID", "local-user")

    # Logging settings
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")  # INFO, DEBUG, WARNING, ERROR, CRITICAL


settings = Settings()
