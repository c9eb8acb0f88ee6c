"""Data Transfer Objects for supplier registration and session bootstrap."""

from dataclasses import dataclass


@dataclass
class SupplierInputDTO:
    """Raw registration input as typed by a user. The identifier may still carry punctuation."""

    identifier: str
    name: str
    address: str = ""
    contact: str = ""
    notes: str = ""
    logo_ref: str = ""


@dataclass
class AuthSessionDTO:
    """Signed-in user returned by the auth provider."""

    user_id: str
    id_token: str
    refresh_token: str | None = None
    expires_in: int | None = None
