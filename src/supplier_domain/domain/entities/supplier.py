"""Supplier entity."""

import re
from dataclasses import dataclass, replace
from datetime import datetime


@dataclass(frozen=True)
class Supplier:
    """A supplier registered under one user namespace, keyed by its normalized CNPJ."""

    identifier: str
    name: str
    address: str = ""
    contact: str = ""
    notes: str = ""
    logo_ref: str = ""  # Opaque reference (data URL or external URI), never interpreted here
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        """Post-initialization for validation."""
        if not self.identifier:
            raise ValueError("Supplier identifier cannot be empty.")
        if not re.fullmatch(r"[0-9]+", self.identifier):
            raise ValueError("Supplier identifier must be normalized to digits.")

    def with_created_at(self, created_at: datetime) -> "Supplier":
        return replace(self, created_at=created_at)
