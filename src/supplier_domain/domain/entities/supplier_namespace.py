"""Supplier namespace value object."""

from dataclasses import dataclass


@dataclass(frozen=True)  # Value objects are immutable
class SupplierNamespace:
    """The per-application, per-user partition holding one session's supplier documents."""

    application_id: str
    user_id: str

    def __post_init__(self) -> None:
        if not self.application_id or not self.user_id:
            raise ValueError("Namespace requires both an application id and a user id.")
        for part in (self.application_id, self.user_id):
            if "/" in part:
                raise ValueError(f"Namespace component cannot contain '/': {part!r}")

    @property
    def address(self) -> str:
        """Hierarchical address of the namespace, relative to the store root."""
        return f"{self.application_id}/users/{self.user_id}/suppliers"

    def collection_path(self, root_collection: str) -> str:
        """Full collection path under the store's root collection."""
        if not root_collection:
            return self.address
        return f"{root_collection}/{self.address}"
