from __future__ import annotations

from typing import Any


class CatalogError(Exception):
    """Base class for failures raised by the catalog data-access layer."""


class InvalidResource(CatalogError):
    """The target does not match any resource shape the store recognizes."""

    def __init__(self, message: str, resource: Any = None) -> None:
        super().__init__(message)
        self.resource = resource


class UnsupportedOperation(InvalidResource):
    """The resource is recognized but the operation is not allowed on it."""


class ValidationError(CatalogError):
    """A write carried a missing, null or unrecognized field value."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class StoreError(CatalogError):
    """The storage engine rejected the operation."""
