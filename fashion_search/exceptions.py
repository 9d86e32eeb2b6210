"""Errors raised by the catalogue service around the search core."""


class CatalogError(Exception):
    """Base class for catalogue errors."""


class CatalogLoadError(CatalogError):
    """The product dataset could not be read or parsed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load products from {path}: {reason}")


class InvalidFilterError(CatalogError):
    """A filter combination cannot match anything by construction."""
