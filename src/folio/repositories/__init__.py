"""Repository layer - data access abstractions and implementations."""

from folio.repositories.protocols import AssetRepository

__all__ = [
    "AssetRepository",
]
