"""Repository protocol definitions (interfaces)."""

from folio.repositories.protocols.asset_repo import AssetRepository

__all__ = [
    "AssetRepository",
]
