"""Asset repository protocol."""

from typing import Protocol

from folio.domain.models import Asset


class AssetRepository(Protocol):
    """Interface for asset storage. Writes always replace the whole collection."""

    def load_assets(self) -> list[Asset]:
        """Load all assets in their stored order."""
        ...

    def save_assets(self, assets: list[Asset]) -> None:
        """Replace the stored collection with `assets`."""
        ...
