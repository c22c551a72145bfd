"""Domain exceptions raised by the gateway and presenters."""

from __future__ import annotations


class CatalogGatewayError(RuntimeError):
    """A catalog or detail fetch failed or returned an unusable payload."""

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class CatalogTimeoutError(CatalogGatewayError):
    """A fetch exceeded the configured HTTP timeout."""


class FavoriteTargetNotFound(LookupError):
    """A favorite toggle referenced an identity absent from the catalog."""

    def __init__(self, identity: str) -> None:
        super().__init__(f"No catalog entry with identity '{identity}'")
        self.identity = identity


class ShareInProgressError(RuntimeError):
    """A share was requested while a previous one is still presented."""


class DetailNotReadyError(RuntimeError):
    """An action required a loaded detail view but none is available."""


__all__ = [
    "CatalogGatewayError",
    "CatalogTimeoutError",
    "DetailNotReadyError",
    "FavoriteTargetNotFound",
    "ShareInProgressError",
]
