"""HTTP access to the remote catalog API.

The gateway is the single place that talks to PokeAPI. It issues exactly one
request per call (no retry, no backoff) and converts every failure mode into a
:class:`CatalogGatewayError` so presenters only ever handle one exception
family.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from pokedex.schemas.catalog import CatalogItem, DetailPayload
from pokedex.services.errors import CatalogGatewayError, CatalogTimeoutError

logger = logging.getLogger(__name__)


class CatalogGateway:
    """Fetch the catalog listing and per-item detail documents."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        base_url: str,
        catalog_limit: int,
    ) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._catalog_limit = catalog_limit

    @property
    def catalog_url(self) -> str:
        return f"{self._base_url}/pokemon"

    async def fetch_catalog(self) -> list[CatalogItem]:
        """Return every catalog entry in the order served by the API."""

        payload = await self._get_json(
            self.catalog_url, params={"limit": self._catalog_limit}
        )
        results = payload.get("results")
        if not isinstance(results, list):
            raise CatalogGatewayError(
                "Catalog payload is missing a 'results' list", url=self.catalog_url
            )

        items: list[CatalogItem] = []
        seen: set[str] = set()
        for raw in results:
            try:
                item = CatalogItem.from_listing(raw)
            except (KeyError, TypeError, ValidationError) as exc:
                raise CatalogGatewayError(
                    f"Malformed catalog entry: {raw!r}", url=self.catalog_url
                ) from exc
            if item.identity in seen:
                logger.warning(
                    "Dropping duplicate catalog identity %s (%s)", item.identity, item.name
                )
                continue
            seen.add(item.identity)
            items.append(item)

        logger.info("Fetched %d catalog entries", len(items))
        return items

    async def fetch_detail(self, source_ref: str) -> DetailPayload:
        """Return the detail payload for a single catalog entry."""

        payload = await self._get_json(source_ref)
        try:
            detail = DetailPayload.from_api(payload)
        except (AttributeError, TypeError, ValidationError) as exc:
            raise CatalogGatewayError(
                "Malformed detail payload", url=source_ref
            ) from exc

        logger.debug(
            "Fetched detail for %s (%d categories)", source_ref, len(detail.categories)
        )
        return detail

    async def _get_json(
        self, url: str, *, params: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        logger.debug("GET %s params=%s", url, params)
        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.warning("Timed out fetching %s", url)
            raise CatalogTimeoutError(f"Timed out fetching {url}", url=url) from exc
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Catalog API returned %s for %s", exc.response.status_code, url
            )
            raise CatalogGatewayError(
                f"GET {url} returned {exc.response.status_code}", url=url
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("Network failure fetching %s: %s", url, exc)
            raise CatalogGatewayError(f"Network failure fetching {url}", url=url) from exc
        except (httpx.InvalidURL, ValueError) as exc:
            logger.warning("Rejected catalog URL %s: %s", url, exc)
            raise CatalogGatewayError(f"Invalid catalog URL {url}", url=url) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise CatalogGatewayError(f"Response from {url} is not JSON", url=url) from exc

        if not isinstance(payload, dict):
            raise CatalogGatewayError(
                f"Expected a JSON object from {url}", url=url
            )
        return payload


def build_http_client(*, timeout_seconds: float) -> httpx.AsyncClient:
    """Create the shared async client; a zero timeout disables the bound."""

    timeout = httpx.Timeout(timeout_seconds) if timeout_seconds > 0 else httpx.Timeout(None)
    return httpx.AsyncClient(
        timeout=timeout,
        headers={"Accept": "application/json"},
        follow_redirects=True,
    )


__all__ = ["CatalogGateway", "build_http_client"]
