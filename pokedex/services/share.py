"""Hand-off point between the detail view and the platform share sheet."""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class ShareSheet(Protocol):
    """Presents a plain-text payload and reports whether sharing completed."""

    async def present(self, text: str) -> bool:  # pragma: no cover - protocol
        ...


class PayloadShareSheet:
    """Share sheet that hands the text back to the front end.

    The HTTP client receives the payload in the response and opens its native
    share UI itself, so presenting always completes immediately.
    """

    def __init__(self) -> None:
        self.last_text: str | None = None

    async def present(self, text: str) -> bool:
        self.last_text = text
        logger.debug("Prepared %d characters for sharing", len(text))
        return True


__all__ = ["PayloadShareSheet", "ShareSheet"]
