"""HTTP client for product page fetches with User-Agent rotation."""

from __future__ import annotations

import logging
from typing import Any

import requests
from fake_useragent import UserAgent

from src.common.config import ScraperSettings

logger = logging.getLogger(__name__)


class HTTPClient:
    """HTTP client wrapping a requests session.

    A single attempt per call; failures propagate to the caller.
    """

    def __init__(self, config: ScraperSettings | None = None) -> None:
        self.config = config or ScraperSettings()
        self._session = requests.Session()
        self._ua = UserAgent(fallback=self.config.user_agent)

    def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        """Send a GET request.

        Args:
            url: Target URL.
            params: Query parameters.
            headers: Extra headers (merged with defaults).

        Returns:
            requests.Response object.

        Raises:
            requests.RequestException: On network errors or non-2xx status.
        """
        merged_headers = {
            "User-Agent": self._ua.random,
            "Accept-Language": "en-US,en;q=0.9,pt-BR;q=0.8",
        }
        if headers:
            merged_headers.update(headers)

        resp = self._session.get(
            url,
            params=params,
            headers=merged_headers,
            timeout=self.config.request_timeout,
        )
        resp.raise_for_status()
        logger.debug("Fetched %s (%d bytes)", url, len(resp.content))
        return resp

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()

    def __enter__(self) -> HTTPClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
