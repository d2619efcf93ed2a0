"""HTTP client for single, non-redirecting Google Maps requests."""
from __future__ import annotations

import logging
from typing import Dict, Optional

import httpx

from gmaps_redirect.models import FetchResult

logger = logging.getLogger(__name__)

# Consent-bypass cookie; without it EU clients get the consent interstitial.
CONSENT_COOKIE = "SOCS=CAESEwgDEgk1NjE2NDA4NTIaAmVuIAEaBgiA9smnBg"
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/100.0.4896.60 Safari/537.36"
)
DEFAULT_TIMEOUT = 10.0


class NetworkError(RuntimeError):
    """Raised when a request cannot be sent or its response cannot be read."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"{message} @ {url}")
        self.url = url


class NetworkTimeout(NetworkError):
    """Raised when a request exceeds the configured timeout."""


class MapsClient:
    """Issue one GET per call and report status, ``Location`` and body as-is."""

    HEADERS: Dict[str, str] = {
        "Cookie": CONSENT_COOKIE,
        "User-Agent": USER_AGENT,
    }

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        *,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.timeout = timeout
        self._client = httpx.Client(
            follow_redirects=False,
            timeout=timeout,
            transport=transport,
        )

    def fetch(self, url: str) -> FetchResult:
        """
        Perform a single GET against ``url`` without following redirects.

        Parameters
        ----------
        url:
            Absolute http(s) URL.

        Returns
        -------
        FetchResult
            Status code, raw ``Location`` header (if any) and the full body
            decoded as text, whatever the status.

        Raises
        ------
        NetworkTimeout
            The request timed out.
        NetworkError
            Any other transport failure, including malformed URLs.
        """
        logger.debug("GET %s", url)
        try:
            response = self._client.get(url, headers=self.HEADERS)
            body = response.text
        except httpx.TimeoutException as exc:
            raise NetworkTimeout(url, f"request timed out after {self.timeout}s") from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise NetworkError(url, f"request failed: {exc}") from exc

        logger.debug("GET %s -> %s", url, response.status_code)
        return FetchResult(
            url=url,
            status=response.status_code,
            redirect=response.headers.get("Location"),
            body=body,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "MapsClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        self.close()


__all__ = [
    "CONSENT_COOKIE",
    "DEFAULT_TIMEOUT",
    "MapsClient",
    "NetworkError",
    "NetworkTimeout",
    "USER_AGENT",
]
