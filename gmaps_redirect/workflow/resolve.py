"""Resolve a Google Maps short/share link to a coordinate."""

from __future__ import annotations

import logging
import threading
from typing import Optional, Protocol
from urllib.parse import urljoin

from gmaps_redirect.extractors import extract_from_content, extract_from_url
from gmaps_redirect.models import Coordinate, FetchResult
from gmaps_redirect.services.trace import TraceLog

logger = logging.getLogger(__name__)

DEFAULT_MAX_REDIRECTS = 10


class Fetcher(Protocol):
    def fetch(self, url: str) -> FetchResult: ...


class TooManyRedirects(RuntimeError):
    """Raised when a link redirects more times than allowed."""

    def __init__(self, url: str, max_redirects: int) -> None:
        super().__init__(f"more than {max_redirects} redirects @ {url}")
        self.url = url
        self.max_redirects = max_redirects


class ResolutionCancelled(RuntimeError):
    """Raised at a fetch or redirect boundary once cancellation was requested."""


def _check_cancelled(cancel_event: Optional[threading.Event], url: str) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise ResolutionCancelled(f"cancelled before {url}")


def _redirect_target(result: FetchResult) -> Optional[str]:
    if result.redirect is None or not result.redirect.strip():
        return None
    return urljoin(result.url, result.redirect.strip())


def resolve_link(
    url: Optional[str],
    trace: TraceLog,
    fetcher: Fetcher,
    *,
    max_redirects: int = DEFAULT_MAX_REDIRECTS,
    cancel_event: Optional[threading.Event] = None,
) -> Optional[Coordinate]:
    """
    Resolve ``url`` to the coordinate it points at.

    The URL itself is parsed first; only when that fails is it fetched.
    A ``302`` is followed manually, a ``2xx`` body is scanned for a
    preview-place reference, and any other status is recorded in ``trace``.

    Parameters
    ----------
    url:
        Map link to resolve. ``None`` or blank resolves to ``None``.
    trace:
        Receives one line per hop, plus the coordinate or the upstream error.
    fetcher:
        Performs single non-redirecting GETs.
    max_redirects:
        Number of ``302`` hops followed before giving up.
    cancel_event:
        When set, resolution stops at the next fetch or redirect boundary.

    Returns
    -------
    Coordinate or None

    Raises
    ------
    NetworkError
        Propagated unchanged from ``fetcher``.
    TooManyRedirects
        The redirect chain is longer than ``max_redirects``.
    ResolutionCancelled
        ``cancel_event`` was set.
    """
    return _resolve(url, trace, fetcher, 0, max_redirects, cancel_event)


def _resolve(
    url: Optional[str],
    trace: TraceLog,
    fetcher: Fetcher,
    hops: int,
    max_redirects: int,
    cancel_event: Optional[threading.Event],
) -> Optional[Coordinate]:
    if url is None or not url.strip():
        return None

    _check_cancelled(cancel_event, url)
    trace.append(f"-> {url}")

    location = extract_from_url(url)
    if location is not None:
        logger.debug("Parsed %s from %s", location, url)
        trace.append(f"-> {location.to_uri()}")
        return location

    _check_cancelled(cancel_event, url)
    result = fetcher.fetch(url)

    if result.is_redirect:
        if hops >= max_redirects:
            raise TooManyRedirects(url, max_redirects)
        target = _redirect_target(result)
        logger.debug("Redirect %d from %s to %s", hops + 1, url, target)
        return _resolve(target, trace, fetcher, hops + 1, max_redirects, cancel_event)

    if result.is_success:
        location = extract_from_content(result.body)
        if location is not None:
            logger.debug("Found %s in body of %s", location, url)
            trace.append(f"-> {location.to_uri()}")
        else:
            logger.debug("No preview place in body of %s", url)
        return location

    logger.warning("Unexpected status %s for %s", result.status, url)
    trace.append(f"error: {result.status} @ {result.url}")
    return None


__all__ = [
    "DEFAULT_MAX_REDIRECTS",
    "Fetcher",
    "ResolutionCancelled",
    "TooManyRedirects",
    "resolve_link",
]
