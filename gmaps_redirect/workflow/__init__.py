"""Link resolution workflow."""

from .handler import UNRESOLVED_MESSAGE, LinkHandler
from .resolve import (
    DEFAULT_MAX_REDIRECTS,
    Fetcher,
    ResolutionCancelled,
    TooManyRedirects,
    resolve_link,
)

__all__ = [
    "DEFAULT_MAX_REDIRECTS",
    "Fetcher",
    "LinkHandler",
    "ResolutionCancelled",
    "TooManyRedirects",
    "UNRESOLVED_MESSAGE",
    "resolve_link",
]
