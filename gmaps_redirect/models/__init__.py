"""Convenience re-exports for link resolution data models."""

from .fetch import REDIRECT_STATUS, FetchResult, LinkOutcome
from .geo import DEGREE_PATTERN, Coordinate

__all__ = [
    "Coordinate",
    "DEGREE_PATTERN",
    "FetchResult",
    "LinkOutcome",
    "REDIRECT_STATUS",
]
