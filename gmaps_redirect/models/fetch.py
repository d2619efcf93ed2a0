"""HTTP fetch and link handling result models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from .geo import Coordinate

REDIRECT_STATUS = 302


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a single non-redirecting GET."""

    url: str
    status: int
    redirect: Optional[str] = None
    body: Optional[str] = None

    @property
    def is_redirect(self) -> bool:
        return self.status == REDIRECT_STATUS

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300


@dataclass
class LinkOutcome:
    """Result of handling one incoming link on behalf of the host."""

    url: str
    location: Optional[Coordinate] = None
    trace: str = ""
    error: Optional[str] = None
    cancelled: bool = False

    @property
    def resolved(self) -> bool:
        return self.location is not None

    def to_dict(self) -> Dict[str, object]:
        return {
            "url": self.url,
            "location": self.location.to_uri() if self.location else None,
            "coordinate": self.location.to_dict() if self.location else None,
            "trace": self.trace,
            "error": self.error,
            "cancelled": self.cancelled,
        }


__all__ = ["FetchResult", "LinkOutcome", "REDIRECT_STATUS"]
