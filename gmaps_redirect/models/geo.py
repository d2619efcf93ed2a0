"""Coordinate data models."""

from __future__ import annotations

import re
from dataclasses import dataclass

# Decimal degrees as they appear in map-service URLs and page content.
# ASCII digits only; `\d` would also accept other Unicode digit forms.
DEGREE_PATTERN = r"-?[0-9]{1,3}\.[0-9]+"
_DEGREE_RE = re.compile(DEGREE_PATTERN)


@dataclass(frozen=True)
class Coordinate:
    """
    A latitude/longitude pair in decimal degrees.

    Values are kept as the exact text that was matched so the rendered
    reference carries the same digits the source did (``-67.890`` stays
    ``-67.890``).
    """

    latitude: str
    longitude: str

    def __post_init__(self) -> None:
        for name in ("latitude", "longitude"):
            value = getattr(self, name)
            if not isinstance(value, str) or not _DEGREE_RE.fullmatch(value):
                raise ValueError(f"Invalid {name} value: {value!r}")

    def to_uri(self) -> str:
        """Render as ``geo:<lat>,<lon>?q=<lat>,<lon>``."""
        pair = f"{self.latitude},{self.longitude}"
        return f"geo:{pair}?q={pair}"

    def to_dict(self) -> dict[str, str]:
        return {"latitude": self.latitude, "longitude": self.longitude}

    def __str__(self) -> str:
        return self.to_uri()


__all__ = ["Coordinate", "DEGREE_PATTERN"]
