"""Coordinate extractors."""

from .coordinates import extract_from_content, extract_from_url

__all__ = [
    "extract_from_content",
    "extract_from_url",
]
