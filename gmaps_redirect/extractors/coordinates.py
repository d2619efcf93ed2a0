"""Coordinate extraction from map URLs and fetched page content."""

from __future__ import annotations

import re
from typing import Optional

from gmaps_redirect.models import DEGREE_PATTERN, Coordinate

# Share URLs carry the place position in the ``data=`` blob as ``!3d<lat>!4d<lon>``.
_URL_LATITUDE_RE = re.compile(rf"data=.*!3d({DEGREE_PATTERN})")
_URL_LONGITUDE_RE = re.compile(rf"data=.*!4d({DEGREE_PATTERN})")

# Place pages embed a preview request such as ``/maps/preview/place/...@lat,lon,...``.
_PREVIEW_PLACE_RE = re.compile(
    rf"/maps/preview/place.*@({DEGREE_PATTERN}),({DEGREE_PATTERN})"
)


def extract_from_url(url: Optional[str]) -> Optional[Coordinate]:
    """
    Pull the place coordinate out of a map URL.

    Both the latitude (``!3d``) and longitude (``!4d``) markers must be
    present after ``data=``; a partial match yields ``None``.
    """
    if not url:
        return None

    latitude = _URL_LATITUDE_RE.search(url)
    longitude = _URL_LONGITUDE_RE.search(url)
    if latitude is None or longitude is None:
        return None

    return Coordinate(latitude=latitude.group(1), longitude=longitude.group(1))


def extract_from_content(text: Optional[str]) -> Optional[Coordinate]:
    """Pull the coordinate from a preview-place reference in an HTML/JSON body."""
    if text is None or not text.strip():
        return None

    match = _PREVIEW_PLACE_RE.search(text)
    if match is None:
        return None

    return Coordinate(latitude=match.group(1), longitude=match.group(2))


__all__ = ["extract_from_content", "extract_from_url"]
