"""
gmaps-redirect resolves Google Maps short and share links to plain
``geo:`` coordinate references.

Links are parsed directly where possible; otherwise the redirect chain is
followed manually and fetched pages are inspected for the place position.
"""

__all__ = [
    "config",
    "models",
    "extractors",
    "clients",
    "services",
    "workflow",
]
