"""Supporting services: trace accumulation and process logging."""

from .trace import TraceLog

__all__ = ["TraceLog"]
