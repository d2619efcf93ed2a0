"""HTTP clients."""

from .maps import MapsClient, NetworkError, NetworkTimeout

__all__ = ["MapsClient", "NetworkError", "NetworkTimeout"]
