"""METAR and ATIS generator clients."""

from .metar import MetarClient, METAR_NOT_AVAILABLE
from .uniatis import UniAtisClient, build_atis_url

__all__ = [
    "MetarClient",
    "METAR_NOT_AVAILABLE",
    "UniAtisClient",
    "build_atis_url"
]
