"""Secret domain models."""

from .cache import DEFAULT_CACHE_DURATION, CacheConfiguration
from .secret import Secret

__all__ = [
    "DEFAULT_CACHE_DURATION",
    "CacheConfiguration",
    "Secret",
]
