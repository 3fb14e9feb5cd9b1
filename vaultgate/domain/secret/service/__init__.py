"""Secret domain services."""

from .cached import CachingSecretProvider
from .composite import CompositeSecretProvider

__all__ = [
    "CachingSecretProvider",
    "CompositeSecretProvider",
]
