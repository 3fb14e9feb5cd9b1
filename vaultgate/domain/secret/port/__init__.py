"""Secret domain ports."""

from .provider import CachedSecretProvider, SecretProvider
from .resolver import DependencyResolver

__all__ = [
    "CachedSecretProvider",
    "DependencyResolver",
    "SecretProvider",
]
