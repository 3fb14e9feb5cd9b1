"""Secret provider adapters."""

from .environment import EnvironmentSecretProvider
from .in_memory import InMemorySecretProvider

__all__ = [
    "EnvironmentSecretProvider",
    "InMemorySecretProvider",
]
