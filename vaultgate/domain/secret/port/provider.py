"""Secret provider ports consumed by the secret store."""

from abc import abstractmethod
from typing import Protocol, runtime_checkable

from vaultgate.domain.secret.model import CacheConfiguration, Secret
from vaultgate.domain.shared.port import Port


@runtime_checkable
class SecretProvider(Port, Protocol):
    """Fetches secrets by name from a single backend.

    Providers return None when the backend does not know the secret, so the
    secret store can move on to the next source. Transport or configuration
    failures should be raised.
    """

    @abstractmethod
    async def get_secret(self, secret_name: str) -> Secret | None:
        """Get the secret with the given name.

        Args:
            secret_name: The name of the secret.

        Returns:
            The secret, or None when the backend does not know it.
        """
        ...

    @abstractmethod
    async def get_raw_secret(self, secret_name: str) -> str | None:
        """Get only the value of the secret with the given name."""
        ...


@runtime_checkable
class CachedSecretProvider(SecretProvider, Protocol):
    """A secret provider that keeps resolved secrets in a cache."""

    @property
    @abstractmethod
    def cache_configuration(self) -> CacheConfiguration:
        """The cache settings used by this provider."""
        ...

    @abstractmethod
    async def get_secret(self, secret_name: str, ignore_cache: bool = False) -> Secret | None:
        """Get the secret, skipping the cache when ``ignore_cache`` is set."""
        ...

    @abstractmethod
    async def get_raw_secret(self, secret_name: str, ignore_cache: bool = False) -> str | None:
        """Get the secret value, skipping the cache when ``ignore_cache`` is set."""
        ...

    @abstractmethod
    async def invalidate_secret(self, secret_name: str) -> None:
        """Remove the secret from the cache so the next lookup refetches it."""
        ...
