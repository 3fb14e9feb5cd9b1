"""CompositeSecretProvider - ordered lookup chain over the configured sources."""

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from vaultgate.domain.secret.model import Secret
from vaultgate.domain.secret.port import CachedSecretProvider, SecretProvider
from vaultgate.domain.shared.error import (
    SecretNotFoundError,
    ValidationError,
    require,
    require_not_blank,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CompositeSecretProvider:
    """Asks each provider in registration order until one knows the secret.

    A provider answering None or raising SecretNotFoundError means "try the
    next one". Errors registered as critical abort the lookup and propagate.
    Any other error is logged and the chain continues.
    """

    def __init__(
        self,
        providers: Sequence[SecretProvider],
        critical_errors: Sequence[type[Exception]] = (),
    ) -> None:
        require(providers, "providers", "Requires a sequence of secret providers")
        for error_type in critical_errors:
            if not (isinstance(error_type, type) and issubclass(error_type, Exception)):
                raise ValidationError(
                    f"Critical error {error_type!r} is not an exception type",
                    field="critical_errors",
                )
        self._providers = tuple(providers)
        self._critical_errors = tuple(critical_errors)

    @property
    def providers(self) -> tuple[SecretProvider, ...]:
        return self._providers

    @property
    def critical_errors(self) -> tuple[type[Exception], ...]:
        return self._critical_errors

    async def get_secret(self, secret_name: str, ignore_cache: bool = False) -> Secret:
        require_not_blank(
            secret_name, "secret_name", "Requires a non-blank secret name to look up the secret"
        )

        def fetch(provider: SecretProvider) -> Awaitable[Secret | None]:
            if ignore_cache and isinstance(provider, CachedSecretProvider):
                return provider.get_secret(secret_name, ignore_cache=True)
            return provider.get_secret(secret_name)

        return await self._first(secret_name, fetch)

    async def get_raw_secret(self, secret_name: str, ignore_cache: bool = False) -> str:
        require_not_blank(
            secret_name, "secret_name", "Requires a non-blank secret name to look up the secret"
        )

        def fetch(provider: SecretProvider) -> Awaitable[str | None]:
            if ignore_cache and isinstance(provider, CachedSecretProvider):
                return provider.get_raw_secret(secret_name, ignore_cache=True)
            return provider.get_raw_secret(secret_name)

        return await self._first(secret_name, fetch)

    async def invalidate_secret(self, secret_name: str) -> None:
        """Invalidate the secret on every cache-aware provider in the chain."""
        require_not_blank(
            secret_name, "secret_name", "Requires a non-blank secret name to invalidate the secret"
        )
        for provider in self._providers:
            if isinstance(provider, CachedSecretProvider):
                await provider.invalidate_secret(secret_name)

    async def _first(
        self,
        secret_name: str,
        fetch: Callable[[SecretProvider], Awaitable[T | None]],
    ) -> T:
        last_error: Exception | None = None
        for provider in self._providers:
            try:
                result = await fetch(provider)
            except self._critical_errors:
                raise
            except SecretNotFoundError:
                continue
            except Exception as e:
                logger.warning(
                    "Secret provider %s failed, trying next: name=%s error=%s",
                    type(provider).__name__,
                    secret_name,
                    e,
                )
                last_error = e
                continue

            if result is not None:
                return result

        raise SecretNotFoundError(secret_name) from last_error
