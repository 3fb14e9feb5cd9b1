"""CachingSecretProvider - time-to-live cache in front of another provider."""

import logging
import time
from collections.abc import Callable

from vaultgate.domain.secret.model import CacheConfiguration, Secret
from vaultgate.domain.secret.port import SecretProvider
from vaultgate.domain.shared.error import require, require_not_blank

logger = logging.getLogger(__name__)


class CachingSecretProvider:
    """Caches secrets resolved by an inner provider for a fixed duration.

    Unknown secrets (None answers) are not cached, so a secret added to the
    backend later is picked up on the next lookup.
    """

    def __init__(
        self,
        secret_provider: SecretProvider,
        configuration: CacheConfiguration | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        require(secret_provider, "secret_provider", "Requires a secret provider to cache")
        self._secret_provider = secret_provider
        self._configuration = configuration or CacheConfiguration.default()
        self._clock = clock
        self._entries: dict[str, tuple[Secret, float]] = {}

    @property
    def cache_configuration(self) -> CacheConfiguration:
        return self._configuration

    async def get_secret(self, secret_name: str, ignore_cache: bool = False) -> Secret | None:
        require_not_blank(
            secret_name, "secret_name", "Requires a non-blank secret name to look up the secret"
        )
        if not ignore_cache:
            cached = self._lookup(secret_name)
            if cached is not None:
                return cached

        secret = await self._secret_provider.get_secret(secret_name)
        if secret is not None:
            expires_at = self._clock() + self._configuration.duration.total_seconds()
            self._entries[secret_name] = (secret, expires_at)
        return secret

    async def get_raw_secret(self, secret_name: str, ignore_cache: bool = False) -> str | None:
        secret = await self.get_secret(secret_name, ignore_cache=ignore_cache)
        return secret.value if secret is not None else None

    async def invalidate_secret(self, secret_name: str) -> None:
        require_not_blank(
            secret_name, "secret_name", "Requires a non-blank secret name to invalidate the secret"
        )
        if self._entries.pop(secret_name, None) is not None:
            logger.debug("Invalidated cached secret: name=%s", secret_name)

    def _lookup(self, secret_name: str) -> Secret | None:
        entry = self._entries.get(secret_name)
        if entry is None:
            return None
        secret, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[secret_name]
            return None
        return secret
