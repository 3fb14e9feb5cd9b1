"""Dependency injection wiring for the secret store."""

import asyncio
import logging

from dishka import AsyncContainer, make_async_container, provide

from vaultgate.config import Config
from vaultgate.domain.authorization.fixed import FixedRoleAuthorization
from vaultgate.domain.authorization.port import RoleAuthorization
from vaultgate.domain.secret.builder import SecretStoreBuilder
from vaultgate.domain.secret.model import CacheConfiguration
from vaultgate.domain.secret.port import SecretProvider
from vaultgate.domain.secret.service.composite import CompositeSecretProvider
from vaultgate.util.di.base import Provider
from vaultgate.util.di.scope import Scope

logger = logging.getLogger(__name__)


class AuthorizationProvider(Provider):
    """Provides the role authorization consulted by authorized secret sources."""

    @provide(scope=Scope.APP)
    def get_role_authorization(self, config: Config) -> RoleAuthorization:
        """Fixed role authorization for the configured current role."""
        role = config.authorization.current_role
        logger.info("Role authorization configured: current_role=%s", role.name)
        return FixedRoleAuthorization(role)


class SecretStoreProvider(Provider):
    """Builds the secret store from the SecretStoreBuilder in the container context.

    The container runs without a lock (see ``create_container``), so concurrent
    first resolutions are serialized here and the store is built only once.
    """

    def __init__(self) -> None:
        super().__init__()
        self._lock = asyncio.Lock()
        self._store: CompositeSecretProvider | None = None

    @provide(scope=Scope.APP)
    def get_cache_configuration(self, config: Config) -> CacheConfiguration:
        """Default cache settings for caching sources created by provider factories."""
        return config.cache.to_cache_configuration()

    @provide(scope=Scope.APP)
    async def get_secret_store(
        self,
        builder: SecretStoreBuilder,
        container: AsyncContainer,
    ) -> CompositeSecretProvider:
        """Resolve every registered source against this container."""
        async with self._lock:
            if self._store is None:
                self._store = await builder.build(container)
            return self._store

    @provide(scope=Scope.APP)
    def get_secret_provider(self, store: CompositeSecretProvider) -> SecretProvider:
        return store


def create_container(
    builder: SecretStoreBuilder,
    *providers: Provider,
    config: Config | None = None,
) -> AsyncContainer:
    """Create the container serving the secret store.

    Extra providers can be passed to override or extend the defaults, e.g. a
    provider with a different RoleAuthorization.
    """
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    return make_async_container(
        AuthorizationProvider(),
        SecretStoreProvider(),
        *providers,
        context={Config: config, SecretStoreBuilder: builder},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
        # Building the store resolves RoleAuthorization from the same container
        # while the store itself is being resolved, which a non-reentrant lock
        # would deadlock.
        lock_factory=None,
    )
