"""SecretStoreBuilder and the sources it registers.

A source is one entry of the secret store's lookup chain. Sources come in
three shapes:

- ``PlainSource``: a provider that can only fetch secrets.
- ``CachedSource``: a provider that also supports cache bypass and invalidation.
- ``DeferredSource``: a factory that produces a provider once the
  dependency resolver is available.

Each source gets a stable ``source_id`` when it is created, so callers can
tell sources apart even when two of them wrap the same provider.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

import logfire
from typing_extensions import Self

from vaultgate.domain.secret.port import CachedSecretProvider, DependencyResolver, SecretProvider
from vaultgate.domain.secret.service.composite import CompositeSecretProvider
from vaultgate.domain.shared.error import ConfigurationError, ValidationError, require

if TYPE_CHECKING:
    from vaultgate.domain.authorization.role import Role

logger = logging.getLogger(__name__)

SourceFactory = Callable[[DependencyResolver], Awaitable[SecretProvider]]


@dataclass(frozen=True, eq=False)
class SecretStoreSource(ABC):
    """Base for registered sources. Compared by identity, never by value."""

    source_id: UUID = field(default_factory=uuid4, kw_only=True)
    name: str | None = field(default=None, kw_only=True)

    @abstractmethod
    async def resolve(self, resolver: DependencyResolver | None) -> SecretProvider:
        """Produce the provider this source contributes to the secret store."""


@dataclass(frozen=True, eq=False)
class PlainSource(SecretStoreSource):
    secret_provider: SecretProvider

    async def resolve(self, resolver: DependencyResolver | None) -> SecretProvider:
        return self.secret_provider


@dataclass(frozen=True, eq=False)
class CachedSource(SecretStoreSource):
    cached_secret_provider: CachedSecretProvider

    @property
    def secret_provider(self) -> SecretProvider:
        return self.cached_secret_provider

    async def resolve(self, resolver: DependencyResolver | None) -> SecretProvider:
        return self.cached_secret_provider


@dataclass(frozen=True, eq=False)
class DeferredSource(SecretStoreSource):
    factory: SourceFactory

    async def resolve(self, resolver: DependencyResolver | None) -> SecretProvider:
        if resolver is None:
            raise ConfigurationError(
                f"Secret source {self.name or self.source_id} needs a dependency resolver"
            )
        provider = await self.factory(resolver)
        if provider is None:
            raise ConfigurationError(
                f"Secret source {self.name or self.source_id} factory produced no provider"
            )
        return provider


def source_for(provider: SecretProvider, *, name: str | None = None) -> SecretStoreSource:
    """Tag a provider as a cached or plain source, based on what it supports."""
    if isinstance(provider, CachedSecretProvider):
        return CachedSource(provider, name=name)
    return PlainSource(provider, name=name)


class SecretStoreBuilder:
    """Collects secret sources and critical errors, then builds the secret store.

    Sources are consulted in registration order by the resulting
    CompositeSecretProvider.
    """

    def __init__(self) -> None:
        self.sources: list[SecretStoreSource] = []
        self._critical_errors: list[type[Exception]] = []

    @property
    def critical_errors(self) -> tuple[type[Exception], ...]:
        return tuple(self._critical_errors)

    def add_source(self, source: SecretStoreSource) -> Self:
        require(source, "source", "Requires a secret source to add to the secret store")
        self.sources.append(source)
        return self

    def add_provider(self, provider: SecretProvider, *, name: str | None = None) -> Self:
        require(provider, "provider", "Requires a secret provider to add to the secret store")
        return self.add_source(source_for(provider, name=name))

    def add_provider_factory(self, factory: SourceFactory, *, name: str | None = None) -> Self:
        require(factory, "factory", "Requires a factory to create the secret provider")
        return self.add_source(DeferredSource(factory, name=name))

    def add_critical_error(self, error_type: type[Exception]) -> Self:
        """Mark an error type as aborting the lookup chain instead of trying the next source."""
        if not (isinstance(error_type, type) and issubclass(error_type, Exception)):
            raise ValidationError(
                f"Critical error {error_type!r} is not an exception type",
                field="error_type",
            )
        if error_type not in self._critical_errors:
            self._critical_errors.append(error_type)
        return self

    def authorized_within(
        self,
        role: Role,
        add_sources: Callable[[SecretStoreBuilder], object],
    ) -> Self:
        """Only allow the sources added by ``add_sources`` to callers within ``role``."""
        from vaultgate.domain.authorization.builder import authorized_within

        authorized_within(self, role, add_sources)
        return self

    async def build(self, resolver: DependencyResolver | None = None) -> CompositeSecretProvider:
        """Resolve every source once, in order, into the composite lookup chain."""
        with logfire.span("BuildSecretStore", sources=len(self.sources)):
            providers = [await source.resolve(resolver) for source in self.sources]
            logger.info(
                "Secret store built: providers=%d critical_errors=%s",
                len(providers),
                [e.__name__ for e in self._critical_errors],
            )
            return CompositeSecretProvider(providers, critical_errors=self._critical_errors)
