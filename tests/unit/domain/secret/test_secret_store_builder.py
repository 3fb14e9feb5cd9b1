"""Tests for SecretStoreBuilder and source registration."""

from typing import Any

import pytest

from vaultgate.domain.secret.builder import (
    CachedSource,
    DeferredSource,
    PlainSource,
    SecretStoreBuilder,
    SecretStoreSource,
    source_for,
)
from vaultgate.domain.secret.port import DependencyResolver, SecretProvider
from vaultgate.domain.secret.service import CachingSecretProvider, CompositeSecretProvider
from vaultgate.domain.shared.error import ConfigurationError, ValidationError
from vaultgate.infrastructure.secret import InMemorySecretProvider


class _Resolver:
    def __init__(self, **dependencies: Any) -> None:
        self._dependencies = dependencies

    async def get(self, dependency_type: Any, *args: Any, **kwargs: Any) -> Any:
        return self._dependencies[dependency_type.__name__]


class TestSources:
    def test_each_source_gets_distinct_id(self) -> None:
        provider = InMemorySecretProvider()
        first = source_for(provider)
        second = source_for(provider)

        assert first.source_id != second.source_id
        assert first != second

    def test_cached_source_exposes_both_capabilities(self) -> None:
        provider = CachingSecretProvider(InMemorySecretProvider())
        source = source_for(provider, name="cache")

        assert isinstance(source, CachedSource)
        assert source.secret_provider is provider
        assert source.cached_secret_provider is provider
        assert source.name == "cache"

    def test_plain_source(self) -> None:
        provider = InMemorySecretProvider()
        source = source_for(provider)

        assert isinstance(source, PlainSource)
        assert source.secret_provider is provider

    def test_base_source_cannot_be_instantiated(self) -> None:
        with pytest.raises(TypeError):
            SecretStoreSource()  # type: ignore[abstract]

    @pytest.mark.asyncio
    async def test_deferred_source_requires_resolver(self) -> None:
        async def factory(resolver: DependencyResolver) -> SecretProvider:
            return InMemorySecretProvider()

        with pytest.raises(ConfigurationError):
            await DeferredSource(factory).resolve(None)

    @pytest.mark.asyncio
    async def test_deferred_source_factory_must_produce_provider(self) -> None:
        async def factory(resolver: DependencyResolver) -> SecretProvider:
            return None  # type: ignore[return-value]

        with pytest.raises(ConfigurationError):
            await DeferredSource(factory, name="broken").resolve(_Resolver())


class TestBuilder:
    def test_add_provider_appends_in_order(self) -> None:
        builder = SecretStoreBuilder()
        first, second = InMemorySecretProvider(), InMemorySecretProvider()

        result = builder.add_provider(first).add_provider(second)

        assert result is builder
        assert [s.secret_provider for s in builder.sources] == [first, second]

    def test_add_provider_rejects_none(self) -> None:
        with pytest.raises(ValidationError):
            SecretStoreBuilder().add_provider(None)  # type: ignore[arg-type]

    def test_add_critical_error_is_idempotent(self) -> None:
        builder = SecretStoreBuilder()
        builder.add_critical_error(PermissionError).add_critical_error(PermissionError)

        assert builder.critical_errors == (PermissionError,)

    @pytest.mark.parametrize("error_type", [None, "PermissionError", 42, object])
    def test_add_critical_error_rejects_non_exception_types(self, error_type: Any) -> None:
        with pytest.raises(ValidationError):
            SecretStoreBuilder().add_critical_error(error_type)

    @pytest.mark.asyncio
    async def test_build_without_deferred_sources_needs_no_resolver(self) -> None:
        builder = SecretStoreBuilder().add_provider(InMemorySecretProvider({"Key": "v"}))
        builder.add_critical_error(PermissionError)

        store = await builder.build()

        assert isinstance(store, CompositeSecretProvider)
        assert store.critical_errors == (PermissionError,)
        assert await store.get_raw_secret("Key") == "v"

    @pytest.mark.asyncio
    async def test_build_resolves_deferred_sources_in_place(self) -> None:
        created = InMemorySecretProvider({"Key": "from-factory"})

        async def factory(resolver: DependencyResolver) -> SecretProvider:
            return await resolver.get(InMemorySecretProvider)

        first = InMemorySecretProvider()
        builder = SecretStoreBuilder().add_provider(first).add_provider_factory(factory)

        store = await builder.build(_Resolver(InMemorySecretProvider=created))

        assert store.providers == (first, created)
        assert await store.get_raw_secret("Key") == "from-factory"

    @pytest.mark.asyncio
    async def test_each_build_invokes_factories_again(self) -> None:
        calls: list[int] = []

        async def factory(resolver: DependencyResolver) -> SecretProvider:
            calls.append(1)
            return InMemorySecretProvider()

        builder = SecretStoreBuilder().add_provider_factory(factory)
        await builder.build(_Resolver())
        await builder.build(_Resolver())

        assert len(calls) == 2
