"""Tests for AuthorizedCachedSecretProvider."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from vaultgate.domain.authorization.fixed import FixedRoleAuthorization
from vaultgate.domain.authorization.provider import AuthorizedCachedSecretProvider
from vaultgate.domain.authorization.role import Role
from vaultgate.domain.secret.model import CacheConfiguration, Secret
from vaultgate.domain.secret.port import CachedSecretProvider
from vaultgate.domain.secret.service import CachingSecretProvider
from vaultgate.domain.shared.error import AuthorizationError, ValidationError
from vaultgate.infrastructure.secret import InMemorySecretProvider


def _make_cached_probe() -> AsyncMock:
    probe = AsyncMock(spec=CachingSecretProvider)
    probe.get_secret.return_value = Secret(value="cached-value")
    probe.get_raw_secret.return_value = "cached-value"
    probe.cache_configuration = CacheConfiguration(duration=timedelta(seconds=42))
    return probe


def _make_provider(
    permitted: Role, current: Role, probe: CachedSecretProvider
) -> AuthorizedCachedSecretProvider:
    return AuthorizedCachedSecretProvider(permitted, FixedRoleAuthorization(current), probe)


class TestIgnoreCacheForwarding:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("ignore_cache", [True, False])
    async def test_get_secret_forwards_ignore_cache(self, ignore_cache: bool) -> None:
        probe = _make_cached_probe()
        provider = _make_provider(Role.WRITER, Role.ADMIN, probe)

        assert await provider.get_secret("Name", ignore_cache=ignore_cache) == Secret(
            value="cached-value"
        )
        probe.get_secret.assert_awaited_once_with("Name", ignore_cache=ignore_cache)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("ignore_cache", [True, False])
    async def test_get_raw_secret_forwards_ignore_cache(self, ignore_cache: bool) -> None:
        probe = _make_cached_probe()
        provider = _make_provider(Role.READER, Role.READER, probe)

        assert await provider.get_raw_secret("Name", ignore_cache=ignore_cache) == "cached-value"
        probe.get_raw_secret.assert_awaited_once_with("Name", ignore_cache=ignore_cache)

    @pytest.mark.asyncio
    async def test_default_does_not_bypass_cache(self) -> None:
        probe = _make_cached_probe()
        provider = _make_provider(Role.READER, Role.READER, probe)

        await provider.get_raw_secret("Name")
        probe.get_raw_secret.assert_awaited_once_with("Name", ignore_cache=False)


class TestDenied:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("ignore_cache", [True, False])
    async def test_denied_never_calls_provider(self, ignore_cache: bool) -> None:
        probe = _make_cached_probe()
        provider = _make_provider(Role.ADMIN, Role.WRITER, probe)

        with pytest.raises(AuthorizationError):
            await provider.get_secret("Name", ignore_cache=ignore_cache)
        with pytest.raises(AuthorizationError):
            await provider.get_raw_secret("Name", ignore_cache=ignore_cache)

        probe.get_secret.assert_not_awaited()
        probe.get_raw_secret.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_denied_invalidation_does_not_evict(self) -> None:
        probe = _make_cached_probe()
        provider = _make_provider(Role.WRITER, Role.READER, probe)

        with pytest.raises(AuthorizationError):
            await provider.invalidate_secret("Name")
        probe.invalidate_secret.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_repeated_denied_calls_leave_cache_untouched(self) -> None:
        backing = InMemorySecretProvider({"Name": "v1"})
        cache = CachingSecretProvider(backing)
        assert await cache.get_raw_secret("Name") == "v1"
        backing.set_secret("Name", "v2")

        provider = _make_provider(Role.ADMIN, Role.READER, cache)
        for _ in range(3):
            with pytest.raises(AuthorizationError):
                await provider.invalidate_secret("Name")
            with pytest.raises(AuthorizationError):
                await provider.get_raw_secret("Name", ignore_cache=True)

        # Still the cached value: nothing was evicted or refreshed
        assert await cache.get_raw_secret("Name") == "v1"


class TestAllowed:
    @pytest.mark.asyncio
    async def test_invalidation_forwarded_when_authorized(self) -> None:
        probe = _make_cached_probe()
        provider = _make_provider(Role.WRITER, Role.WRITER, probe)

        assert await provider.invalidate_secret("Name") is None
        probe.invalidate_secret.assert_awaited_once_with("Name")

    @pytest.mark.asyncio
    async def test_invalidation_evicts_real_cache(self) -> None:
        backing = InMemorySecretProvider({"Name": "v1"})
        cache = CachingSecretProvider(backing)
        provider = _make_provider(Role.READER, Role.ADMIN, cache)

        assert await provider.get_raw_secret("Name") == "v1"
        backing.set_secret("Name", "v2")
        assert await provider.get_raw_secret("Name") == "v1"

        await provider.invalidate_secret("Name")
        assert await provider.get_raw_secret("Name") == "v2"


class TestCacheConfiguration:
    def test_configuration_passthrough(self) -> None:
        probe = _make_cached_probe()
        provider = _make_provider(Role.ADMIN, Role.ADMIN, probe)

        assert provider.cache_configuration is probe.cache_configuration

    def test_configuration_not_gated(self) -> None:
        probe = _make_cached_probe()
        authorization = AsyncMock(spec=FixedRoleAuthorization)
        provider = AuthorizedCachedSecretProvider(Role.ADMIN, authorization, probe)

        assert provider.cache_configuration.duration == timedelta(seconds=42)
        authorization.is_authorized.assert_not_awaited()

    def test_satisfies_cached_provider_port(self) -> None:
        provider = _make_provider(Role.READER, Role.READER, _make_cached_probe())
        assert isinstance(provider, CachedSecretProvider)


class TestArgumentValidation:
    @pytest.mark.asyncio
    async def test_blank_name_rejected_for_invalidation(self) -> None:
        probe = _make_cached_probe()
        provider = _make_provider(Role.READER, Role.ADMIN, probe)

        with pytest.raises(ValidationError):
            await provider.invalidate_secret("  ")
        probe.invalidate_secret.assert_not_awaited()

    def test_missing_cached_provider_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AuthorizedCachedSecretProvider(Role.READER, FixedRoleAuthorization(Role.READER), None)  # type: ignore[arg-type]
