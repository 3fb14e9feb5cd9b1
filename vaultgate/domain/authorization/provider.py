"""Secret providers that only delegate when the current context holds a role.

AuthorizedSecretProvider and AuthorizedCachedSecretProvider decorate an
existing provider. Every call is first checked against a RoleAuthorization;
denied calls raise AuthorizationError and never reach the wrapped provider,
so a denied caller cannot learn whether the secret exists.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from vaultgate.domain.authorization.port import RoleAuthorization
from vaultgate.domain.authorization.role import Role, validate_role
from vaultgate.domain.secret.model import CacheConfiguration, Secret
from vaultgate.domain.secret.port import CachedSecretProvider, SecretProvider
from vaultgate.domain.shared.error import AuthorizationError, require, require_not_blank

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AuthorizedSecretProvider:
    """Filters secret calls through a role check before delegating."""

    def __init__(
        self,
        permitted_role: Role,
        authorization: RoleAuthorization,
        secret_provider: SecretProvider,
    ) -> None:
        """Create the authorized provider.

        Args:
            permitted_role: The role required to access ``secret_provider``.
            authorization: Decides whether ``permitted_role`` is authorized.
            secret_provider: The provider that actually fetches the secrets.

        Raises:
            InvalidRoleError: If ``permitted_role`` is not a defined Role.
            ValidationError: If ``authorization`` or ``secret_provider`` is missing.
        """
        self._permitted_role = validate_role(permitted_role, field="permitted_role")
        require(
            authorization,
            "authorization",
            "Requires an instance to determine if the current role is considered authorized",
        )
        require(
            secret_provider,
            "secret_provider",
            "Requires an instance to access the authorized secrets",
        )
        self._authorization = authorization
        self._secret_provider = secret_provider

    @property
    def permitted_role(self) -> Role:
        return self._permitted_role

    async def get_secret(self, secret_name: str) -> Secret | None:
        require_not_blank(
            secret_name, "secret_name", "Requires a non-blank secret name to access the secret"
        )
        return await self._when_authorized(lambda: self._secret_provider.get_secret(secret_name))

    async def get_raw_secret(self, secret_name: str) -> str | None:
        require_not_blank(
            secret_name, "secret_name", "Requires a non-blank secret name to access the secret"
        )
        return await self._when_authorized(
            lambda: self._secret_provider.get_raw_secret(secret_name)
        )

    async def _when_authorized(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run ``operation`` only when the permitted role is authorized.

        Operations without a result are coroutines returning None and go
        through the same path. On denial the operation is never started.

        Raises:
            AuthorizationError: If the current context does not hold the permitted role.
        """
        require(operation, "operation", "Requires an operation to run when authorized")

        if not await self._authorization.is_authorized(self._permitted_role):
            logger.warning("Secret access denied: required_role=%s", self._permitted_role.name)
            raise AuthorizationError(
                f"Accessing secret is not permitted for role '{self._permitted_role.name}'"
            )

        logger.info("Secret access allowed: required_role=%s", self._permitted_role.name)
        return await operation()


class AuthorizedCachedSecretProvider(AuthorizedSecretProvider):
    """Role-checked decorator for cache-aware providers.

    Cache bypass and invalidation go through the same role check. The cache
    configuration is exposed as-is since it holds no secret material.
    """

    def __init__(
        self,
        permitted_role: Role,
        authorization: RoleAuthorization,
        cached_secret_provider: CachedSecretProvider,
    ) -> None:
        super().__init__(permitted_role, authorization, cached_secret_provider)
        self._cached_secret_provider = cached_secret_provider

    @property
    def cache_configuration(self) -> CacheConfiguration:
        return self._cached_secret_provider.cache_configuration

    async def get_secret(self, secret_name: str, ignore_cache: bool = False) -> Secret | None:
        require_not_blank(
            secret_name, "secret_name", "Requires a non-blank secret name to access the secret"
        )
        return await self._when_authorized(
            lambda: self._cached_secret_provider.get_secret(secret_name, ignore_cache=ignore_cache)
        )

    async def get_raw_secret(self, secret_name: str, ignore_cache: bool = False) -> str | None:
        require_not_blank(
            secret_name, "secret_name", "Requires a non-blank secret name to access the secret"
        )
        return await self._when_authorized(
            lambda: self._cached_secret_provider.get_raw_secret(
                secret_name, ignore_cache=ignore_cache
            )
        )

    async def invalidate_secret(self, secret_name: str) -> None:
        require_not_blank(
            secret_name, "secret_name", "Requires a non-blank secret name to invalidate the secret"
        )
        await self._when_authorized(
            lambda: self._cached_secret_provider.invalidate_secret(secret_name)
        )
