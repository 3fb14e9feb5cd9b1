"""Role-based authorization for composable secret stores."""

from vaultgate.domain.authorization import (
    AuthorizedCachedSecretProvider,
    AuthorizedSecretProvider,
    FixedRoleAuthorization,
    Role,
    RoleAuthorization,
    authorized_within,
)
from vaultgate.domain.secret.builder import SecretStoreBuilder
from vaultgate.domain.secret.model import CacheConfiguration, Secret
from vaultgate.domain.secret.port import CachedSecretProvider, SecretProvider
from vaultgate.domain.shared.error import AuthorizationError, InvalidRoleError, SecretNotFoundError

__all__ = [
    "AuthorizationError",
    "AuthorizedCachedSecretProvider",
    "AuthorizedSecretProvider",
    "CacheConfiguration",
    "CachedSecretProvider",
    "FixedRoleAuthorization",
    "InvalidRoleError",
    "Role",
    "RoleAuthorization",
    "Secret",
    "SecretNotFoundError",
    "SecretProvider",
    "SecretStoreBuilder",
    "authorized_within",
]
