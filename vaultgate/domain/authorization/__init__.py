"""Role-based authorization for secret providers."""

from .builder import authorized_within
from .fixed import FixedRoleAuthorization, admin, reader, writer
from .port import RoleAuthorization
from .provider import AuthorizedCachedSecretProvider, AuthorizedSecretProvider
from .role import Role, validate_role

__all__ = [
    "AuthorizedCachedSecretProvider",
    "AuthorizedSecretProvider",
    "FixedRoleAuthorization",
    "Role",
    "RoleAuthorization",
    "admin",
    "authorized_within",
    "reader",
    "validate_role",
    "writer",
]
