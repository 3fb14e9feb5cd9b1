"""Role-based authorization for sources registered on a SecretStoreBuilder.

``authorized_within`` runs a registration callback against the builder,
finds the sources that callback added and swaps each of them, at the same
position, for a deferred source that wraps the original provider in an
authorized decorator. The RoleAuthorization is only resolved when the
secret store is built, so the registration callback never has to know
about authorization.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import logfire

from vaultgate.domain.authorization.port import RoleAuthorization
from vaultgate.domain.authorization.provider import (
    AuthorizedCachedSecretProvider,
    AuthorizedSecretProvider,
)
from vaultgate.domain.authorization.role import Role, validate_role
from vaultgate.domain.secret.builder import (
    CachedSource,
    DeferredSource,
    PlainSource,
    SecretStoreBuilder,
    SecretStoreSource,
)
from vaultgate.domain.secret.port import CachedSecretProvider, DependencyResolver, SecretProvider
from vaultgate.domain.shared.error import (
    AuthorizationError,
    ConfigurationError,
    ValidationError,
    require,
)

logger = logging.getLogger(__name__)


def authorized_within(
    builder: SecretStoreBuilder,
    role: Role,
    add_sources: Callable[[SecretStoreBuilder], object],
) -> SecretStoreBuilder:
    """Authorize the sources added by ``add_sources`` to be within ``role``.

    Sources registered before the call are left untouched. If the callback
    adds nothing, the builder's sources stay as they are.

    Args:
        builder: The builder to register the authorized sources on.
        role: The role required to access the sources added by ``add_sources``.
        add_sources: Callback that adds the sources to restrict.

    Returns:
        The same builder, for chaining.

    Raises:
        InvalidRoleError: If ``role`` is not a defined Role.
        ValidationError: If ``builder`` or ``add_sources`` is missing.
    """
    role = validate_role(role)
    require(
        builder, "builder", "Requires a secret store builder to add the role-based authorization"
    )
    if add_sources is None or not callable(add_sources):
        raise ValidationError(
            "Requires a function to make a set of secret sources only available "
            "within a specific role",
            field="add_sources",
        )

    with logfire.span("AuthorizeSecretSources", role=role.name):
        builder.add_critical_error(AuthorizationError)

        before = {source.source_id for source in builder.sources}
        try:
            add_sources(builder)
        finally:
            # Sources added before a failing callback are still restricted
            replaced = 0
            for index, source in enumerate(builder.sources):
                if source.source_id in before:
                    continue
                builder.sources[index] = _authorized_source(source, role)
                replaced += 1

        logger.info("Authorized secret sources: role=%s count=%d", role.name, replaced)

    return builder


def _authorized_source(source: SecretStoreSource, role: Role) -> DeferredSource:
    async def create(resolver: DependencyResolver) -> SecretProvider:
        authorization = await resolver.get(RoleAuthorization)
        return await _create_authorized_provider(source, role, authorization, resolver)

    return DeferredSource(create, name=source.name)


async def _create_authorized_provider(
    source: SecretStoreSource,
    role: Role,
    authorization: RoleAuthorization,
    resolver: DependencyResolver,
) -> SecretProvider:
    match source:
        case CachedSource(cached_secret_provider=provider):
            return AuthorizedCachedSecretProvider(role, authorization, provider)
        case PlainSource(secret_provider=provider):
            return AuthorizedSecretProvider(role, authorization, provider)
        case DeferredSource():
            # Capability is only known once the inner factory has run.
            provider = await source.resolve(resolver)
            if isinstance(provider, CachedSecretProvider):
                return AuthorizedCachedSecretProvider(role, authorization, provider)
            return AuthorizedSecretProvider(role, authorization, provider)
        case _:
            raise ConfigurationError(f"Unsupported secret source: {type(source).__name__}")
