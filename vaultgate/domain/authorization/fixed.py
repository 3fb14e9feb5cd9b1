"""FixedRoleAuthorization - a role authorization with one fixed current role."""

import logging

from vaultgate.domain.authorization.role import Role, validate_role

logger = logging.getLogger(__name__)


class FixedRoleAuthorization:
    """Considers the context to always hold the role given at construction."""

    def __init__(self, current_role: Role) -> None:
        self._current_role = validate_role(current_role, field="current_role")

    @property
    def current_role(self) -> Role:
        return self._current_role

    async def is_authorized(self, permitted_role: Role) -> bool:
        permitted_role = validate_role(permitted_role, field="permitted_role")
        authorized = self._current_role.satisfies(permitted_role)
        logger.debug(
            "Role check: current=%s permitted=%s authorized=%s",
            self._current_role.name,
            permitted_role.name,
            authorized,
        )
        return authorized

    def __repr__(self) -> str:
        return f"FixedRoleAuthorization({self._current_role.name})"


def reader() -> FixedRoleAuthorization:
    """Authorization for a context within the READER role."""
    return FixedRoleAuthorization(Role.READER)


def writer() -> FixedRoleAuthorization:
    """Authorization for a context within the WRITER role."""
    return FixedRoleAuthorization(Role.WRITER)


def admin() -> FixedRoleAuthorization:
    """Authorization for a context within the ADMIN role."""
    return FixedRoleAuthorization(Role.ADMIN)
