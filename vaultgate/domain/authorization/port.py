"""Authorization port: decides whether a role is authorized in the current context."""

from abc import abstractmethod
from typing import Protocol, runtime_checkable

from vaultgate.domain.authorization.role import Role
from vaultgate.domain.shared.port import Port


@runtime_checkable
class RoleAuthorization(Port, Protocol):
    """Determines whether a permitted role is authorized in this context.

    Implementations may consult a remote policy service, which is why the
    check is a coroutine.
    """

    @abstractmethod
    async def is_authorized(self, permitted_role: Role) -> bool:
        """Check if callers in this context hold ``permitted_role``.

        Args:
            permitted_role: The role required by the guarded operation.

        Returns:
            True if the current context satisfies ``permitted_role``.

        Raises:
            InvalidRoleError: If ``permitted_role`` is not a defined Role.
        """
        ...
