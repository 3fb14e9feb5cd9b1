"""Role hierarchy for secret authorization."""

from enum import IntEnum

from vaultgate.domain.shared.error import InvalidRoleError


class Role(IntEnum):
    """Permission levels encoded as bit patterns.

    Each higher role sets every bit of the roles below it, so a role
    satisfies another when it holds all of the other role's bits.
    """

    READER = 0b001
    WRITER = 0b011
    ADMIN = 0b111

    def satisfies(self, permitted_role: "Role") -> bool:
        """Check if this role holds every bit of ``permitted_role``."""
        return (self & permitted_role) == permitted_role


def validate_role(value: object, field: str = "role") -> Role:
    """Convert ``value`` to a Role, raising InvalidRoleError for anything else."""
    if isinstance(value, Role):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return Role(value)
        except ValueError:
            pass
    raise InvalidRoleError(
        f"Requires the role to be one of {', '.join(r.name for r in Role)}, got {value!r}",
        field=field,
    )
