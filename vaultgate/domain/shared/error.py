"""Error hierarchy for the secret store.

Every error carries a human readable ``message`` and a machine readable
``code`` so callers can branch on the failure without parsing text.
"""


class SecretStoreError(Exception):
    """Base for all errors raised by vaultgate."""

    default_code = "secret_store_error"

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code


class DomainError(SecretStoreError):
    """A rule of the secret store domain was violated."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """An argument crossing a public boundary is missing or malformed."""

    default_code = "invalid_argument"

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message, code=code)
        self.field = field


class InvalidRoleError(ValidationError):
    """A role value outside the defined set of roles."""

    default_code = "invalid_role"


class AuthorizationError(DomainError):
    """The current role is not sufficient for the requested operation."""

    default_code = "access_denied"


class NotFoundError(DomainError):
    default_code = "not_found"


class SecretNotFoundError(NotFoundError):
    """No configured provider could resolve the secret."""

    default_code = "secret_not_found"

    def __init__(self, secret_name: str, *, code: str | None = None) -> None:
        super().__init__(f"No secret found with name '{secret_name}'", code=code)
        self.secret_name = secret_name


class ConfigurationError(SecretStoreError):
    default_code = "configuration_error"


def require(value: object, field: str, message: str) -> None:
    """Raise ValidationError when ``value`` is None."""
    if value is None:
        raise ValidationError(message, field=field)


def require_not_blank(value: str | None, field: str, message: str) -> None:
    """Raise ValidationError when ``value`` is None, empty or whitespace."""
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValidationError(message, field=field)
