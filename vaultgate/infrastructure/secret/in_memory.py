"""In-memory secret provider."""

from collections.abc import Mapping

from vaultgate.domain.secret.model import Secret
from vaultgate.domain.shared.error import ValidationError


class InMemorySecretProvider:
    """Secret provider backed by a dictionary.

    Useful for tests and for local development where secrets are supplied
    at startup. Unknown names resolve to None.
    """

    def __init__(self, secrets: Mapping[str, str] | None = None, **kwargs: str) -> None:
        """Initialize provider with optional initial secrets.

        Args:
            secrets: Optional mapping of secret names to values
            **kwargs: Additional secrets given as keyword arguments
        """
        merged = {**(secrets or {}), **kwargs}
        if any(not isinstance(name, str) for name in merged):
            raise ValidationError("Requires all secret names to be strings", field="secrets")
        self._secrets: dict[str, str] = merged

    async def get_secret(self, secret_name: str) -> Secret | None:
        value = await self.get_raw_secret(secret_name)
        if value is None:
            return None
        return Secret(value=value)

    async def get_raw_secret(self, secret_name: str) -> str | None:
        return self._secrets.get(secret_name)

    def set_secret(self, secret_name: str, value: str) -> None:
        self._secrets[secret_name] = value
