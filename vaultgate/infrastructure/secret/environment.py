"""Secret provider reading environment variables."""

import os

from vaultgate.domain.secret.model import Secret


class EnvironmentSecretProvider:
    """Load secrets directly from environment variables."""

    def __init__(self, prefix: str | None = None) -> None:
        self._prefix = prefix or ""

    async def get_secret(self, secret_name: str) -> Secret | None:
        value = await self.get_raw_secret(secret_name)
        return Secret(value=value) if value is not None else None

    async def get_raw_secret(self, secret_name: str) -> str | None:
        return os.environ.get(f"{self._prefix}{secret_name}")
