"""Secret value returned by providers."""

from datetime import datetime

from vaultgate.domain.shared.model.value import ValueObject


class Secret(ValueObject):
    """A resolved secret.

    Providers that only know the raw value leave ``version`` and
    ``expires_on`` unset.
    """

    value: str
    version: str | None = None
    expires_on: datetime | None = None

    def __repr__(self) -> str:
        return f"Secret(version={self.version!r}, expires_on={self.expires_on!r})"

    __str__ = __repr__
