"""Cache configuration for cache-aware secret providers."""

from datetime import timedelta

from pydantic import field_validator

from vaultgate.domain.shared.model.value import ValueObject

DEFAULT_CACHE_DURATION = timedelta(minutes=5)


class CacheConfiguration(ValueObject):
    """How long a resolved secret stays cached before it is fetched again."""

    duration: timedelta = DEFAULT_CACHE_DURATION

    @field_validator("duration")
    @classmethod
    def _positive_duration(cls, value: timedelta) -> timedelta:
        if value <= timedelta(0):
            raise ValueError("cache duration must be positive")
        return value

    @classmethod
    def default(cls) -> "CacheConfiguration":
        return cls()
