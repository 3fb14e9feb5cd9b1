"""Dependency resolver port used by deferred secret sources."""

from abc import abstractmethod
from typing import Any, Protocol, TypeVar

from vaultgate.domain.shared.port import Port

T = TypeVar("T")


class DependencyResolver(Port, Protocol):
    """Resolves registered dependencies by type.

    ``dishka.AsyncContainer`` satisfies this port.
    """

    @abstractmethod
    async def get(self, dependency_type: type[T], *args: Any, **kwargs: Any) -> T: ...
