from dishka import Provider as DishkaProvider

from vaultgate.util.di.scope import Scope


class Provider(DishkaProvider):
    """Base class for vaultgate DI providers. Defaults to application scope."""

    scope = Scope.APP
