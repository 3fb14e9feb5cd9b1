"""Custom Dishka scopes for vaultgate."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """vaultgate dependency injection scopes.

    - APP: Application lifetime (singletons). The secret store and the role
      authorization live here.
    """

    APP = new_scope("APP")
