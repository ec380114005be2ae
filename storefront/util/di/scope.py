"""Custom Dishka scopes for Storefront."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """Storefront dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Application lifetime (config, engine, token service)
    - UOW: Unit of Work, one per HTTP request
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
