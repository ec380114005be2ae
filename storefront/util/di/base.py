from dishka import Provider as DishkaProvider

from storefront.util.di.scope import Scope


class Provider(DishkaProvider):
    """Base for Storefront DI providers. Unscoped factories default to UOW."""

    scope = Scope.UOW
