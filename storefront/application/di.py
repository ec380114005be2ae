from dishka import AsyncContainer, from_context, make_async_container

from storefront.config import Config
from storefront.domain.customer.util.di import CustomerProvider
from storefront.infrastructure.auth import AuthInfraProvider
from storefront.infrastructure.persistence import PersistenceProvider
from storefront.util.di.base import Provider
from storefront.util.di.scope import Scope


class ConfigProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)


def create_container(config: Config | None = None) -> AsyncContainer:
    if config is None:
        # Pydantic Settings populates from env vars at runtime
        config = Config()  # type: ignore[call-arg]

    return make_async_container(
        ConfigProvider(),
        PersistenceProvider(),
        CustomerProvider(),
        AuthInfraProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
