from dishka import AsyncContainer, make_async_container

from rolegate.config import Config
from rolegate.domain.auth.util.di import AuthProvider
from rolegate.infrastructure.auth import AuthInfraProvider
from rolegate.infrastructure.persistence import PersistenceProvider
from rolegate.util.di.scope import Scope


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    return make_async_container(
        PersistenceProvider(),
        AuthProvider(),
        AuthInfraProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
