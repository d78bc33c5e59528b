"""DI provider for auth infrastructure."""

from dishka import provide

from rolegate.config import Config
from rolegate.domain.auth.port.credential import CredentialHasher
from rolegate.infrastructure.auth.hasher import BcryptCredentialHasher
from rolegate.util.di.base import Provider
from rolegate.util.di.scope import Scope


class AuthInfraProvider(Provider):
    """DI provider for auth infrastructure adapters."""

    @provide(scope=Scope.APP)
    def get_credential_hasher(self, config: Config) -> CredentialHasher:
        return BcryptCredentialHasher(rounds=config.auth.password_hash_rounds)
