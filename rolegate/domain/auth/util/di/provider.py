"""DI provider for auth domain."""

import logging

import jwt
from dishka import from_context, provide
from starlette.requests import Request

from rolegate.config import AdminConfig, Config
from rolegate.domain.auth.command.change_role import ChangeRoleHandler
from rolegate.domain.auth.command.create_account import CreateAccountHandler
from rolegate.domain.auth.command.delete_account import DeleteAccountHandler
from rolegate.domain.auth.command.reset_password import ResetPasswordHandler
from rolegate.domain.auth.command.update_account import UpdateAccountHandler
from rolegate.domain.auth.model.identity import Anonymous, Identity
from rolegate.domain.auth.port.credential import CredentialHasher
from rolegate.domain.auth.port.repository import AccountRepository
from rolegate.domain.auth.query.dashboard_stats import GetDashboardStatsHandler
from rolegate.domain.auth.query.get_account import GetAccountHandler
from rolegate.domain.auth.query.list_accounts import ListAccountsHandler
from rolegate.domain.auth.query.search_accounts import SearchAccountsHandler
from rolegate.domain.auth.service.account import AccountAdminService
from rolegate.domain.auth.service.authorization import AuthorizationGate
from rolegate.domain.auth.service.token import TokenService
from rolegate.util.di.base import Provider
from rolegate.util.di.scope import Scope

logger = logging.getLogger(__name__)


class AuthProvider(Provider):
    """DI provider for auth domain services and handlers."""

    request = from_context(provides=Request, scope=Scope.UOW)

    # Command Handlers
    create_account_handler = provide(CreateAccountHandler, scope=Scope.UOW)
    update_account_handler = provide(UpdateAccountHandler, scope=Scope.UOW)
    delete_account_handler = provide(DeleteAccountHandler, scope=Scope.UOW)
    reset_password_handler = provide(ResetPasswordHandler, scope=Scope.UOW)
    change_role_handler = provide(ChangeRoleHandler, scope=Scope.UOW)

    # Query Handlers
    get_account_handler = provide(GetAccountHandler, scope=Scope.UOW)
    list_accounts_handler = provide(ListAccountsHandler, scope=Scope.UOW)
    search_accounts_handler = provide(SearchAccountsHandler, scope=Scope.UOW)
    dashboard_stats_handler = provide(GetDashboardStatsHandler, scope=Scope.UOW)

    @provide(scope=Scope.APP)
    def get_admin_config(self, config: Config) -> AdminConfig:
        return config.admin

    @provide(scope=Scope.APP)
    def get_token_service(self, config: Config) -> TokenService:
        """Provide TokenService."""
        return TokenService(_config=config.auth.jwt)

    @provide(scope=Scope.UOW)
    def get_authorization_gate(
        self, config: Config, accounts: AccountRepository
    ) -> AuthorizationGate:
        return AuthorizationGate(
            _accounts=accounts,
            _lookup_timeout=config.auth.lookup_timeout,
        )

    @provide(scope=Scope.UOW)
    def get_account_admin_service(
        self, accounts: AccountRepository, hasher: CredentialHasher
    ) -> AccountAdminService:
        return AccountAdminService(_accounts=accounts, _hasher=hasher)

    @provide(scope=Scope.UOW)
    def get_identity(self, request: Request, token_service: TokenService) -> Identity:
        """Resolve Identity from the bearer token in the Authorization header.

        Returns Anonymous for unauthenticated requests or unusable tokens, a
        Principal carrying the token's account id and role otherwise.
        """
        auth_header = request.headers.get("Authorization")
        if not auth_header or not auth_header.startswith("Bearer "):
            return Anonymous()

        token = auth_header[7:]  # Remove "Bearer " prefix

        try:
            principal = token_service.principal_from_token(token)
        except jwt.InvalidTokenError as e:
            logger.debug("Rejected bearer token: %s", e)
            return Anonymous()

        logger.debug(
            "Identity resolved: account_id=%s, role=%s",
            principal.account_id,
            principal.role.name,
        )
        return principal
