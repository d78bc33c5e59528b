from .account import AccountAdminService
from .authorization import AuthorizationGate
from .token import TokenService

__all__ = ["AccountAdminService", "AuthorizationGate", "TokenService"]
