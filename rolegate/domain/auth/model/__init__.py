"""Auth domain models."""

from .account import Account, AccountChanges, Credential, NewAccount
from .identity import Anonymous, Identity
from .principal import Principal
from .role import MAX_ROLE_LEVEL, MIN_PRIVILEGED_ROLE, MIN_ROLE_LEVEL, Role, is_valid_role_level
from .value import AccountId, AccountStatus

__all__ = [
    "MAX_ROLE_LEVEL",
    "MIN_PRIVILEGED_ROLE",
    "MIN_ROLE_LEVEL",
    "Account",
    "AccountChanges",
    "AccountId",
    "AccountStatus",
    "Anonymous",
    "Credential",
    "Identity",
    "NewAccount",
    "Principal",
    "Role",
    "is_valid_role_level",
]
