"""Auth domain commands (admin write surface)."""

from .change_role import ChangeRole, ChangeRoleHandler, ChangeRoleResult
from .create_account import CreateAccount, CreateAccountHandler, CreateAccountResult
from .delete_account import DeleteAccount, DeleteAccountHandler, DeleteAccountResult
from .reset_password import ResetPassword, ResetPasswordHandler, ResetPasswordResult
from .update_account import UpdateAccount, UpdateAccountHandler, UpdateAccountResult

__all__ = [
    "ChangeRole",
    "ChangeRoleHandler",
    "ChangeRoleResult",
    "CreateAccount",
    "CreateAccountHandler",
    "CreateAccountResult",
    "DeleteAccount",
    "DeleteAccountHandler",
    "DeleteAccountResult",
    "ResetPassword",
    "ResetPasswordHandler",
    "ResetPasswordResult",
    "UpdateAccount",
    "UpdateAccountHandler",
    "UpdateAccountResult",
]
