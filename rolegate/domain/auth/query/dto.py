"""Read-side representations of accounts shared by admin handlers."""

from datetime import datetime

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from rolegate.domain.auth.model.account import Account
from rolegate.domain.auth.model.role import Role
from rolegate.domain.auth.model.value import AccountId
from rolegate.domain.shared.error import ValidationError


class RoleDTO(BaseModel):
    role: str  # Tier label, e.g. "Super Admin"
    role_level: int

    @classmethod
    def from_role(cls, role: Role) -> "RoleDTO":
        return cls(role=role.label, role_level=int(role))


class AccountDTO(BaseModel):
    id: int
    firstname: str
    lastname: str
    username: str
    email: str
    phone: str
    role: str
    role_level: int
    email_verified: bool
    phone_verified: bool
    account_status: str
    created_at: datetime
    updated_at: datetime | None

    @classmethod
    def from_account(cls, account: Account) -> "AccountDTO":
        return cls(
            id=int(account.id),
            firstname=account.firstname,
            lastname=account.lastname,
            username=account.username,
            email=account.email,
            phone=account.phone,
            role=account.role.label,
            role_level=int(account.role),
            email_verified=account.email_verified,
            phone_verified=account.phone_verified,
            account_status=account.status.value,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )


class PaginationDTO(BaseModel):
    page: int
    limit: int
    total_users: int
    total_pages: int


def to_account_id(value: int) -> AccountId:
    """Wrap a raw id, reporting bad input as a domain ValidationError."""
    try:
        return AccountId(value)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid account id: {value}", field="account_id") from e
