"""Account aggregate: a stored principal managed through the admin surface."""

from datetime import UTC, datetime

from pydantic import BaseModel

from rolegate.domain.auth.model.role import Role
from rolegate.domain.auth.model.value import AccountId, AccountStatus
from rolegate.domain.shared.model.aggregate import Aggregate
from rolegate.domain.shared.model.value import ValueObject


class Account(Aggregate):
    """An account subject to authorization decisions.

    Invariants:
    - `id` is assigned by the store and immutable
    - `role` is always inside the closed range [1, 5]
    """

    id: AccountId
    firstname: str
    lastname: str
    username: str
    email: str
    phone: str
    role: Role
    status: AccountStatus
    email_verified: bool = False
    phone_verified: bool = False
    created_at: datetime
    updated_at: datetime | None = None


class NewAccount(ValueObject):
    """Fields for an account that has not been stored yet."""

    firstname: str
    lastname: str
    username: str
    email: str
    phone: str
    role: Role
    status: AccountStatus = AccountStatus.ACTIVE
    email_verified: bool = False
    phone_verified: bool = False
    created_at: datetime

    @classmethod
    def create(
        cls,
        *,
        firstname: str,
        lastname: str,
        username: str,
        email: str,
        phone: str,
        role: Role,
    ) -> "NewAccount":
        return cls(
            firstname=firstname,
            lastname=lastname,
            username=username,
            email=email,
            phone=phone,
            role=role,
            created_at=datetime.now(UTC),
        )


class AccountChanges(BaseModel):
    """Partial update of an account's status and verification flags."""

    status: AccountStatus | None = None
    email_verified: bool | None = None
    phone_verified: bool | None = None

    def is_empty(self) -> bool:
        return not self.model_dump(exclude_none=True)


class Credential(ValueObject):
    """Salted credential hash as produced by a CredentialHasher."""

    salted_hash: str
    salt: str
