"""Value objects for the auth domain."""

import re
from enum import StrEnum

from pydantic import RootModel, field_validator

PHONE_PATTERN = re.compile(r"^\d{10,}$")
USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")


class AccountId(RootModel[int]):
    """Unique identifier for an Account (database-assigned integer)."""

    @field_validator("root")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Invalid account id: {v}")
        return v

    def __int__(self) -> int:
        return self.root

    def __str__(self) -> str:
        return str(self.root)

    def __hash__(self) -> int:
        return hash(self.root)


class AccountStatus(StrEnum):
    """Lifecycle status of an account. ``DELETED`` is a soft delete."""

    ACTIVE = "active"
    PENDING = "pending"
    SUSPENDED = "suspended"
    LOCKED = "locked"
    DELETED = "deleted"
