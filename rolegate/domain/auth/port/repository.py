"""Repository port for Account persistence."""

from abc import abstractmethod
from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from rolegate.domain.auth.model.account import Account, AccountChanges, Credential, NewAccount
from rolegate.domain.auth.model.listing import AccountFilter, DashboardStats, PageRequest
from rolegate.domain.auth.model.role import Role
from rolegate.domain.auth.model.value import AccountId
from rolegate.domain.shared.port import Port


class AccountRepository(Port, Protocol):
    """Repository for Account persistence.

    Implementations raise StorageUnavailableError when the backing store fails.
    """

    @abstractmethod
    async def get_role(self, account_id: AccountId) -> Role | None:
        """Return the account's current role, or None if it does not exist."""
        ...

    @abstractmethod
    async def get(self, account_id: AccountId) -> Account | None:
        """Get an account by id."""
        ...

    @abstractmethod
    async def find_conflicts(self, *, email: str, username: str, phone: str) -> list[str]:
        """Return the names of unique fields already taken by another account."""
        ...

    @abstractmethod
    async def create(self, account: NewAccount, credential: Credential) -> Account:
        """Insert an account with its credential and return it with its id."""
        ...

    @abstractmethod
    async def update(self, account_id: AccountId, changes: AccountChanges) -> Account | None:
        """Apply a partial update. Returns None if the account does not exist."""
        ...

    @abstractmethod
    async def set_role(self, account_id: AccountId, role: Role) -> Account | None:
        """Write a new role. Returns None if the account does not exist."""
        ...

    @abstractmethod
    async def soft_delete(self, account_id: AccountId) -> bool:
        """Mark the account deleted. False if missing or already deleted."""
        ...

    @abstractmethod
    async def set_credential(self, account_id: AccountId, credential: Credential) -> None:
        """Replace the stored credential, creating it when absent."""
        ...

    @abstractmethod
    async def find(self, filters: Sequence[AccountFilter], page: PageRequest) -> list[Account]:
        """List accounts matching every filter, newest first."""
        ...

    @abstractmethod
    async def count(self, filters: Sequence[AccountFilter]) -> int:
        """Count accounts matching every filter."""
        ...

    @abstractmethod
    async def stats(self, now: datetime) -> DashboardStats:
        """Aggregate dashboard counters relative to ``now``."""
        ...
