"""Account administration: the reads and writes behind the admin surface.

Nothing here checks permissions; handlers call the AuthorizationGate first.
"""

import asyncio
import logging
from collections.abc import Sequence
from datetime import UTC, datetime

from rolegate.domain.auth.model.account import (
    Account,
    AccountChanges,
    Credential,
    NewAccount,
)
from rolegate.domain.auth.model.listing import (
    AccountFilter,
    DashboardStats,
    PageRequest,
    Pagination,
)
from rolegate.domain.auth.model.role import Role
from rolegate.domain.auth.model.value import AccountId
from rolegate.domain.auth.port.credential import CredentialHasher
from rolegate.domain.auth.port.repository import AccountRepository
from rolegate.domain.shared.error import ConflictError, NotFoundError, ValidationError
from rolegate.domain.shared.service import Service

logger = logging.getLogger(__name__)


class AccountAdminService(Service):
    _accounts: AccountRepository
    _hasher: CredentialHasher

    async def create_account(self, account: NewAccount, password: str) -> Account:
        """Create an account. Raises ConflictError if email/username/phone is taken."""
        conflicts = await self._accounts.find_conflicts(
            email=account.email,
            username=account.username,
            phone=account.phone,
        )
        if conflicts:
            raise ConflictError(
                f"Account already exists with the same {', '.join(conflicts)}",
                code="account_exists",
            )

        created = await self._accounts.create(account, await self._hash(password))
        logger.info("Account created: id=%s role=%s", created.id, created.role.name)
        return created

    async def get_account(self, account_id: AccountId) -> Account:
        account = await self._accounts.get(account_id)
        if account is None:
            raise NotFoundError(f"Account not found: {account_id}", code="account_not_found")
        return account

    async def list_accounts(
        self, filters: Sequence[AccountFilter], page: PageRequest
    ) -> tuple[list[Account], Pagination]:
        total = await self._accounts.count(filters)
        accounts = await self._accounts.find(filters, page)
        return accounts, Pagination(page=page.page, limit=page.limit, total=total)

    async def update_account(self, account_id: AccountId, changes: AccountChanges) -> Account:
        if changes.is_empty():
            raise ValidationError("No valid updates provided")
        updated = await self._accounts.update(account_id, changes)
        if updated is None:
            raise NotFoundError(f"Account not found: {account_id}", code="account_not_found")
        return updated

    async def delete_account(self, account_id: AccountId) -> None:
        """Soft-delete. Raises NotFoundError if missing or already deleted."""
        if not await self._accounts.soft_delete(account_id):
            raise NotFoundError(
                f"Account not found or already deleted: {account_id}",
                code="account_not_found",
            )
        logger.info("Account soft-deleted: id=%s", account_id)

    async def reset_password(self, account_id: AccountId, password: str) -> None:
        await self._accounts.set_credential(account_id, await self._hash(password))
        logger.info("Credential reset by admin: id=%s", account_id)

    async def change_role(self, account_id: AccountId, role: Role) -> Account:
        updated = await self._accounts.set_role(account_id, role)
        if updated is None:
            raise NotFoundError(f"Account not found: {account_id}", code="account_not_found")
        return updated

    async def dashboard_stats(self) -> DashboardStats:
        return await self._accounts.stats(datetime.now(UTC))

    async def _hash(self, password: str) -> Credential:
        # CPU-bound; keep it off the event loop
        return await asyncio.to_thread(self._hasher.hash, password)
