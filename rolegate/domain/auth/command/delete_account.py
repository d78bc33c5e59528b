"""DeleteAccount command and handler (soft delete)."""

import logfire

from rolegate.domain.auth.authorization.decision import Operation
from rolegate.domain.auth.model.identity import Identity
from rolegate.domain.auth.model.role import Role
from rolegate.domain.auth.query.dto import to_account_id
from rolegate.domain.auth.service.account import AccountAdminService
from rolegate.domain.auth.service.authorization import AuthorizationGate
from rolegate.domain.shared.authorization.gate import at_least
from rolegate.domain.shared.command import Command, CommandHandler, Result


class DeleteAccount(Command):
    account_id: int


class DeleteAccountResult(Result):
    pass


class DeleteAccountHandler(CommandHandler[DeleteAccount, DeleteAccountResult]):
    __auth__ = at_least(Role.ADMIN)
    identity: Identity
    gate: AuthorizationGate
    accounts: AccountAdminService

    async def run(self, cmd: DeleteAccount) -> DeleteAccountResult:
        with logfire.span("DeleteAccount"):
            target = to_account_id(cmd.account_id)
            await self.gate.authorize(self.identity, Operation.DELETE, target_id=target)
            await self.accounts.delete_account(target)
            return DeleteAccountResult()
