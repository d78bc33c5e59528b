"""UpdateAccount command and handler: status and verification flags."""

from rolegate.domain.auth.authorization.decision import Operation
from rolegate.domain.auth.model.account import AccountChanges
from rolegate.domain.auth.model.identity import Identity
from rolegate.domain.auth.model.role import Role
from rolegate.domain.auth.model.value import AccountStatus
from rolegate.domain.auth.query.dto import AccountDTO, to_account_id
from rolegate.domain.auth.service.account import AccountAdminService
from rolegate.domain.auth.service.authorization import AuthorizationGate
from rolegate.domain.shared.authorization.gate import at_least
from rolegate.domain.shared.command import Command, CommandHandler, Result


class UpdateAccount(Command):
    account_id: int
    status: AccountStatus | None = None
    email_verified: bool | None = None
    phone_verified: bool | None = None


class UpdateAccountResult(Result):
    account: AccountDTO


class UpdateAccountHandler(CommandHandler[UpdateAccount, UpdateAccountResult]):
    __auth__ = at_least(Role.ADMIN)
    identity: Identity
    gate: AuthorizationGate
    accounts: AccountAdminService

    async def run(self, cmd: UpdateAccount) -> UpdateAccountResult:
        target = to_account_id(cmd.account_id)
        await self.gate.authorize(self.identity, Operation.UPDATE, target_id=target)

        account = await self.accounts.update_account(
            target,
            AccountChanges(
                status=cmd.status,
                email_verified=cmd.email_verified,
                phone_verified=cmd.phone_verified,
            ),
        )
        return UpdateAccountResult(account=AccountDTO.from_account(account))
