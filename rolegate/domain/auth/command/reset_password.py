"""ResetPassword command and handler: admin sets a new password directly."""

from rolegate.domain.auth.authorization.decision import Operation
from rolegate.domain.auth.model.identity import Identity
from rolegate.domain.auth.model.role import Role
from rolegate.domain.auth.query.dto import to_account_id
from rolegate.domain.auth.service.account import AccountAdminService
from rolegate.domain.auth.service.authorization import AuthorizationGate
from rolegate.domain.shared.authorization.gate import at_least
from rolegate.domain.shared.command import Command, CommandHandler, Result


class ResetPassword(Command):
    account_id: int
    password: str


class ResetPasswordResult(Result):
    pass


class ResetPasswordHandler(CommandHandler[ResetPassword, ResetPasswordResult]):
    __auth__ = at_least(Role.ADMIN)
    identity: Identity
    gate: AuthorizationGate
    accounts: AccountAdminService

    async def run(self, cmd: ResetPassword) -> ResetPasswordResult:
        target = to_account_id(cmd.account_id)
        # Resetting a credential is a modification of the target account
        await self.gate.authorize(self.identity, Operation.UPDATE, target_id=target)
        await self.accounts.reset_password(target, cmd.password)
        return ResetPasswordResult()
