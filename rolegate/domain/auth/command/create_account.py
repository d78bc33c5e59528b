"""CreateAccount command and handler."""

from rolegate.domain.auth.authorization.decision import Operation
from rolegate.domain.auth.model.account import NewAccount
from rolegate.domain.auth.model.identity import Identity
from rolegate.domain.auth.model.role import Role
from rolegate.domain.auth.query.dto import AccountDTO
from rolegate.domain.auth.service.account import AccountAdminService
from rolegate.domain.auth.service.authorization import AuthorizationGate
from rolegate.domain.shared.authorization.gate import at_least
from rolegate.domain.shared.command import Command, CommandHandler, Result


class CreateAccount(Command):
    """Command to create an account at a chosen role."""

    firstname: str
    lastname: str
    username: str
    email: str
    phone: str
    password: str
    role: int  # Raw level; range is re-checked by the policy


class CreateAccountResult(Result):
    account: AccountDTO


class CreateAccountHandler(CommandHandler[CreateAccount, CreateAccountResult]):
    __auth__ = at_least(Role.ADMIN)
    identity: Identity
    gate: AuthorizationGate
    accounts: AccountAdminService

    async def run(self, cmd: CreateAccount) -> CreateAccountResult:
        await self.gate.authorize(self.identity, Operation.CREATE, requested_role=cmd.role)

        account = await self.accounts.create_account(
            NewAccount.create(
                firstname=cmd.firstname,
                lastname=cmd.lastname,
                username=cmd.username,
                email=cmd.email,
                phone=cmd.phone,
                role=Role(cmd.role),
            ),
            password=cmd.password,
        )
        return CreateAccountResult(account=AccountDTO.from_account(account))
