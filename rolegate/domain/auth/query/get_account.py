"""GetAccount query and handler."""

from rolegate.domain.auth.authorization.decision import Operation
from rolegate.domain.auth.model.identity import Identity
from rolegate.domain.auth.model.role import Role
from rolegate.domain.auth.query.dto import AccountDTO, to_account_id
from rolegate.domain.auth.service.account import AccountAdminService
from rolegate.domain.auth.service.authorization import AuthorizationGate
from rolegate.domain.shared.authorization.gate import at_least
from rolegate.domain.shared.query import Query, QueryHandler, Result


class GetAccount(Query):
    account_id: int


class GetAccountResult(Result):
    account: AccountDTO


class GetAccountHandler(QueryHandler[GetAccount, GetAccountResult]):
    __auth__ = at_least(Role.ADMIN)
    identity: Identity
    gate: AuthorizationGate
    accounts: AccountAdminService

    async def run(self, query: GetAccount) -> GetAccountResult:
        await self.gate.authorize(self.identity, Operation.VIEW)
        account = await self.accounts.get_account(to_account_id(query.account_id))
        return GetAccountResult(account=AccountDTO.from_account(account))
