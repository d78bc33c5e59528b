"""GetDashboardStats query and handler."""

from rolegate.domain.auth.authorization.decision import Operation
from rolegate.domain.auth.model.identity import Identity
from rolegate.domain.auth.model.listing import DashboardStats
from rolegate.domain.auth.model.role import Role
from rolegate.domain.auth.service.account import AccountAdminService
from rolegate.domain.auth.service.authorization import AuthorizationGate
from rolegate.domain.shared.authorization.gate import at_least
from rolegate.domain.shared.query import Query, QueryHandler, Result


class GetDashboardStats(Query):
    pass


class GetDashboardStatsResult(Result):
    statistics: DashboardStats


class GetDashboardStatsHandler(QueryHandler[GetDashboardStats, GetDashboardStatsResult]):
    __auth__ = at_least(Role.ADMIN)
    identity: Identity
    gate: AuthorizationGate
    accounts: AccountAdminService

    async def run(self, query: GetDashboardStats) -> GetDashboardStatsResult:
        await self.gate.authorize(self.identity, Operation.VIEW)
        return GetDashboardStatsResult(statistics=await self.accounts.dashboard_stats())
