"""ListAccounts query and handler: paged listing with status/role filters."""

from pydantic import BaseModel

from rolegate.config import AdminConfig
from rolegate.domain.auth.authorization.decision import Operation
from rolegate.domain.auth.model.identity import Identity
from rolegate.domain.auth.model.listing import AccountFilter, PageRequest, RoleIs, StatusIs
from rolegate.domain.auth.model.role import Role
from rolegate.domain.auth.model.value import AccountStatus
from rolegate.domain.auth.query.dto import AccountDTO, PaginationDTO, RoleDTO
from rolegate.domain.auth.service.account import AccountAdminService
from rolegate.domain.auth.service.authorization import AuthorizationGate
from rolegate.domain.shared.authorization.gate import at_least
from rolegate.domain.shared.query import Query, QueryHandler, Result


class ListAccounts(Query):
    page: int = 1
    limit: int | None = None
    status: AccountStatus | None = None
    role: Role | None = None


class AppliedFilters(BaseModel):
    status: str | None = None
    role: RoleDTO | None = None


class ListAccountsResult(Result):
    users: list[AccountDTO]
    pagination: PaginationDTO
    filters: AppliedFilters | None


def page_request(config: AdminConfig, page: int, limit: int | None) -> PageRequest:
    """Build a PageRequest, applying the configured default and ceiling."""
    return PageRequest(
        page=max(page, 1),
        limit=min(limit or config.default_page_size, config.max_page_size),
    )


class ListAccountsHandler(QueryHandler[ListAccounts, ListAccountsResult]):
    __auth__ = at_least(Role.ADMIN)
    identity: Identity
    gate: AuthorizationGate
    accounts: AccountAdminService
    admin_config: AdminConfig

    async def run(self, query: ListAccounts) -> ListAccountsResult:
        await self.gate.authorize(self.identity, Operation.VIEW)

        filters: list[AccountFilter] = []
        if query.status is not None:
            filters.append(StatusIs(query.status))
        if query.role is not None:
            filters.append(RoleIs(query.role))

        page = page_request(self.admin_config, query.page, query.limit)
        accounts, pagination = await self.accounts.list_accounts(filters, page)

        applied = None
        if filters:
            applied = AppliedFilters(
                status=query.status.value if query.status else None,
                role=RoleDTO.from_role(query.role) if query.role else None,
            )

        return ListAccountsResult(
            users=[AccountDTO.from_account(a) for a in accounts],
            pagination=PaginationDTO(
                page=pagination.page,
                limit=pagination.limit,
                total_users=pagination.total,
                total_pages=pagination.total_pages,
            ),
            filters=applied,
        )
