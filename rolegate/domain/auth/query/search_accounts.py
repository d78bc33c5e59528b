"""SearchAccounts query and handler: substring search over name/email fields."""

from rolegate.config import AdminConfig
from rolegate.domain.auth.authorization.decision import Operation
from rolegate.domain.auth.model.identity import Identity
from rolegate.domain.auth.model.listing import TextMatches, parse_search_fields
from rolegate.domain.auth.model.role import Role
from rolegate.domain.auth.query.dto import AccountDTO, PaginationDTO
from rolegate.domain.auth.query.list_accounts import page_request
from rolegate.domain.auth.service.account import AccountAdminService
from rolegate.domain.auth.service.authorization import AuthorizationGate
from rolegate.domain.shared.authorization.gate import at_least
from rolegate.domain.shared.error import ValidationError
from rolegate.domain.shared.query import Query, QueryHandler, Result


class SearchAccounts(Query):
    q: str
    fields: str | None = None  # Comma-separated subset of firstname,lastname,username,email
    page: int = 1
    limit: int | None = None


class SearchAccountsResult(Result):
    users: list[AccountDTO]
    pagination: PaginationDTO
    search_term: str
    fields_searched: list[str]


class SearchAccountsHandler(QueryHandler[SearchAccounts, SearchAccountsResult]):
    __auth__ = at_least(Role.ADMIN)
    identity: Identity
    gate: AuthorizationGate
    accounts: AccountAdminService
    admin_config: AdminConfig

    async def run(self, query: SearchAccounts) -> SearchAccountsResult:
        await self.gate.authorize(self.identity, Operation.VIEW)

        term = query.q.strip()
        if not term:
            raise ValidationError("Search term is required", field="q")
        fields = parse_search_fields(query.fields)
        if not fields:
            raise ValidationError("No valid search fields specified", field="fields")

        page = page_request(self.admin_config, query.page, query.limit)
        accounts, pagination = await self.accounts.list_accounts(
            [TextMatches(term=term, fields=fields)], page
        )

        return SearchAccountsResult(
            users=[AccountDTO.from_account(a) for a in accounts],
            pagination=PaginationDTO(
                page=pagination.page,
                limit=pagination.limit,
                total_users=pagination.total,
                total_pages=pagination.total_pages,
            ),
            search_term=term,
            fields_searched=[f.value for f in fields],
        )
