"""Auth domain queries (admin read surface)."""

from .dashboard_stats import GetDashboardStats, GetDashboardStatsHandler, GetDashboardStatsResult
from .get_account import GetAccount, GetAccountHandler, GetAccountResult
from .list_accounts import ListAccounts, ListAccountsHandler, ListAccountsResult
from .search_accounts import SearchAccounts, SearchAccountsHandler, SearchAccountsResult

__all__ = [
    "GetAccount",
    "GetAccountHandler",
    "GetAccountResult",
    "GetDashboardStats",
    "GetDashboardStatsHandler",
    "GetDashboardStatsResult",
    "ListAccounts",
    "ListAccountsHandler",
    "ListAccountsResult",
    "SearchAccounts",
    "SearchAccountsHandler",
    "SearchAccountsResult",
]
