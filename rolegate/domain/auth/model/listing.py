"""Typed filter predicates, paging and statistics for account listings.

Filters are plain values; the repository adapter translates each one into a
bound SQL expression, so no user input is ever spliced into query text.
"""

import math
from dataclasses import dataclass
from enum import StrEnum

from rolegate.domain.auth.model.role import Role
from rolegate.domain.auth.model.value import AccountStatus
from rolegate.domain.shared.model.value import ValueObject


class SearchField(StrEnum):
    """Account columns that free-text search may match against."""

    FIRSTNAME = "firstname"
    LASTNAME = "lastname"
    USERNAME = "username"
    EMAIL = "email"


@dataclass(frozen=True)
class StatusIs:
    status: AccountStatus


@dataclass(frozen=True)
class RoleIs:
    role: Role


@dataclass(frozen=True)
class TextMatches:
    """Case-insensitive substring match on any of ``fields``."""

    term: str
    fields: tuple[SearchField, ...]


AccountFilter = StatusIs | RoleIs | TextMatches


def parse_search_fields(raw: str | None) -> tuple[SearchField, ...]:
    """Parse a comma-separated field list, dropping unknown names.

    ``None`` or an empty string selects every searchable field. The result may
    be empty when every requested name is unknown.
    """
    if not raw:
        return tuple(SearchField)
    valid = {f.value: f for f in SearchField}
    fields: list[SearchField] = []
    for name in raw.split(","):
        field = valid.get(name.strip().lower())
        if field is not None and field not in fields:
            fields.append(field)
    return tuple(fields)


class PageRequest(ValueObject):
    page: int = 1
    limit: int = 20

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class Pagination(ValueObject):
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


class DashboardStats(ValueObject):
    total_users: int
    active_users: int
    pending_users: int
    suspended_users: int
    email_verified: int
    phone_verified: int
    new_users_week: int
    new_users_month: int
