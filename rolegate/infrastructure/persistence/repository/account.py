"""SQLAlchemy implementation of AccountRepository."""

import functools
import logging
from collections.abc import Awaitable, Callable, Sequence
from datetime import UTC, datetime, timedelta
from typing import Any, ParamSpec, TypeVar

from sqlalchemy import (
    ColumnElement,
    Select,
    and_,
    case,
    func,
    insert,
    or_,
    select,
    update,
)
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from rolegate.domain.auth.model.account import Account, AccountChanges, Credential, NewAccount
from rolegate.domain.auth.model.listing import (
    AccountFilter,
    DashboardStats,
    PageRequest,
    RoleIs,
    StatusIs,
    TextMatches,
)
from rolegate.domain.auth.model.role import Role, is_valid_role_level
from rolegate.domain.auth.model.value import AccountId, AccountStatus
from rolegate.domain.auth.port.repository import AccountRepository
from rolegate.domain.shared.error import ConflictError, StorageUnavailableError
from rolegate.infrastructure.persistence.tables import (
    account_credentials_table,
    accounts_table,
)

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def _translate_errors(fn: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
    """Surface driver failures as domain-visible storage errors."""

    @functools.wraps(fn)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return await fn(*args, **kwargs)
        except IntegrityError as e:
            raise ConflictError(
                "Account already exists with the same email, username or phone",
                code="account_exists",
            ) from e
        except SQLAlchemyError as e:
            logger.error("Account store failure in %s: %s", fn.__name__, e)
            raise StorageUnavailableError(f"Account store unavailable: {e}") from e

    return wrapper


def _role_from_row(level: int) -> Role:
    if not is_valid_role_level(level):
        raise StorageUnavailableError(
            f"Stored role level out of range: {level}", code="invalid_stored_role"
        )
    return Role(level)


def _row_to_account(row: dict[str, Any]) -> Account:
    """Convert a database row to an Account aggregate."""
    return Account(
        id=AccountId(row["id"]),
        firstname=row["firstname"],
        lastname=row["lastname"],
        username=row["username"],
        email=row["email"],
        phone=row["phone"],
        role=_role_from_row(row["role"]),
        status=AccountStatus(row["status"]),
        email_verified=row["email_verified"],
        phone_verified=row["phone_verified"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _filter_clause(f: AccountFilter) -> ColumnElement[bool]:
    c = accounts_table.c
    match f:
        case StatusIs(status=status):
            return c.status == status.value
        case RoleIs(role=role):
            return c.role == int(role)
        case TextMatches(term=term, fields=fields):
            pattern = f"%{_escape_like(term)}%"
            return or_(*(c[field.value].ilike(pattern, escape="\\") for field in fields))
    raise TypeError(f"Unsupported account filter: {f!r}")


def _apply_filters(stmt: Select[Any], filters: Sequence[AccountFilter]) -> Select[Any]:
    if filters:
        stmt = stmt.where(and_(*(_filter_clause(f) for f in filters)))
    return stmt


class SqlAccountRepository(AccountRepository):
    """AccountRepository over SQLAlchemy Core; works on SQLite and PostgreSQL."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @_translate_errors
    async def get_role(self, account_id: AccountId) -> Role | None:
        stmt = select(accounts_table.c.role).where(accounts_table.c.id == int(account_id))
        level = (await self.session.execute(stmt)).scalar_one_or_none()
        return None if level is None else _role_from_row(level)

    @_translate_errors
    async def get(self, account_id: AccountId) -> Account | None:
        return await self._get(account_id)

    async def _get(self, account_id: AccountId) -> Account | None:
        stmt = select(accounts_table).where(accounts_table.c.id == int(account_id))
        row = (await self.session.execute(stmt)).mappings().first()
        return _row_to_account(dict(row)) if row else None

    @_translate_errors
    async def find_conflicts(self, *, email: str, username: str, phone: str) -> list[str]:
        c = accounts_table.c
        stmt = select(c.email, c.username, c.phone).where(
            or_(c.email == email, c.username == username, c.phone == phone)
        )
        rows = (await self.session.execute(stmt)).mappings().all()
        conflicts: list[str] = []
        for name, value in (("email", email), ("username", username), ("phone", phone)):
            if any(row[name] == value for row in rows):
                conflicts.append(name)
        return conflicts

    @_translate_errors
    async def create(self, account: NewAccount, credential: Credential) -> Account:
        values = account.model_dump()
        values["role"] = int(account.role)
        values["status"] = account.status.value
        result = await self.session.execute(insert(accounts_table).values(**values))
        account_id = AccountId(result.inserted_primary_key[0])
        await self.session.execute(
            insert(account_credentials_table).values(
                account_id=int(account_id),
                salted_hash=credential.salted_hash,
                salt=credential.salt,
                updated_at=account.created_at,
            )
        )
        await self.session.flush()
        created = await self._get(account_id)
        assert created is not None
        return created

    @_translate_errors
    async def update(self, account_id: AccountId, changes: AccountChanges) -> Account | None:
        values: dict[str, Any] = changes.model_dump(exclude_none=True)
        if "status" in values:
            values["status"] = AccountStatus(values["status"]).value
        return await self._update(account_id, values)

    @_translate_errors
    async def set_role(self, account_id: AccountId, role: Role) -> Account | None:
        return await self._update(account_id, {"role": int(role)})

    async def _update(self, account_id: AccountId, values: dict[str, Any]) -> Account | None:
        stmt = (
            update(accounts_table)
            .where(accounts_table.c.id == int(account_id))
            .values(**values, updated_at=datetime.now(UTC))
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        if result.rowcount == 0:
            return None
        return await self._get(account_id)

    @_translate_errors
    async def soft_delete(self, account_id: AccountId) -> bool:
        stmt = (
            update(accounts_table)
            .where(
                accounts_table.c.id == int(account_id),
                accounts_table.c.status != AccountStatus.DELETED.value,
            )
            .values(status=AccountStatus.DELETED.value, updated_at=datetime.now(UTC))
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    @_translate_errors
    async def set_credential(self, account_id: AccountId, credential: Credential) -> None:
        now = datetime.now(UTC)
        stmt = (
            update(account_credentials_table)
            .where(account_credentials_table.c.account_id == int(account_id))
            .values(salted_hash=credential.salted_hash, salt=credential.salt, updated_at=now)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            await self.session.execute(
                insert(account_credentials_table).values(
                    account_id=int(account_id),
                    salted_hash=credential.salted_hash,
                    salt=credential.salt,
                    updated_at=now,
                )
            )
        await self.session.execute(
            update(accounts_table)
            .where(accounts_table.c.id == int(account_id))
            .values(updated_at=now)
        )
        await self.session.flush()

    @_translate_errors
    async def find(self, filters: Sequence[AccountFilter], page: PageRequest) -> list[Account]:
        stmt = (
            _apply_filters(select(accounts_table), filters)
            .order_by(accounts_table.c.created_at.desc(), accounts_table.c.id.desc())
            .limit(page.limit)
            .offset(page.offset)
        )
        rows = (await self.session.execute(stmt)).mappings().all()
        return [_row_to_account(dict(row)) for row in rows]

    @_translate_errors
    async def count(self, filters: Sequence[AccountFilter]) -> int:
        stmt = _apply_filters(select(func.count()).select_from(accounts_table), filters)
        return (await self.session.execute(stmt)).scalar_one()

    @_translate_errors
    async def stats(self, now: datetime) -> DashboardStats:
        c = accounts_table.c

        def tally(condition: ColumnElement[bool]) -> ColumnElement[int]:
            return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)

        stmt = select(
            func.count().label("total_users"),
            tally(c.status == AccountStatus.ACTIVE.value).label("active_users"),
            tally(c.status == AccountStatus.PENDING.value).label("pending_users"),
            tally(c.status == AccountStatus.SUSPENDED.value).label("suspended_users"),
            tally(c.email_verified.is_(True)).label("email_verified"),
            tally(c.phone_verified.is_(True)).label("phone_verified"),
            tally(c.created_at >= now - timedelta(days=7)).label("new_users_week"),
            tally(c.created_at >= now - timedelta(days=30)).label("new_users_month"),
        ).select_from(accounts_table)
        row = (await self.session.execute(stmt)).mappings().one()
        return DashboardStats(**{key: int(value) for key, value in row.items()})
