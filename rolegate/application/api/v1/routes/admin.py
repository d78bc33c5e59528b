"""Admin routes for account management under the role hierarchy.

Every route requires an Admin or higher bearer token; finer-grained checks
against the target account happen in the handlers' AuthorizationGate call.
"""

from typing import Annotated

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, Response
from pydantic import BaseModel, EmailStr, Field

from rolegate.domain.auth.command.change_role import (
    ChangeRole,
    ChangeRoleHandler,
    ChangeRoleResult,
)
from rolegate.domain.auth.command.create_account import (
    CreateAccount,
    CreateAccountHandler,
    CreateAccountResult,
)
from rolegate.domain.auth.command.delete_account import DeleteAccount, DeleteAccountHandler
from rolegate.domain.auth.command.reset_password import ResetPassword, ResetPasswordHandler
from rolegate.domain.auth.command.update_account import (
    UpdateAccount,
    UpdateAccountHandler,
    UpdateAccountResult,
)
from rolegate.domain.auth.model.role import MAX_ROLE_LEVEL, MIN_ROLE_LEVEL
from rolegate.domain.auth.model.value import PHONE_PATTERN, USERNAME_PATTERN, AccountStatus
from rolegate.domain.auth.query.dashboard_stats import (
    GetDashboardStats,
    GetDashboardStatsHandler,
    GetDashboardStatsResult,
)
from rolegate.domain.auth.query.get_account import (
    GetAccount,
    GetAccountHandler,
    GetAccountResult,
)
from rolegate.domain.auth.query.list_accounts import (
    ListAccounts,
    ListAccountsHandler,
    ListAccountsResult,
)
from rolegate.domain.auth.query.search_accounts import (
    SearchAccounts,
    SearchAccountsHandler,
    SearchAccountsResult,
)

router = APIRouter(prefix="/admin", tags=["Admin"], route_class=DishkaRoute)

Name = Annotated[str, Field(min_length=1, max_length=100)]
Password = Annotated[str, Field(min_length=8, max_length=128)]
RoleLevel = Annotated[int, Field(ge=MIN_ROLE_LEVEL, le=MAX_ROLE_LEVEL)]
PageSize = Annotated[int | None, Query(ge=1, le=100)]


class CreateAccountRequest(BaseModel):
    """Request body for creating an account."""

    firstname: Name
    lastname: Name
    username: str = Field(min_length=3, max_length=50, pattern=USERNAME_PATTERN.pattern)
    email: EmailStr
    phone: str = Field(pattern=PHONE_PATTERN.pattern)
    password: Password
    role: RoleLevel


class UpdateAccountRequest(BaseModel):
    """Request body for updating status and verification flags."""

    account_status: AccountStatus | None = None
    email_verified: bool | None = None
    phone_verified: bool | None = None


class ResetPasswordRequest(BaseModel):
    password: Password


class ChangeRoleRequest(BaseModel):
    role: RoleLevel


@router.post("/users/create", response_model=CreateAccountResult, status_code=201)
async def create_account(
    body: CreateAccountRequest,
    handler: FromDishka[CreateAccountHandler],
) -> CreateAccountResult:
    """Create an account at a role equal to or below the caller's."""
    return await handler.run(
        CreateAccount(
            firstname=body.firstname.strip(),
            lastname=body.lastname.strip(),
            username=body.username.strip(),
            email=str(body.email).lower(),
            phone=body.phone,
            password=body.password,
            role=body.role,
        )
    )


@router.get("/users", response_model=ListAccountsResult)
async def list_accounts(
    handler: FromDishka[ListAccountsHandler],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: PageSize = None,
    status: AccountStatus | None = None,
    role: Annotated[int | None, Query(ge=MIN_ROLE_LEVEL, le=MAX_ROLE_LEVEL)] = None,
) -> ListAccountsResult:
    """List accounts, newest first, optionally filtered by status and role."""
    return await handler.run(ListAccounts(page=page, limit=limit, status=status, role=role))


@router.get("/users/search", response_model=SearchAccountsResult)
async def search_accounts(
    handler: FromDishka[SearchAccountsHandler],
    q: Annotated[str, Query(min_length=1, max_length=100)],
    fields: Annotated[str | None, Query(pattern=r"^[a-zA-Z,]+$")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: PageSize = None,
) -> SearchAccountsResult:
    """Search accounts by name, username or email."""
    return await handler.run(SearchAccounts(q=q, fields=fields, page=page, limit=limit))


# Declared before /users/{account_id} so "stats" is not parsed as an id
@router.get("/users/stats/dashboard", response_model=GetDashboardStatsResult)
async def dashboard_stats(
    handler: FromDishka[GetDashboardStatsHandler],
) -> GetDashboardStatsResult:
    return await handler.run(GetDashboardStats())


@router.get("/users/{account_id}", response_model=GetAccountResult)
async def get_account(
    account_id: int,
    handler: FromDishka[GetAccountHandler],
) -> GetAccountResult:
    return await handler.run(GetAccount(account_id=account_id))


@router.put("/users/{account_id}", response_model=UpdateAccountResult)
async def update_account(
    account_id: int,
    body: UpdateAccountRequest,
    handler: FromDishka[UpdateAccountHandler],
) -> UpdateAccountResult:
    """Update an account ranked strictly below the caller."""
    return await handler.run(
        UpdateAccount(
            account_id=account_id,
            status=body.account_status,
            email_verified=body.email_verified,
            phone_verified=body.phone_verified,
        )
    )


@router.delete("/users/{account_id}", status_code=204)
async def delete_account(
    account_id: int,
    handler: FromDishka[DeleteAccountHandler],
) -> Response:
    """Soft-delete an account ranked strictly below the caller."""
    await handler.run(DeleteAccount(account_id=account_id))
    return Response(status_code=204)


@router.put("/users/{account_id}/password", status_code=204)
async def reset_password(
    account_id: int,
    body: ResetPasswordRequest,
    handler: FromDishka[ResetPasswordHandler],
) -> Response:
    """Set a new password for an account ranked strictly below the caller."""
    await handler.run(ResetPassword(account_id=account_id, password=body.password))
    return Response(status_code=204)


@router.put("/users/{account_id}/role", response_model=ChangeRoleResult)
async def change_role(
    account_id: int,
    body: ChangeRoleRequest,
    handler: FromDishka[ChangeRoleHandler],
) -> ChangeRoleResult:
    """Change an account's role. Requires Admin; Admins cannot assign above Admin."""
    return await handler.run(ChangeRole(account_id=account_id, role=body.role))
