"""ChangeRole command and handler."""

import logfire

from rolegate.domain.auth.authorization.decision import Operation
from rolegate.domain.auth.model.identity import Identity
from rolegate.domain.auth.model.role import Role
from rolegate.domain.auth.query.dto import AccountDTO, RoleDTO, to_account_id
from rolegate.domain.auth.service.account import AccountAdminService
from rolegate.domain.auth.service.authorization import AuthorizationGate
from rolegate.domain.shared.authorization.gate import at_least
from rolegate.domain.shared.command import Command, CommandHandler, Result


class ChangeRole(Command):
    """Command to move an account to another role level."""

    account_id: int
    role: int  # Raw level; range is re-checked by the policy


class ChangeRoleResult(Result):
    account: AccountDTO
    previous_role: RoleDTO


class ChangeRoleHandler(CommandHandler[ChangeRole, ChangeRoleResult]):
    __auth__ = at_least(Role.ADMIN)
    identity: Identity
    gate: AuthorizationGate
    accounts: AccountAdminService

    async def run(self, cmd: ChangeRole) -> ChangeRoleResult:
        with logfire.span("ChangeRole"):
            target = to_account_id(cmd.account_id)
            request = await self.gate.authorize(
                self.identity,
                Operation.CHANGE_ROLE,
                target_id=target,
                requested_role=cmd.role,
            )
            assert request.target_role is not None  # Resolved by the gate

            account = await self.accounts.change_role(target, Role(cmd.role))
            logfire.info(
                "Role changed",
                account_id=int(target),
                previous_role=int(request.target_role),
                new_role=cmd.role,
                changed_by=int(request.acting_id),
            )
            return ChangeRoleResult(
                account=AccountDTO.from_account(account),
                previous_role=RoleDTO.from_role(request.target_role),
            )
