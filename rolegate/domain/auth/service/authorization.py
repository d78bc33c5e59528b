"""AuthorizationGate: runs the role-hierarchy policy inside a request."""

import asyncio
import logging

from rolegate.domain.auth.authorization.decision import (
    AuthorizationRequest,
    Decision,
    Operation,
)
from rolegate.domain.auth.authorization.policy import evaluate
from rolegate.domain.auth.model.identity import Identity
from rolegate.domain.auth.model.principal import Principal
from rolegate.domain.auth.model.role import Role
from rolegate.domain.auth.model.value import AccountId
from rolegate.domain.auth.port.repository import AccountRepository
from rolegate.domain.shared.error import (
    AuthorizationError,
    ForbiddenError,
    NotFoundError,
    StorageUnavailableError,
)
from rolegate.domain.shared.service import Service

logger = logging.getLogger(__name__)

_TARGETLESS = frozenset({Operation.CREATE, Operation.VIEW})


class AuthorizationGate(Service):
    """Gates admin operations on the role hierarchy.

    Reads the target's role at most once per call and never writes. The
    mutation that follows an ALLOW belongs to the calling operation, so the
    target's role may change between this check and that write; callers who
    need more must do both in one atomic read-modify-write.
    """

    _accounts: AccountRepository
    _lookup_timeout: float | None = None

    async def authorize(
        self,
        identity: Identity,
        operation: Operation,
        *,
        target_id: AccountId | None = None,
        requested_role: int | None = None,
    ) -> AuthorizationRequest:
        """Authorize one operation and return the resolved request on ALLOW.

        Raises:
            AuthorizationError: ``missing_token`` if ``identity`` is not a Principal.
            NotFoundError: if the target account does not exist.
            ForbiddenError: if the policy denies, carrying the deny reason.
            StorageUnavailableError: if the role lookup fails or times out.
        """
        if not isinstance(identity, Principal):
            raise AuthorizationError("Authentication required", code="missing_token")

        request = AuthorizationRequest(
            acting_id=identity.account_id,
            acting_role=identity.role,
            operation=operation,
            target_id=target_id,
            requested_role=requested_role,
        )

        if operation not in _TARGETLESS:
            if target_id is None:
                raise ValueError(f"{operation.value} requires a target account")
            target_role = await self._lookup_role(target_id)
            if target_role is None:
                raise NotFoundError(f"Account not found: {target_id}", code="account_not_found")
            request = request.with_target_role(target_role)

        decision = evaluate(request)
        self._log(request, decision)
        if decision.denied:
            assert decision.reason is not None
            raise ForbiddenError(decision.reason)
        return request

    async def _lookup_role(self, target_id: AccountId) -> Role | None:
        try:
            if self._lookup_timeout is None:
                return await self._accounts.get_role(target_id)
            async with asyncio.timeout(self._lookup_timeout):
                return await self._accounts.get_role(target_id)
        except TimeoutError as e:
            logger.error("Role lookup timed out: target=%s", target_id)
            raise StorageUnavailableError(
                "Timed out reading target role", code="lookup_timeout"
            ) from e

    @staticmethod
    def _log(request: AuthorizationRequest, decision: Decision) -> None:
        if decision.allowed:
            logger.info(
                "Authorization allowed: actor=%s role=%s op=%s target=%s",
                request.acting_id,
                request.acting_role.name,
                request.operation,
                request.target_id,
            )
        else:
            logger.warning(
                "Authorization denied: actor=%s role=%s op=%s target=%s reason=%s",
                request.acting_id,
                request.acting_role.name,
                request.operation,
                request.target_id,
                decision.reason,
            )
