"""Tests for AuthorizationGate: lookup, decision and error translation."""

import asyncio
import logging
from unittest.mock import AsyncMock

import pytest

from rolegate.domain.auth.authorization.decision import DenyReason, Operation
from rolegate.domain.auth.model.identity import Anonymous
from rolegate.domain.auth.model.principal import Principal
from rolegate.domain.auth.model.role import Role
from rolegate.domain.auth.model.value import AccountId
from rolegate.domain.auth.service.authorization import AuthorizationGate
from rolegate.domain.shared.error import (
    AuthorizationError,
    ForbiddenError,
    NotFoundError,
    StorageUnavailableError,
)

ACTOR = AccountId(10)
TARGET = AccountId(20)


def make_gate(target_role: Role | None = Role.USER, timeout: float | None = None):
    accounts = AsyncMock()
    accounts.get_role.return_value = target_role
    return AuthorizationGate(_accounts=accounts, _lookup_timeout=timeout), accounts


def principal(role: Role, account_id: AccountId = ACTOR) -> Principal:
    return Principal(account_id=account_id, role=role)


class TestTargetlessOperations:
    @pytest.mark.asyncio
    async def test_create_allowed_without_lookup(self) -> None:
        gate, accounts = make_gate()

        request = await gate.authorize(principal(Role.ADMIN), Operation.CREATE, requested_role=3)

        assert request.requested_role == 3
        accounts.get_role.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_above_own_role_forbidden(self) -> None:
        gate, _ = make_gate()

        with pytest.raises(ForbiddenError) as exc_info:
            await gate.authorize(principal(Role.ADMIN), Operation.CREATE, requested_role=4)
        assert exc_info.value.reason == DenyReason.ROLE_TOO_HIGH
        assert exc_info.value.code == "role_too_high"

    @pytest.mark.asyncio
    async def test_view_requires_privileged_tier(self) -> None:
        gate, accounts = make_gate()

        with pytest.raises(ForbiddenError) as exc_info:
            await gate.authorize(principal(Role.MODERATOR), Operation.VIEW)
        assert exc_info.value.reason == DenyReason.INSUFFICIENT_HIERARCHY
        accounts.get_role.assert_not_awaited()


class TestTargetedOperations:
    @pytest.mark.asyncio
    async def test_single_lookup_per_call(self) -> None:
        gate, accounts = make_gate(target_role=Role.MODERATOR)

        request = await gate.authorize(principal(Role.ADMIN), Operation.UPDATE, target_id=TARGET)

        accounts.get_role.assert_awaited_once_with(TARGET)
        assert request.target_role == Role.MODERATOR

    @pytest.mark.asyncio
    async def test_change_role_returns_previous_role(self) -> None:
        gate, _ = make_gate(target_role=Role.MODERATOR)

        request = await gate.authorize(
            principal(Role.SUPER_ADMIN),
            Operation.CHANGE_ROLE,
            target_id=TARGET,
            requested_role=3,
        )
        assert request.target_role == Role.MODERATOR

    @pytest.mark.asyncio
    async def test_missing_target_is_not_found(self) -> None:
        gate, _ = make_gate(target_role=None)

        with pytest.raises(NotFoundError) as exc_info:
            await gate.authorize(principal(Role.OWNER), Operation.DELETE, target_id=TARGET)
        assert exc_info.value.code == "account_not_found"

    @pytest.mark.asyncio
    async def test_peer_update_forbidden(self) -> None:
        gate, _ = make_gate(target_role=Role.ADMIN)

        with pytest.raises(ForbiddenError) as exc_info:
            await gate.authorize(principal(Role.ADMIN), Operation.UPDATE, target_id=TARGET)
        assert exc_info.value.reason == DenyReason.INSUFFICIENT_HIERARCHY

    @pytest.mark.asyncio
    async def test_self_delete_forbidden(self) -> None:
        gate, _ = make_gate(target_role=Role.OWNER)

        with pytest.raises(ForbiddenError) as exc_info:
            await gate.authorize(principal(Role.OWNER), Operation.DELETE, target_id=ACTOR)
        assert exc_info.value.reason == DenyReason.SELF_ACTION

    @pytest.mark.asyncio
    async def test_admin_promotion_ceiling(self) -> None:
        gate, _ = make_gate(target_role=Role.MODERATOR)

        with pytest.raises(ForbiddenError) as exc_info:
            await gate.authorize(
                principal(Role.ADMIN),
                Operation.CHANGE_ROLE,
                target_id=TARGET,
                requested_role=4,
            )
        assert exc_info.value.reason == DenyReason.PROMOTION_CEILING

    @pytest.mark.asyncio
    async def test_targeted_operation_without_target_is_wiring_error(self) -> None:
        gate, _ = make_gate()

        with pytest.raises(ValueError):
            await gate.authorize(principal(Role.OWNER), Operation.UPDATE)


class TestFailureModes:
    @pytest.mark.asyncio
    async def test_anonymous_is_unauthenticated(self) -> None:
        gate, accounts = make_gate()

        with pytest.raises(AuthorizationError) as exc_info:
            await gate.authorize(Anonymous(), Operation.UPDATE, target_id=TARGET)
        assert exc_info.value.code == "missing_token"
        accounts.get_role.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_store_failure_propagates(self) -> None:
        gate, accounts = make_gate()
        accounts.get_role.side_effect = StorageUnavailableError("db down")

        with pytest.raises(StorageUnavailableError):
            await gate.authorize(principal(Role.OWNER), Operation.UPDATE, target_id=TARGET)

    @pytest.mark.asyncio
    async def test_lookup_timeout_becomes_storage_error(self) -> None:
        gate, accounts = make_gate(timeout=0.01)

        async def slow_lookup(account_id: AccountId) -> Role:
            await asyncio.sleep(1)
            return Role.USER

        accounts.get_role.side_effect = slow_lookup

        with pytest.raises(StorageUnavailableError) as exc_info:
            await gate.authorize(principal(Role.OWNER), Operation.DELETE, target_id=TARGET)
        assert exc_info.value.code == "lookup_timeout"

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self) -> None:
        gate, accounts = make_gate(timeout=5.0)
        started = asyncio.Event()

        async def blocked_lookup(account_id: AccountId) -> Role:
            started.set()
            await asyncio.sleep(10)
            return Role.USER

        accounts.get_role.side_effect = blocked_lookup

        task = asyncio.create_task(
            gate.authorize(principal(Role.OWNER), Operation.DELETE, target_id=TARGET)
        )
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task


class TestDecisionLogging:
    @pytest.mark.asyncio
    async def test_deny_logged_with_reason(self, caplog: pytest.LogCaptureFixture) -> None:
        gate, _ = make_gate(target_role=Role.OWNER)

        with caplog.at_level(logging.WARNING, logger="rolegate.domain.auth.service.authorization"):
            with pytest.raises(ForbiddenError):
                await gate.authorize(principal(Role.ADMIN), Operation.DELETE, target_id=TARGET)

        assert "insufficient_hierarchy" in caplog.text

    @pytest.mark.asyncio
    async def test_allow_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        gate, _ = make_gate(target_role=Role.USER)

        with caplog.at_level(logging.INFO, logger="rolegate.domain.auth.service.authorization"):
            await gate.authorize(principal(Role.ADMIN), Operation.DELETE, target_id=TARGET)

        assert "Authorization allowed" in caplog.text
