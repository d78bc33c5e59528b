"""Unit tests for AccountAdminService credential handling."""

import asyncio
import time
from unittest.mock import AsyncMock

import pytest

from rolegate.domain.auth.model.account import NewAccount
from rolegate.domain.auth.model.role import Role
from rolegate.domain.auth.model.value import AccountId
from rolegate.domain.auth.service.account import AccountAdminService
from rolegate.infrastructure.auth.hasher import BcryptCredentialHasher


async def _max_loop_gap(work) -> float:
    """Run ``work`` next to a 5 ms ticker; return the longest gap between ticks."""
    gaps: list[float] = []
    done = asyncio.Event()

    async def ticker() -> None:
        last = time.perf_counter()
        while not done.is_set():
            await asyncio.sleep(0.005)
            now = time.perf_counter()
            gaps.append(now - last)
            last = now

    task = asyncio.create_task(ticker())
    try:
        await work
    finally:
        done.set()
        await task
    return max(gaps)


class TestCredentialHashing:
    @pytest.mark.asyncio
    async def test_reset_password_keeps_event_loop_responsive(self) -> None:
        repo = AsyncMock()
        hasher = BcryptCredentialHasher()
        service = AccountAdminService(_accounts=repo, _hasher=hasher)

        gap = await _max_loop_gap(service.reset_password(AccountId(7), "new-password-1"))

        assert gap < 0.1
        account_id, credential = repo.set_credential.await_args.args
        assert account_id == AccountId(7)
        assert hasher.verify("new-password-1", credential)

    @pytest.mark.asyncio
    async def test_create_account_keeps_event_loop_responsive(self) -> None:
        repo = AsyncMock()
        repo.find_conflicts.return_value = []
        service = AccountAdminService(_accounts=repo, _hasher=BcryptCredentialHasher())
        account = NewAccount.create(
            firstname="Grace",
            lastname="Hopper",
            username="ghopper",
            email="grace@example.com",
            phone="5551234567",
            role=Role.USER,
        )

        gap = await _max_loop_gap(service.create_account(account, "password-123"))

        assert gap < 0.1
        repo.create.assert_awaited_once()
