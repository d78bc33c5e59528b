"""Database seed data for the bootstrap Owner account."""

import asyncio
import logging

from sqlalchemy.ext.asyncio import async_sessionmaker, AsyncSession

from rolegate.config import BootstrapOwner
from rolegate.domain.auth.model.account import NewAccount
from rolegate.domain.auth.model.role import Role
from rolegate.domain.auth.port.credential import CredentialHasher
from rolegate.infrastructure.persistence.repository.account import SqlAccountRepository

logger = logging.getLogger(__name__)


async def ensure_bootstrap_owner(
    session_factory: async_sessionmaker[AsyncSession],
    owner: BootstrapOwner,
    hasher: CredentialHasher,
) -> None:
    """Create the configured Owner account unless its identifiers are taken. Idempotent."""
    async with session_factory() as session:
        repo = SqlAccountRepository(session)
        conflicts = await repo.find_conflicts(
            email=owner.email, username=owner.username, phone=owner.phone
        )
        if conflicts:
            logger.info("Bootstrap owner already present (%s)", ", ".join(conflicts))
            return

        credential = await asyncio.to_thread(hasher.hash, owner.password)
        account = await repo.create(
            NewAccount.create(
                firstname=owner.firstname,
                lastname=owner.lastname,
                username=owner.username,
                email=owner.email,
                phone=owner.phone,
                role=Role.OWNER,
            ),
            credential,
        )
        await session.commit()
    logger.info("Bootstrap owner seeded (id=%s)", account.id)
