from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.proposal_recipient_repository import (
    IProposalRecipientRepository,
)
from src.domain.entities import ProposalRecipient


class ProposalRecipientRepository(IProposalRecipientRepository):
    """Recipient registry implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def resolve_token(
        self, proposal_id: UUID, token_hash: str
    ) -> Optional[ProposalRecipient]:
        """Resolve token digest scoped to proposal (one indexed lookup)"""
        stmt = (
            select(ProposalRecipient)
            .where(
                ProposalRecipient.token == token_hash,
                ProposalRecipient.proposal_id == proposal_id,
            )
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def token_exists(self, token_hash: str) -> bool:
        """Check whether a token digest is already bound"""
        stmt = select(ProposalRecipient.id).where(ProposalRecipient.token == token_hash)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def create(self, recipient: ProposalRecipient) -> ProposalRecipient:
        """Create a new recipient"""
        self.session.add(recipient)
        await self.session.flush()
        await self.session.refresh(recipient)
        return recipient

    async def list_by_proposal(self, proposal_id: UUID) -> List[ProposalRecipient]:
        """Get all recipients of a proposal"""
        stmt = (
            select(ProposalRecipient)
            .where(ProposalRecipient.proposal_id == proposal_id)
            .order_by(ProposalRecipient.created_at)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def mark_viewed(self, recipient_id: UUID, at: datetime) -> bool:
        """First-write-wins viewed_at"""
        stmt = (
            update(ProposalRecipient)
            .where(
                ProposalRecipient.id == recipient_id,
                ProposalRecipient.viewed_at.is_(None),
            )
            .values(viewed_at=at)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def replace_token(self, recipient_id: UUID, token_hash: str) -> None:
        """Bind a new token digest"""
        stmt = (
            update(ProposalRecipient)
            .where(ProposalRecipient.id == recipient_id)
            .values(token=token_hash)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)
        await self.session.flush()
