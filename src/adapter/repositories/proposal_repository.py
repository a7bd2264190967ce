from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import or_
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.proposal_repository import IProposalRepository
from src.domain.entities import (
    RESPONDABLE_STATUSES,
    TERMINAL_STATUSES,
    Proposal,
    ProposalStatus,
)

PUBLIC_ID_PREFIX = "PR"


class ProposalRepository(IProposalRepository):
    """Proposal repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, proposal_id: UUID) -> Optional[Proposal]:
        """Get proposal by ID"""
        # Conditional updates bypass the identity map, so reload from the row
        stmt = (
            select(Proposal)
            .where(Proposal.id == proposal_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def next_public_id(self, year: int) -> str:
        """
        Allocate the next PR-<year>-<seq> reference.

        Sequence restarts every year and is zero-padded to four digits.
        """
        prefix = f"{PUBLIC_ID_PREFIX}-{year}-"
        stmt = select(Proposal.public_id).where(Proposal.public_id.startswith(prefix))
        result = await self.session.execute(stmt)

        highest = 0
        for public_id in result.scalars().all():
            suffix = public_id[len(prefix):]
            if suffix.isdigit():
                highest = max(highest, int(suffix))

        return f"{prefix}{highest + 1:04d}"

    async def create(self, proposal: Proposal) -> Proposal:
        """Create a new proposal"""
        self.session.add(proposal)
        await self.session.flush()
        await self.session.refresh(proposal)
        return proposal

    async def record_response(
        self,
        proposal_id: UUID,
        status: ProposalStatus,
        at: datetime,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        """Conditional accept/reject transition"""
        if status not in TERMINAL_STATUSES:
            raise ValueError(f"Not a terminal status: {status}")

        values = {"status": status, "updated_at": at}
        if status == ProposalStatus.accepted:
            values["accepted_at"] = at
        else:
            values["rejected_at"] = at
            values["rejection_reason"] = rejection_reason

        stmt = (
            update(Proposal)
            .where(
                Proposal.id == proposal_id,
                Proposal.status.in_(list(RESPONDABLE_STATUSES)),
                or_(Proposal.expires_at.is_(None), Proposal.expires_at >= at),
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def mark_viewed(self, proposal_id: UUID, at: datetime) -> bool:
        """Move sent -> viewed"""
        stmt = (
            update(Proposal)
            .where(Proposal.id == proposal_id, Proposal.status == ProposalStatus.sent)
            .values(status=ProposalStatus.viewed, updated_at=at)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def mark_sent(
        self, proposal_id: UUID, sent_at: datetime, expires_at: Optional[datetime]
    ) -> bool:
        """Move draft -> sent"""
        stmt = (
            update(Proposal)
            .where(Proposal.id == proposal_id, Proposal.status == ProposalStatus.draft)
            .values(
                status=ProposalStatus.sent,
                sent_at=sent_at,
                expires_at=expires_at,
                updated_at=sent_at,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def get_expirable(self, now: datetime) -> List[Proposal]:
        """Get non-terminal proposals past their expiry"""
        stmt = (
            select(Proposal)
            .where(
                Proposal.status.in_(list(RESPONDABLE_STATUSES)),
                Proposal.expires_at.is_not(None),
                Proposal.expires_at < now,
            )
            .order_by(Proposal.expires_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def mark_expired(self, proposal_id: UUID, now: datetime) -> bool:
        """Write status=expired under the same precondition get_expirable uses"""
        stmt = (
            update(Proposal)
            .where(
                Proposal.id == proposal_id,
                Proposal.status.in_(list(RESPONDABLE_STATUSES)),
                Proposal.expires_at.is_not(None),
                Proposal.expires_at < now,
            )
            .values(status=ProposalStatus.expired, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1
