from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Proposal, ProposalStatus


class IProposalRepository(ABC):
    """Proposal repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, proposal_id: UUID) -> Optional[Proposal]:
        """Get proposal by ID, always reflecting the stored row"""
        pass

    @abstractmethod
    async def next_public_id(self, year: int) -> str:
        """Allocate the next PR-<year>-<seq> reference"""
        pass

    @abstractmethod
    async def create(self, proposal: Proposal) -> Proposal:
        """Create a new proposal"""
        pass

    @abstractmethod
    async def record_response(
        self,
        proposal_id: UUID,
        status: ProposalStatus,
        at: datetime,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        """
        Move a proposal to accepted/rejected.

        Conditional update: applies only while the stored status is
        draft/sent/viewed and expires_at is unset or not yet passed at `at`.

        Returns:
            True if this call performed the transition, False otherwise
        """
        pass

    @abstractmethod
    async def mark_viewed(self, proposal_id: UUID, at: datetime) -> bool:
        """Move sent -> viewed. Returns False if the proposal was not in sent"""
        pass

    @abstractmethod
    async def mark_sent(
        self, proposal_id: UUID, sent_at: datetime, expires_at: Optional[datetime]
    ) -> bool:
        """Move draft -> sent. Returns False if the proposal was not in draft"""
        pass

    @abstractmethod
    async def get_expirable(self, now: datetime) -> List[Proposal]:
        """Get non-terminal proposals whose expires_at has passed"""
        pass

    @abstractmethod
    async def mark_expired(self, proposal_id: UUID, now: datetime) -> bool:
        """Write status=expired if still non-terminal and past expires_at"""
        pass
