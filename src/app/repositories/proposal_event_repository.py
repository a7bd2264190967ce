from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from src.domain.entities import ActorContext, EventDetails, ProposalEvent


class IProposalEventRepository(ABC):
    """Event log interface - application layer. Append-only by contract."""

    @abstractmethod
    async def append(
        self,
        proposal_id: UUID,
        details: EventDetails,
        actor: Optional[ActorContext] = None,
        at: Optional[datetime] = None,
    ) -> UUID:
        """Append an event; event_type is taken from the details variant"""
        pass

    @abstractmethod
    async def list_by_proposal(self, proposal_id: UUID) -> List[ProposalEvent]:
        """Get all events of a proposal, oldest first"""
        pass

    @abstractmethod
    async def get_by_proposal_paginated(
        self, proposal_id: UUID, limit: int = 50, cursor: Optional[str] = None
    ) -> Tuple[List[ProposalEvent], Optional[str]]:
        """
        Get events of a proposal with cursor-based pagination.

        Returns:
            Tuple of (events list, next_cursor)
            - events: ordered by created_at ASC (timeline order)
            - next_cursor: Cursor for next page, None if no more events
        """
        pass
