import base64
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import and_, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.proposal_event_repository import IProposalEventRepository
from src.domain.base import utc_now
from src.domain.entities import (
    ActorContext,
    EventDetails,
    ProposalEvent,
    ProposalEventType,
)


def _encode_cursor(event: ProposalEvent) -> str:
    raw = f"{event.created_at.isoformat()}|{event.id}"
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("utf-8")


def _decode_cursor(cursor: str) -> Tuple[datetime, UUID]:
    raw = base64.urlsafe_b64decode(cursor.encode("utf-8")).decode("utf-8")
    timestamp_str, event_id = raw.split("|", 1)
    return datetime.fromisoformat(timestamp_str), UUID(event_id)


class ProposalEventRepository(IProposalEventRepository):
    """Event log implementation using SQLModel (insert and read only)"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def append(
        self,
        proposal_id: UUID,
        details: EventDetails,
        actor: Optional[ActorContext] = None,
        at: Optional[datetime] = None,
    ) -> UUID:
        """Append an immutable event"""
        actor = actor or ActorContext()
        event = ProposalEvent(
            proposal_id=proposal_id,
            event_type=ProposalEventType(details.event_type),
            user_id=actor.user_id,
            user_email=actor.user_email,
            ip_address=actor.ip_address,
            user_agent=actor.user_agent,
            details=details.model_dump(mode="json"),
            created_at=at or utc_now(),
        )
        self.session.add(event)
        await self.session.flush()
        return event.id

    async def list_by_proposal(self, proposal_id: UUID) -> List[ProposalEvent]:
        """Get all events of a proposal, oldest first"""
        stmt = (
            select(ProposalEvent)
            .where(ProposalEvent.proposal_id == proposal_id)
            .order_by(ProposalEvent.created_at, ProposalEvent.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_proposal_paginated(
        self, proposal_id: UUID, limit: int = 50, cursor: Optional[str] = None
    ) -> Tuple[List[ProposalEvent], Optional[str]]:
        """
        Get events of a proposal with cursor-based pagination.

        Cursor format: base64-encoded "<ISO created_at>|<event id>" of the
        last event on the previous page.
        """
        stmt = select(ProposalEvent).where(ProposalEvent.proposal_id == proposal_id)

        if cursor:
            try:
                cursor_timestamp, cursor_id = _decode_cursor(cursor)
                stmt = stmt.where(
                    or_(
                        ProposalEvent.created_at > cursor_timestamp,
                        and_(
                            ProposalEvent.created_at == cursor_timestamp,
                            ProposalEvent.id > cursor_id,
                        ),
                    )
                )
            except (ValueError, TypeError):
                # Invalid cursor, ignore and return from beginning
                pass

        stmt = stmt.order_by(ProposalEvent.created_at, ProposalEvent.id).limit(limit + 1)

        result = await self.session.execute(stmt)
        events = list(result.scalars().all())

        has_more = len(events) > limit
        if has_more:
            events = events[:limit]

        next_cursor = None
        if has_more and events:
            next_cursor = _encode_cursor(events[-1])

        return events, next_cursor
