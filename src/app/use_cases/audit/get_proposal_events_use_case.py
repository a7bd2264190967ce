"""
Get Proposal Events Use Case

Retrieves the audit timeline of a proposal with pagination.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.proposals.dtos import to_iso


class GetProposalEventsUseCase:
    """
    Use case for reading a proposal's event log.

    Business Rules:
    - Read-only; the event log has no update or delete path
    - Results ordered oldest first (timeline order)
    - Supports cursor-based pagination
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        proposal_id: UUID,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Result[Dict[str, Any]]:
        """
        Execute get proposal events use case.

        Args:
            proposal_id: Proposal UUID
            limit: Maximum number of events to return
            cursor: Pagination cursor (optional)

        Returns:
            Result with events list and next_cursor, or Error
        """
        async with self.uow:
            proposal = await self.uow.proposals.get_by_id(proposal_id)
            if proposal is None:
                return Return.err(Error("PROPOSAL_NOT_FOUND", "Proposal not found"))

            events, next_cursor = await self.uow.events.get_by_proposal_paginated(
                proposal_id, limit=limit, cursor=cursor
            )

            events_list = [
                {
                    "id": str(event.id),
                    "event_type": event.event_type.value,
                    "timestamp": to_iso(event.created_at),
                    "user_id": str(event.user_id) if event.user_id else None,
                    "user_email": event.user_email,
                    "ip_address": event.ip_address,
                    "user_agent": event.user_agent,
                    "details": event.details or {},
                }
                for event in events
            ]

            return Return.ok({"events": events_list, "next_cursor": next_cursor})
