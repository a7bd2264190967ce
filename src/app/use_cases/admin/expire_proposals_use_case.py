"""
Expire Proposals Use Case

Administrative sweep that writes status=expired for proposals past their
deadline. The access gate never relies on this having run.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import ActorContext, ExpiredDetails

from .dtos import ExpireProposalsResponse

logger = logging.getLogger(__name__)


class ExpireProposalsUseCase:
    """
    Business Rules:
    - Only draft/sent/viewed proposals with expires_at < now are touched
    - Each write is conditional, so a proposal accepted meanwhile is skipped
    - One "expired" event per proposal actually expired
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now):
        self.uow = uow
        self.clock = clock

    async def execute(
        self, actor: Optional[ActorContext] = None
    ) -> Result[ExpireProposalsResponse]:
        async with self.uow:
            now = self.clock()
            expired_ids = []

            for proposal in await self.uow.proposals.get_expirable(now):
                if not await self.uow.proposals.mark_expired(proposal.id, now):
                    continue

                await self.uow.events.append(
                    proposal.id,
                    ExpiredDetails(
                        expires_at=proposal.expires_at,
                        previous_status=proposal.status.value,
                    ),
                    actor,
                    now,
                )
                expired_ids.append(str(proposal.id))

            await self.uow.commit()

            if expired_ids:
                logger.info(f"Expiry sweep: expired {len(expired_ids)} proposals")

            return Return.ok(
                ExpireProposalsResponse(
                    expired_count=len(expired_ids), proposal_ids=expired_ids
                )
            )
