from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.proposal_event_repository import ProposalEventRepository
from src.adapter.repositories.proposal_recipient_repository import (
    ProposalRecipientRepository,
)
from src.adapter.repositories.proposal_repository import ProposalRepository
from src.adapter.repositories.proposal_template_repository import (
    ProposalTemplateRepository,
)
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.proposals = ProposalRepository(self.session)
        self.recipients = ProposalRecipientRepository(self.session)
        self.events = ProposalEventRepository(self.session)
        self.templates = ProposalTemplateRepository(self.session)
        return self

    async def __aexit__(self, *args):
        # Anything not committed by the use case is discarded
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
