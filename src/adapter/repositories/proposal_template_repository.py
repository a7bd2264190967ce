from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.proposal_template_repository import (
    IProposalTemplateRepository,
)
from src.domain.entities import ProposalTemplate


class ProposalTemplateRepository(IProposalTemplateRepository):
    """ProposalTemplate repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, template_id: UUID) -> Optional[ProposalTemplate]:
        """Get template by ID"""
        stmt = select(ProposalTemplate).where(ProposalTemplate.id == template_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, template: ProposalTemplate) -> ProposalTemplate:
        """Create a new template"""
        self.session.add(template)
        await self.session.flush()
        await self.session.refresh(template)
        return template
