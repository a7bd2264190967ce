from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import ProposalTemplate


class IProposalTemplateRepository(ABC):
    """ProposalTemplate repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, template_id: UUID) -> Optional[ProposalTemplate]:
        """Get template by ID"""
        pass

    @abstractmethod
    async def create(self, template: ProposalTemplate) -> ProposalTemplate:
        """Create a new template"""
        pass
