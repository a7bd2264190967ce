from abc import ABC, abstractmethod

from src.app.repositories.proposal_event_repository import IProposalEventRepository
from src.app.repositories.proposal_recipient_repository import IProposalRecipientRepository
from src.app.repositories.proposal_repository import IProposalRepository
from src.app.repositories.proposal_template_repository import IProposalTemplateRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    proposals: IProposalRepository
    recipients: IProposalRecipientRepository
    events: IProposalEventRepository
    templates: IProposalTemplateRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
