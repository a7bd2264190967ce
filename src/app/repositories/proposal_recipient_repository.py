from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import ProposalRecipient


class IProposalRecipientRepository(ABC):
    """Recipient registry interface - application layer"""

    @abstractmethod
    async def resolve_token(
        self, proposal_id: UUID, token_hash: str
    ) -> Optional[ProposalRecipient]:
        """
        Resolve a token digest scoped to a proposal.

        Single lookup on (token, proposal_id); a digest issued for another
        proposal resolves to None exactly like an unknown digest.
        """
        pass

    @abstractmethod
    async def token_exists(self, token_hash: str) -> bool:
        """Check whether a token digest is already bound to any recipient"""
        pass

    @abstractmethod
    async def create(self, recipient: ProposalRecipient) -> ProposalRecipient:
        """Create a new recipient"""
        pass

    @abstractmethod
    async def list_by_proposal(self, proposal_id: UUID) -> List[ProposalRecipient]:
        """Get all recipients of a proposal"""
        pass

    @abstractmethod
    async def mark_viewed(self, recipient_id: UUID, at: datetime) -> bool:
        """Set viewed_at if still null. Returns True if this call set it"""
        pass

    @abstractmethod
    async def replace_token(self, recipient_id: UUID, token_hash: str) -> None:
        """Bind a freshly issued token digest to the recipient"""
        pass
