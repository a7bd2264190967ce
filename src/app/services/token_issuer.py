"""
Token Issuer

Generates proposal identifiers and per-recipient bearer tokens.

Tokens are stored only as SHA-256 digests; the plaintext is handed to the
caller once, at issuance, and never logged.
"""

import hashlib
import re
import secrets
from uuid import UUID, uuid4

from src.app.repositories.proposal_recipient_repository import (
    IProposalRecipientRepository,
)

TOKEN_BYTES = 32  # 256 bits, ~43 base64url characters
TOKEN_MAX_LENGTH = 256
# token_urlsafe output alphabet
TOKEN_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


class TokenIssueError(Exception):
    """Raised when no unused token could be generated"""


def hash_token(token: str) -> str:
    """SHA-256 hex digest, the form a token is stored and looked up by"""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def token_reference(token: str) -> str:
    """Short, non-reversible reference to a token for log lines"""
    return hash_token(token)[:12]


class TokenIssuer:
    """
    Issues identifiers that cannot be guessed or enumerated.

    - Proposal ids are UUID4 (122 random bits)
    - Recipient tokens are secrets.token_urlsafe(32) (256 random bits)
    - A token is only accepted after the registry confirms it is unused
    """

    def __init__(self, recipients: IProposalRecipientRepository, max_attempts: int = 5):
        self.recipients = recipients
        self.max_attempts = max_attempts

    @staticmethod
    def issue_proposal_id() -> UUID:
        return uuid4()

    @staticmethod
    def generate_token() -> str:
        return secrets.token_urlsafe(TOKEN_BYTES)

    async def issue_recipient_token(self) -> str:
        """
        Issue a recipient token not yet bound to any recipient.

        Returns:
            Plaintext token. Persist hash_token(token), never the plaintext.

        Raises:
            TokenIssueError: every attempt collided with an existing token
        """
        for _ in range(self.max_attempts):
            token = self.generate_token()
            if not await self.recipients.token_exists(hash_token(token)):
                return token

        raise TokenIssueError(
            f"Could not issue an unused token after {self.max_attempts} attempts"
        )
