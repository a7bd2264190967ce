"""
Access Gate failure taxonomy.

Every failure a link holder can observe is one of these four. ACCESS_DENIED
carries the same message whatever the cause.
"""

from libs.result import Error

ACCESS_DENIED = "ACCESS_DENIED"
PROPOSAL_EXPIRED = "PROPOSAL_EXPIRED"
ALREADY_RESOLVED = "ALREADY_RESOLVED"
VALIDATION_ERROR = "VALIDATION_ERROR"


def access_denied() -> Error:
    return Error(ACCESS_DENIED, "Invalid or unknown proposal link")


def proposal_expired() -> Error:
    return Error(PROPOSAL_EXPIRED, "This proposal has expired")


def already_resolved() -> Error:
    return Error(ALREADY_RESOLVED, "This proposal has already been responded to")


def validation_error(message: str) -> Error:
    return Error(VALIDATION_ERROR, message)
