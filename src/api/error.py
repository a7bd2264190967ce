from fastapi import status
from libs.result import Error

INTERNAL_ERROR_MESSAGE = "Internal server error"


class ClientError(Exception):
    """Failure the caller can act on; code and message are returned as-is."""

    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)

    def to_dict(self) -> dict:
        return {"code": self.base_error.code, "message": self.base_error.message}


class ServerError(Exception):
    """Failure whose message stays in the logs; callers only see the code."""

    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)

    def to_dict(self) -> dict:
        return {"code": self.base_error.code, "message": INTERNAL_ERROR_MESSAGE}
