from typing import Optional


class SessionApiError(Exception):
    """Base for every failure surfaced to a view as a human-readable message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NetworkError(SessionApiError):
    pass


class HttpStatusError(SessionApiError):
    def __init__(self, message: str, status_code: int, path: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.path = path


class MissingCredentialError(SessionApiError):
    def __init__(self, message: str = "No authentication token found"):
        super().__init__(message)
