"""Typed exception hierarchy for Qiita-related errors.

This module defines all custom exceptions used by the Qiita client library.
All exceptions inherit from QiitaError (itself a SyncError) for easy catching
and include descriptive messages with context to help with debugging.
"""

from typing import Any, Optional


class SyncError(Exception):
    """Base exception for all qiita-sync errors.

    Use this to catch any application-level error from the sync tool.
    """
    pass


class QiitaError(SyncError):
    """Base exception for all Qiita API errors."""
    pass


class InvalidCredentialsError(QiitaError):
    """Raised when the access token is missing or rejected by the API."""

    def __init__(self, endpoint: str, reason: Optional[str] = None, payload: Any = None):
        message = f"Access token is missing or invalid (endpoint: {endpoint})"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.endpoint = endpoint
        self.reason = reason
        self.payload = payload


class ItemNotFoundError(QiitaError):
    """Raised when an item addressed by id does not exist on the server."""

    def __init__(self, item_id: str, detail: Optional[str] = None, payload: Any = None):
        message = f"Item {item_id} not found"
        if detail:
            message += f": {detail}"
        super().__init__(message)
        self.item_id = item_id
        self.payload = payload


class APIUnreachableError(QiitaError):
    """Raised when the Qiita API is not available or unreachable."""

    def __init__(self, endpoint: str, reason: Optional[str] = None):
        message = f"API is not available at {endpoint}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.endpoint = endpoint
        self.reason = reason


class APIAccessError(QiitaError):
    """Raised when the API rejects a request or returns an unusable response.

    Attributes:
        status_code: HTTP status code (None when no response was received)
        payload: Error payload returned by the server, if any
    """

    def __init__(
        self,
        message: str = "Qiita API failure",
        status_code: Optional[int] = None,
        payload: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload
