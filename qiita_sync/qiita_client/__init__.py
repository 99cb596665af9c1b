"""Qiita client library for publishing Markdown documents.

This package provides Python abstractions over the Qiita v2 REST API items
endpoints, with typed errors and credential loading.
"""

from .errors import (
    SyncError,
    QiitaError,
    InvalidCredentialsError,
    ItemNotFoundError,
    APIUnreachableError,
    APIAccessError,
)

__all__ = [
    "SyncError",
    "QiitaError",
    "InvalidCredentialsError",
    "ItemNotFoundError",
    "APIUnreachableError",
    "APIAccessError",
]
