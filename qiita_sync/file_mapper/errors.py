"""Errors raised while reading, parsing or writing back local documents."""

from typing import Optional

from qiita_sync.qiita_client.errors import SyncError


class FileMapperError(SyncError):
    """Base exception for local document errors."""
    pass


class FilesystemError(FileMapperError):
    """A document couldn't be stat'ed, read or written.

    Attributes:
        file_path: Document path
        operation: One of 'stat', 'read', 'write'
        reason: OS error text, if any
    """

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        detail = f": {reason}" if reason else ""
        super().__init__(f"Cannot {operation} document {file_path}{detail}")
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class FrontmatterError(FileMapperError):
    """The metadata block at the top of a document isn't a usable YAML mapping."""

    def __init__(self, file_path: str, message: str):
        super().__init__(f"Invalid frontmatter in {file_path}: {message}")
        self.file_path = file_path
        self.message = message
