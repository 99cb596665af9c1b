"""Errors raised by the command-line layer before any document is synced."""

from typing import Optional

from qiita_sync.qiita_client.errors import SyncError


class CLIError(SyncError):
    """Base exception for command-line errors."""
    pass


class SettingsError(CLIError):
    """Raised when a sync setting from the environment is invalid."""

    def __init__(self, message: str, setting: Optional[str] = None):
        if setting:
            full_message = f"Invalid setting '{setting}': {message}"
        else:
            full_message = f"Invalid setting: {message}"
        super().__init__(full_message)
        self.setting = setting
        self.original_message = message
