"""Command-line interface for publishing documents to Qiita.

This package provides the `qiita-sync` CLI tool that selects changed
Markdown documents from git and publishes them through the Qiita API, with
progress output and exit codes for CI workflows.
"""

from .sync_command import SyncCommand
from .config import SyncSettings, load_settings
from .models import ExitCode, SyncSummary
from .errors import CLIError, SettingsError

__all__ = [
    'SyncCommand',
    'SyncSettings',
    'load_settings',
    'ExitCode',
    'SyncSummary',
    'CLIError',
    'SettingsError',
]
