"""Data models for CLI operations.

This module defines the exit codes and the run summary used by the CLI.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List

from qiita_sync.item_operations.models import ReconcileAction, ReconcileResult


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): All selected documents synced, or nothing to do
    - GENERAL_ERROR (1): Unexpected error, unreadable document, bad setting
    - GIT_ERROR (2): Changed documents couldn't be determined
    - AUTH_ERROR (3): Access token missing or rejected
    - NETWORK_ERROR (4): Qiita API unreachable
    - API_ERROR (5): Qiita API rejected a write

    Example:
        >>> sys.exit(ExitCode.SUCCESS)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    GIT_ERROR = 2
    AUTH_ERROR = 3
    NETWORK_ERROR = 4
    API_ERROR = 5


@dataclass
class SyncSummary:
    """Documents reconciled during a run, in processing order.

    Attributes:
        results: One ReconcileResult per successfully synced document
    """
    results: List[ReconcileResult] = field(default_factory=list)

    @property
    def created(self) -> List[ReconcileResult]:
        return [r for r in self.results if r.action is ReconcileAction.CREATE]

    @property
    def updated(self) -> List[ReconcileResult]:
        return [r for r in self.results if r.action is ReconcileAction.UPDATE]
