"""Item operations for publishing documents to Qiita.

This package provides the Reconciler, which creates or updates one Qiita
item per document and records the server's identity in the document.
"""

from .models import DEFAULT_TITLE, ItemPayload, ReconcileAction, ReconcileResult
from .reconciler import Reconciler

__all__ = [
    'DEFAULT_TITLE',
    'ItemPayload',
    'ReconcileAction',
    'ReconcileResult',
    'Reconciler',
]
