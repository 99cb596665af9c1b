"""Data models for item operations.

This module defines the payload sent to the Qiita items endpoints and the
result of reconciling one document.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from qiita_sync.file_mapper.models import Tag

DEFAULT_TITLE = "Untitled"


class ReconcileAction(Enum):
    """Remote write performed for a document."""

    CREATE = "create"
    UPDATE = "update"


@dataclass
class ItemPayload:
    """Request body for item creation and update.

    Attributes:
        body: Markdown body
        title: Item title
        tags: Tags in canonical form
        private: Always False; this tool only publishes public items
    """
    body: str
    title: str = DEFAULT_TITLE
    tags: List[Tag] = field(default_factory=list)
    private: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "body": self.body,
            "private": self.private,
            "tags": [tag.to_dict() for tag in self.tags],
            "title": self.title,
        }


@dataclass
class ReconcileResult:
    """Outcome of reconciling one document.

    Attributes:
        file_path: Document that was reconciled
        action: CREATE for a first publish, UPDATE afterwards
        item_id: Remote item ID
        created_at: Creation timestamp as stored in the document
        updated_at: Update timestamp returned by the server
    """
    file_path: str
    action: ReconcileAction
    item_id: str
    created_at: Optional[Any] = None
    updated_at: Optional[Any] = None
