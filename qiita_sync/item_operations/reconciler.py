"""Create-or-update reconciliation of local documents with Qiita items.

This module provides the Reconciler class. For one document it parses the
frontmatter, decides between creating and updating the remote item, sends
the payload, and writes the server-assigned identity and timestamps back
into the document. The document is only rewritten after the server accepted
the write, so a failed call leaves the file exactly as it was.
"""

import logging
from typing import Optional

from qiita_sync.file_mapper.document_store import DocumentStore
from qiita_sync.file_mapper.frontmatter_handler import FrontmatterHandler
from qiita_sync.file_mapper.models import ItemFrontmatter
from qiita_sync.qiita_client.api_wrapper import APIWrapper
from qiita_sync.qiita_client.errors import APIAccessError

from .models import DEFAULT_TITLE, ItemPayload, ReconcileAction, ReconcileResult

logger = logging.getLogger(__name__)


class Reconciler:
    """Publishes documents to Qiita, one at a time.

    State per document:
        UNPUBLISHED --create--> PUBLISHED --update--> PUBLISHED

    A document without an `id` is created and receives id, created_at and
    updated_at from the response. A document with an `id` is updated in
    place and only its updated_at changes.

    Example:
        >>> reconciler = Reconciler(APIWrapper(credentials))
        >>> result = reconciler.reconcile("/repo/public/hello.md")
        >>> result.action, result.item_id
        (<ReconcileAction.CREATE: 'create'>, 'c686397e4a0f4f11683d')
    """

    def __init__(self, api: APIWrapper, store: Optional[DocumentStore] = None):
        """Initialize the reconciler.

        Args:
            api: Qiita API wrapper used for create and update calls
            store: Document store for reading and writing files (optional)
        """
        self.api = api
        self.store = store or DocumentStore()

    @staticmethod
    def build_payload(frontmatter: ItemFrontmatter, body: str) -> ItemPayload:
        """Convert frontmatter and body into the item payload."""
        title = frontmatter.title
        if title is None or str(title) == "":
            title = DEFAULT_TITLE
        return ItemPayload(
            body=body,
            title=str(title),
            tags=list(frontmatter.tags),
            private=False,
        )

    def reconcile(self, file_path: str) -> ReconcileResult:
        """Create or update the remote item for one document.

        Args:
            file_path: Path of the document to publish

        Returns:
            ReconcileResult describing the write that was made

        Raises:
            QiitaError: If the create or update call fails (file untouched)
            FilesystemError: If the document can't be read or written back
        """
        content = self.store.read(file_path)
        document = FrontmatterHandler.parse(file_path, content)
        frontmatter = document.frontmatter
        payload = self.build_payload(frontmatter, document.body).to_dict()

        if not frontmatter.is_published:
            logger.info(f"Creating item: {file_path}")
            response = self.api.create_item(payload)

            item_id = response.get("id")
            if not item_id:
                raise APIAccessError(
                    f"Create response for {file_path} has no item id",
                    payload=response,
                )

            frontmatter.id = item_id
            frontmatter.created_at = response.get("created_at")
            frontmatter.updated_at = response.get("updated_at")
            action = ReconcileAction.CREATE
        else:
            item_id = str(frontmatter.id).strip()
            logger.info(f"Updating item: {file_path} (id: {item_id})")
            response = self.api.update_item(item_id, payload)

            updated_at = response.get("updated_at")
            if updated_at is not None:
                frontmatter.updated_at = updated_at
            else:
                logger.warning(f"Update response for item {item_id} has no updated_at")
            action = ReconcileAction.UPDATE

        self.store.write(file_path, FrontmatterHandler.generate(document))
        logger.info(f"Wrote back frontmatter: {file_path}")

        return ReconcileResult(
            file_path=file_path,
            action=action,
            item_id=str(item_id),
            created_at=frontmatter.created_at,
            updated_at=frontmatter.updated_at,
        )
