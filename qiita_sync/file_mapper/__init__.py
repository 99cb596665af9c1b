"""File mapping between local Markdown documents and Qiita items.

This package parses and regenerates YAML frontmatter and reads and writes
documents on disk.
"""

from .document_store import DocumentStore
from .errors import FileMapperError, FilesystemError, FrontmatterError
from .frontmatter_handler import FrontmatterHandler
from .models import IDENTITY_FIELDS, ItemFrontmatter, LocalDocument, Tag, normalize_tags

__all__ = [
    'DocumentStore',
    'FileMapperError',
    'FilesystemError',
    'FrontmatterError',
    'FrontmatterHandler',
    'IDENTITY_FIELDS',
    'ItemFrontmatter',
    'LocalDocument',
    'Tag',
    'normalize_tags',
]
