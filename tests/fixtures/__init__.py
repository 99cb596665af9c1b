"""Test fixtures for qiita-sync tests.

This module provides test fixtures for:
- Sample Markdown documents with and without frontmatter
- Sample Qiita API responses
- Git repository fixtures for change selection tests
"""

from .sample_documents import (
    DOC_UNPUBLISHED,
    DOC_PUBLISHED,
    DOC_WITH_CUSTOM_FIELDS,
    DOC_NO_FRONTMATTER,
    DOC_MALFORMED_FRONTMATTER,
    CREATE_RESPONSE,
    UPDATE_RESPONSE,
)
from .git_test_repos import (
    docs_repo,
    empty_git_repo,
    commit_all,
    write_files,
)

__all__ = [
    'DOC_UNPUBLISHED',
    'DOC_PUBLISHED',
    'DOC_WITH_CUSTOM_FIELDS',
    'DOC_NO_FRONTMATTER',
    'DOC_MALFORMED_FRONTMATTER',
    'CREATE_RESPONSE',
    'UPDATE_RESPONSE',
    'docs_repo',
    'empty_git_repo',
    'commit_all',
    'write_files',
]
