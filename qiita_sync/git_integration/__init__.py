"""Git integration for selecting documents to publish.

This package asks the local git repository which managed documents changed
relative to the upstream branch.
"""

from qiita_sync.git_integration.change_selector import ChangeSelector
from qiita_sync.git_integration.errors import GitRepositoryError

__all__ = [
    'ChangeSelector',
    'GitRepositoryError',
]
