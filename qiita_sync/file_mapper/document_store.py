"""Reading and atomically rewriting local documents.

Files are read and written with newline translation disabled so that a
document's body keeps its exact line endings across a sync.
"""

import logging
import os
import shutil
import tempfile

from .errors import FilesystemError

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10 MB in bytes


class DocumentStore:
    """Reads documents and replaces them atomically.

    A write goes to a temporary file in the target's directory and is then
    moved over the original with os.replace, so a failed write never leaves
    a half-written document behind.

    Example:
        >>> store = DocumentStore()
        >>> text = store.read("public/hello.md")
        >>> store.write("public/hello.md", text)
    """

    def __init__(self, max_file_size: int = MAX_FILE_SIZE):
        self.max_file_size = max_file_size

    def _validate_file_size(self, file_path: str) -> None:
        """Reject files larger than max_file_size before reading them.

        Raises:
            FilesystemError: If the file is too large or can't be stat'ed
        """
        try:
            file_size = os.path.getsize(file_path)
        except OSError as e:
            raise FilesystemError(file_path, 'stat', f'Failed to check file size: {e}')

        if file_size > self.max_file_size:
            size_mb = file_size / (1024 * 1024)
            max_mb = self.max_file_size / (1024 * 1024)
            raise FilesystemError(
                file_path,
                'read',
                f'File size ({size_mb:.2f} MB) exceeds maximum allowed size ({max_mb:.0f} MB)'
            )

    def read(self, file_path: str) -> str:
        """Read a UTF-8 document.

        Raises:
            FilesystemError: If the file is missing, too large or unreadable
        """
        self._validate_file_size(file_path)
        try:
            with open(file_path, 'r', encoding='utf-8', newline='') as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise FilesystemError(file_path, 'read', str(e))

    def write(self, file_path: str, content: str) -> None:
        """Atomically replace a document's content.

        Raises:
            FilesystemError: If the temporary file can't be written or moved
        """
        directory = os.path.dirname(os.path.abspath(file_path))
        temp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                'w',
                encoding='utf-8',
                newline='',
                dir=directory,
                prefix='.qiita-sync-',
                suffix='.tmp',
                delete=False,
            ) as f:
                temp_path = f.name
                f.write(content)

            if os.path.exists(file_path):
                shutil.copymode(file_path, temp_path)
            os.replace(temp_path, file_path)
            temp_path = None
            logger.debug(f"Wrote {file_path}")
        except OSError as e:
            raise FilesystemError(file_path, 'write', str(e))
        finally:
            if temp_path and os.path.exists(temp_path):
                try:
                    os.remove(temp_path)
                except OSError as e:
                    logger.warning(f"Failed to remove temp file {temp_path}: {e}")
