"""Sync settings loaded from the environment.

Settings decide which documents are considered for publishing. They are
read once at startup from environment variables (a .env file is loaded
with python-dotenv) and passed explicitly to the components that need them.

Environment variables:
    QIITA_SYNC_BASE_REF: Revision to diff against (default: origin/main)
    QIITA_SYNC_ROOT: Directory holding the managed documents (default: public)
    QIITA_SYNC_EXTENSION: Managed document extension (default: .md)
"""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from qiita_sync.cli.errors import SettingsError

logger = logging.getLogger(__name__)

DEFAULT_BASE_REF = "origin/main"
DEFAULT_ROOT_DIR = "public"
DEFAULT_EXTENSION = ".md"


@dataclass(frozen=True)
class SyncSettings:
    """Where to look for changed documents.

    Attributes:
        base_ref: Revision to diff against
        root_dir: Managed directory, relative to the working directory
        extension: Managed document extension, including the leading dot
    """
    base_ref: str = DEFAULT_BASE_REF
    root_dir: str = DEFAULT_ROOT_DIR
    extension: str = DEFAULT_EXTENSION


def _getenv(name: str, default: str) -> str:
    """Return a stripped environment value, or default when unset or blank."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def load_settings() -> SyncSettings:
    """Load sync settings from the environment.

    Returns:
        SyncSettings with defaults for unset variables

    Raises:
        SettingsError: If a variable is set to an unusable value
    """
    load_dotenv()

    base_ref = _getenv("QIITA_SYNC_BASE_REF", DEFAULT_BASE_REF)
    root_dir = _getenv("QIITA_SYNC_ROOT", DEFAULT_ROOT_DIR)
    extension = _getenv("QIITA_SYNC_EXTENSION", DEFAULT_EXTENSION)

    if base_ref.startswith("-"):
        raise SettingsError("must be a revision, not an option", "QIITA_SYNC_BASE_REF")

    if not extension.startswith("."):
        extension = f".{extension}"
    if extension == ".":
        raise SettingsError("must not be empty", "QIITA_SYNC_EXTENSION")

    settings = SyncSettings(base_ref=base_ref, root_dir=root_dir, extension=extension)
    logger.debug(f"Loaded settings: {settings}")
    return settings
