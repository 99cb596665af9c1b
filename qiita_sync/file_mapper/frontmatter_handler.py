"""YAML frontmatter parsing and generation for markdown files.

This module handles reading and writing YAML frontmatter in markdown files.
Frontmatter carries the Qiita item identity (id, created_at, updated_at)
alongside author-written metadata such as title and tags.

Parsing is lenient: a frontmatter block that isn't valid YAML or isn't a
mapping is logged and treated as empty metadata so the document can still
be published. A block that loads as a mapping is kept even when it nests
deeply, since it may carry the id of an already published item.
"""

import logging
import re
from typing import Optional, Tuple

import yaml

from .errors import FrontmatterError
from .models import ItemFrontmatter, LocalDocument

logger = logging.getLogger(__name__)


class FrontmatterHandler:
    """Handles YAML frontmatter operations for markdown files.

    Frontmatter format:
        ---
        title: Hello
        tags:
        - python
        - name: django
          versions: ['5.0']
        id: c686397e4a0f4f11683d
        created_at: '2024-01-01T09:00:00+09:00'
        updated_at: '2024-01-02T09:00:00+09:00'
        ---
        Body text...

    The body is kept byte-for-byte; only the frontmatter block is regenerated.
    """

    # Opening and closing delimiters; the block may be empty
    FRONTMATTER_PATTERN = re.compile(
        r'\A---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)',
        re.DOTALL
    )

    # Deeper metadata fails strict extraction
    MAX_YAML_DEPTH = 10

    @classmethod
    def _exceeds_depth(cls, node, depth: int = 1, checked: Optional[dict] = None) -> bool:
        """Return True if dicts and lists nest more than MAX_YAML_DEPTH levels.

        The walk stops at the limit, so self-referencing aliases terminate.
        Containers shared through aliases are only walked again when reached
        at a deeper level than before.
        """
        if not isinstance(node, (dict, list)):
            return False
        if depth > cls.MAX_YAML_DEPTH:
            return True
        if checked is None:
            checked = {}
        if checked.get(id(node), 0) >= depth:
            return False

        children = node.values() if isinstance(node, dict) else node
        if any(cls._exceeds_depth(child, depth + 1, checked) for child in children):
            return True
        checked[id(node)] = depth
        return False

    @classmethod
    def _load_mapping(cls, frontmatter_str: str, file_path: str) -> dict:
        """Load a frontmatter block as a mapping ({} for an empty block).

        Raises:
            FrontmatterError: If the block isn't valid YAML or isn't a mapping
        """
        try:
            frontmatter = yaml.safe_load(frontmatter_str)
        except yaml.YAMLError as e:
            raise FrontmatterError(file_path, f"Invalid YAML syntax: {e}")

        if frontmatter is None:
            return {}

        if not isinstance(frontmatter, dict):
            raise FrontmatterError(
                file_path,
                f"Frontmatter must be a YAML dictionary, got {type(frontmatter).__name__}"
            )
        return frontmatter

    @classmethod
    def split(cls, content: str) -> Tuple[Optional[str], str]:
        """Split content into the raw frontmatter block and the body.

        Returns:
            Tuple of (frontmatter_text, body). frontmatter_text is None when
            the content has no frontmatter block.
        """
        match = cls.FRONTMATTER_PATTERN.match(content)
        if not match:
            return None, content
        return match.group(1) or "", content[match.end():]

    @classmethod
    def extract_frontmatter_and_content(cls, content: str, file_path: str = "<unknown>") -> Tuple[dict, str]:
        """Extract frontmatter dict and content separately (strict).

        Args:
            content: Full markdown content including frontmatter
            file_path: Path used in error messages

        Returns:
            Tuple of (frontmatter_dict, markdown_content).
            Returns ({}, content) if no frontmatter found.

        Raises:
            FrontmatterError: If the block isn't valid YAML, isn't a mapping,
                or nests too deeply
        """
        frontmatter_str, markdown_content = cls.split(content)
        if frontmatter_str is None:
            return {}, content

        frontmatter = cls._load_mapping(frontmatter_str, file_path)

        if cls._exceeds_depth(frontmatter):
            raise FrontmatterError(
                file_path,
                f"YAML nesting exceeds the limit of {cls.MAX_YAML_DEPTH} levels"
            )

        return frontmatter, markdown_content

    @classmethod
    def parse(cls, file_path: str, content: str) -> LocalDocument:
        """Parse a document, defaulting malformed frontmatter to empty metadata.

        A block that loads as a mapping is always kept, even when it nests
        deeper than MAX_YAML_DEPTH, so an existing id is never lost.

        Args:
            file_path: Path to the file (for log messages)
            content: Full markdown content including frontmatter

        Returns:
            LocalDocument with typed frontmatter and the untouched body
        """
        frontmatter_str, body = cls.split(content)
        if frontmatter_str is None:
            return LocalDocument(file_path=file_path, frontmatter=ItemFrontmatter(), body=body)

        try:
            mapping = cls._load_mapping(frontmatter_str, file_path)
        except FrontmatterError as e:
            logger.warning(f"{e} - treating metadata as empty")
            return LocalDocument(
                file_path=file_path,
                frontmatter=ItemFrontmatter(),
                body=body,
                frontmatter_valid=False,
            )

        if cls._exceeds_depth(mapping):
            logger.warning(
                f"Frontmatter in {file_path} nests deeper than "
                f"{cls.MAX_YAML_DEPTH} levels - keeping it as written"
            )

        return LocalDocument(
            file_path=file_path,
            frontmatter=ItemFrontmatter.from_mapping(mapping),
            body=body,
        )

    @classmethod
    def generate(cls, document: LocalDocument) -> str:
        """Generate markdown content with YAML frontmatter.

        Keys keep the order they had in the original file; identity fields
        added by the server are appended.

        Args:
            document: LocalDocument to serialize

        Returns:
            Full markdown content with frontmatter
        """
        mapping = document.frontmatter.to_mapping()

        yaml_str = yaml.safe_dump(
            mapping,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

        return f"---\n{yaml_str}---\n{document.body}"
