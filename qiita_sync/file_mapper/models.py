"""Data models for file mapper.

This module defines the typed view over a document's YAML frontmatter.
All models use dataclasses for clean, type-safe data structures.

Decoding is lenient: missing or oddly typed fields fall back to defaults
instead of raising. Encoding starts from the original mapping so keys the
tool doesn't know about survive a read-modify-write cycle untouched.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Fields written back from server responses
IDENTITY_FIELDS = ("id", "created_at", "updated_at")


@dataclass
class Tag:
    """A Qiita tag in its canonical wire form.

    Attributes:
        name: Tag name (e.g., "python")
        versions: Version strings attached to the tag (e.g., ["3.12"])
        extra: Any other keys found on a structured entry, passed through
    """
    name: str
    versions: List[Any] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_entry(cls, entry: Any) -> "Tag":
        """Build a Tag from a bare name or a {name, versions} mapping."""
        if isinstance(entry, dict):
            extra = {k: v for k, v in entry.items() if k not in ("name", "versions")}
            name = entry.get("name")
            versions = entry.get("versions")
            if versions is None:
                versions = []
            elif not isinstance(versions, list):
                versions = [versions]
            return cls(
                name="" if name is None else str(name),
                versions=list(versions),
                extra=extra,
            )
        return cls(name=str(entry))

    def to_dict(self) -> Dict[str, Any]:
        """Return the tag as sent to the API."""
        return {"name": self.name, "versions": list(self.versions), **self.extra}


def normalize_tags(raw_tags: Any) -> List[Tag]:
    """Normalize a frontmatter `tags` value to a list of Tag objects.

    Order is preserved. A single scalar is treated as a one-element list,
    and null entries are skipped.

    Example:
        >>> [t.to_dict() for t in normalize_tags(["a", {"name": "b", "versions": ["1"]}])]
        [{'name': 'a', 'versions': []}, {'name': 'b', 'versions': ['1']}]
    """
    if raw_tags is None:
        return []
    if not isinstance(raw_tags, list):
        raw_tags = [raw_tags]
    return [Tag.from_entry(entry) for entry in raw_tags if entry is not None]


@dataclass
class ItemFrontmatter:
    """Typed view over a document's frontmatter mapping.

    Attributes:
        id: Qiita item ID (None until the document is first published)
        title: Document title (None when absent)
        tags: Normalized tag list
        created_at: Server-assigned creation timestamp
        updated_at: Server-assigned last update timestamp
        raw: The original mapping, in its original key order
    """
    id: Optional[Any] = None
    title: Optional[Any] = None
    tags: List[Tag] = field(default_factory=list)
    created_at: Optional[Any] = None
    updated_at: Optional[Any] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, mapping: Any) -> "ItemFrontmatter":
        """Decode a parsed YAML mapping; anything that isn't a dict is treated as empty."""
        if not isinstance(mapping, dict):
            mapping = {}
        return cls(
            id=mapping.get("id"),
            title=mapping.get("title"),
            tags=normalize_tags(mapping.get("tags")),
            created_at=mapping.get("created_at"),
            updated_at=mapping.get("updated_at"),
            raw=dict(mapping),
        )

    @property
    def is_published(self) -> bool:
        """True once the document has a remote item id."""
        return self.id is not None and str(self.id).strip() != ""

    def to_mapping(self) -> Dict[str, Any]:
        """Encode back to a mapping, merging identity fields into the original.

        Existing keys keep their position; new identity keys are appended.
        Identity fields that are None leave the original value alone.
        """
        mapping = dict(self.raw)
        for key in IDENTITY_FIELDS:
            value = getattr(self, key)
            if value is not None:
                mapping[key] = value
        return mapping


@dataclass
class LocalDocument:
    """A local Markdown file split into frontmatter and body.

    Attributes:
        file_path: Path to the markdown file
        frontmatter: Typed frontmatter view
        body: Markdown content (without frontmatter), byte-for-byte
        frontmatter_valid: False when the frontmatter block couldn't be parsed
    """
    file_path: str
    frontmatter: ItemFrontmatter = field(default_factory=ItemFrontmatter)
    body: str = ""
    frontmatter_valid: bool = True
