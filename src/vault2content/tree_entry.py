"""Vault entries as seen by the exclusion rules."""

import posixpath
from types import MappingProxyType
from typing import Any, Mapping, Optional

from vault2content.types import EntryKind, FrontmatterValue


class TreeEntry:
    """A file or directory under evaluation.

    Entries are created one at a time while the vault is walked and discarded once
    their decision has been acted on.

    Attributes:
        relative_path (str): Path from the vault root, always using '/' separators.
        kind (EntryKind): Whether the entry is a file or a directory.
        frontmatter (Optional[Mapping[str, FrontmatterValue]]): Parsed note metadata, or
            None when the file carries no metadata or it could not be parsed.
        parse_error (Optional[str]): Why the metadata could not be parsed, if it failed.

    Example:
        >>> entry = TreeEntry.file("Notes/idea.md", frontmatter={"tags": ["public"]})
        >>> entry.name, entry.is_dir
        ('idea.md', False)
        >>> TreeEntry.directory("Notes\\\\Archive").relative_path
        'Notes/Archive'
    """

    def __init__(
        self,
        relative_path: str,
        kind: EntryKind,
        frontmatter: Optional[Mapping[str, FrontmatterValue]] = None,
        parse_error: Optional[str] = None,
    ) -> None:
        if kind == EntryKind.DIRECTORY and (frontmatter is not None or parse_error is not None):
            raise ValueError("Directories cannot carry frontmatter")
        self.relative_path = relative_path.replace("\\", "/")
        self.kind = kind
        self.frontmatter = MappingProxyType(dict(frontmatter)) if frontmatter is not None else None
        self.parse_error = parse_error

    @classmethod
    def file(
        cls,
        relative_path: str,
        frontmatter: Optional[Mapping[str, FrontmatterValue]] = None,
        parse_error: Optional[str] = None,
    ) -> "TreeEntry":
        return cls(relative_path, EntryKind.FILE, frontmatter, parse_error)

    @classmethod
    def directory(cls, relative_path: str) -> "TreeEntry":
        return cls(relative_path, EntryKind.DIRECTORY)

    @property
    def name(self) -> str:
        """The last path component."""
        return posixpath.basename(self.relative_path.rstrip("/"))

    @property
    def is_dir(self) -> bool:
        return self.kind == EntryKind.DIRECTORY

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, TreeEntry):
            return False
        return (
            self.relative_path == other.relative_path
            and self.kind == other.kind
            and self.frontmatter == other.frontmatter
            and self.parse_error == other.parse_error
        )

    def __hash__(self) -> int:
        return hash((self.relative_path, self.kind))

    def __repr__(self) -> str:
        return f"TreeEntry(relative_path={self.relative_path!r}, kind={self.kind.value!r})"
