"""Per-entry records and run summary produced by the tree copier."""

import posixpath
from typing import Any, Dict, Iterator, List, Optional, Sequence

from anytree import Node

from vault2content.types import Disposition, EntryKind


class CopyRecord:
    """Diagnostic record for one visited entry.

    Attributes:
        path (str): Path relative to the vault root, using '/' separators.
        kind (EntryKind): File or directory.
        disposition (Disposition): What happened to the entry.
        reason (str): Why: the matched rule for exclusions, the skip cause for skipped
            entries, or a short description of the copy.
        warning (Optional[str]): Non-fatal problem noticed on the way, such as
            malformed frontmatter.
        size (Optional[int]): Number of bytes written for copied files.

    Example:
        >>> record = CopyRecord("notes/a.md", EntryKind.FILE, Disposition.EXCLUDED, 'tag "draft"')
        >>> record.as_dict()["disposition"]
        'excluded'
    """

    def __init__(
        self,
        path: str,
        kind: EntryKind,
        disposition: Disposition,
        reason: str,
        warning: Optional[str] = None,
        size: Optional[int] = None,
    ) -> None:
        self.path = path
        self.kind = kind
        self.disposition = disposition
        self.reason = reason
        self.warning = warning
        self.size = size

    @property
    def is_dir(self) -> bool:
        return self.kind == EntryKind.DIRECTORY

    def as_dict(self) -> Dict[str, Any]:
        """Return the record as a JSON-serializable mapping."""
        result: Dict[str, Any] = {
            "path": self.path,
            "kind": self.kind.value,
            "disposition": self.disposition.value,
            "reason": self.reason,
        }
        if self.warning is not None:
            result["warning"] = self.warning
        if self.size is not None:
            result["size"] = self.size
        return result

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, CopyRecord):
            return False
        return self.as_dict() == other.as_dict()

    def __repr__(self) -> str:
        return (
            f"CopyRecord(path={self.path!r}, kind={self.kind.value!r}, "
            f"disposition={self.disposition.value!r}, reason={self.reason!r})"
        )


class PublishedNode(Node):  # type: ignore
    """Node of the tree of published entries.

    Extends anytree.Node with the entry kind and, for files, the number of bytes copied
    (``byte_size``; anytree reserves ``size`` for the subtree node count).

    Example:
        >>> root = PublishedNode("content", is_dir=True)
        >>> note = PublishedNode("a.md", parent=root, size=12)
        >>> [child.name for child in root.children], note.is_dir
        (['a.md'], False)
    """

    def __init__(
        self,
        name: str,
        parent: Optional["PublishedNode"] = None,
        is_dir: bool = False,
        size: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.is_dir = is_dir
        self.byte_size = size


class CopyReport:
    """Collected outcome of one filtered copy.

    Records are kept in visiting order. Counters and the tree of published entries are
    updated as records are added.

    Attributes:
        records (List[CopyRecord]): Every record, in the order entries were visited.
        tree (PublishedNode): Root of the tree of copied files and mirrored directories.
        bytes_copied (int): Total size of the copied files.

    Example:
        >>> report = CopyReport("content")
        >>> report.add(CopyRecord("Notes", EntryKind.DIRECTORY, Disposition.COPIED, "created directory"))
        >>> report.add(CopyRecord("Notes/a.md", EntryKind.FILE, Disposition.COPIED, "copied", size=10))
        >>> report.add(CopyRecord("Notes/b.md", EntryKind.FILE, Disposition.EXCLUDED, 'tag "draft"'))
        >>> report.files_copied, report.excluded_count, report.published_notes
        (1, 1, 1)
        >>> print(report.get_tree_representation())
        content/
        └── Notes/
            └── a.md
    """

    def __init__(self, root_name: str, note_extensions: Sequence[str] = (".md",)) -> None:
        self.records: List[CopyRecord] = []
        self.tree = PublishedNode(root_name, is_dir=True)
        self.bytes_copied = 0
        self._note_extensions = tuple(ext.lower() for ext in note_extensions)
        self._nodes: Dict[str, PublishedNode] = {"": self.tree}

    def add(self, record: CopyRecord) -> None:
        """Append a record and update counters and the published tree."""
        self.records.append(record)
        if record.disposition != Disposition.COPIED:
            return
        if record.size is not None:
            self.bytes_copied += record.size
        self._attach(record)

    def _attach(self, record: CopyRecord) -> None:
        parent_path, name = posixpath.split(record.path)
        parent = self._nodes.get(parent_path)
        if parent is None:
            # Records normally arrive parent first; create missing directories anyway
            self._attach(CopyRecord(parent_path, EntryKind.DIRECTORY, Disposition.COPIED, "created directory"))
            parent = self._nodes[parent_path]
        node = self._nodes.get(record.path)
        if node is None:
            node = PublishedNode(name, parent=parent, is_dir=record.is_dir, size=record.size)
            self._nodes[record.path] = node
        else:
            node.byte_size = record.size

    def iter_records(self, disposition: Optional[Disposition] = None) -> Iterator[CopyRecord]:
        """Iterate over records, optionally only those with the given disposition."""
        for record in self.records:
            if disposition is None or record.disposition == disposition:
                yield record

    @property
    def files_copied(self) -> int:
        return sum(1 for record in self.iter_records(Disposition.COPIED) if not record.is_dir)

    @property
    def directories_created(self) -> int:
        return sum(1 for record in self.iter_records(Disposition.COPIED) if record.is_dir)

    @property
    def excluded_count(self) -> int:
        return sum(1 for _ in self.iter_records(Disposition.EXCLUDED))

    @property
    def skipped_count(self) -> int:
        return sum(1 for _ in self.iter_records(Disposition.SKIPPED))

    @property
    def published_notes(self) -> int:
        """Number of copied files that are notes."""
        return sum(
            1
            for record in self.iter_records(Disposition.COPIED)
            if not record.is_dir and posixpath.splitext(record.path)[1].lower() in self._note_extensions
        )

    @property
    def warnings(self) -> List[CopyRecord]:
        """Records carrying a non-fatal warning."""
        return [record for record in self.records if record.warning is not None]

    def stream_tree_representation(self) -> Iterator[str]:
        """Generate the tree of published entries one line at a time.

        Output mirrors the Unix ``tree`` command: directories first, then files, both
        sorted case-insensitively.

        Yields:
            Lines of the tree representation, without trailing newlines.
        """

        def write_node(
            node: PublishedNode, prefix: str = "", is_last: bool = True, is_root: bool = False
        ) -> Iterator[str]:
            if is_root:
                yield f"{node.name}/"
            else:
                connector = "└── " if is_last else "├── "
                suffix = "/" if node.is_dir else ""
                yield f"{prefix}{connector}{node.name}{suffix}"

            sorted_children = sorted(node.children, key=lambda n: (not n.is_dir, n.name.lower()))
            for i, child in enumerate(sorted_children):
                is_last_child = i == len(sorted_children) - 1
                if is_root:
                    new_prefix = ""
                else:
                    new_prefix = prefix + ("    " if is_last else "│   ")
                yield from write_node(child, new_prefix, is_last_child)

        yield from write_node(self.tree, is_root=True)

    def get_tree_representation(self) -> str:
        """Get the complete tree of published entries as a string."""
        return "\n".join(self.stream_tree_representation())
