"""Filtered, mirrored copy of a vault directory tree.

This module provides the FilteredTreeCopier class, which walks a vault depth-first,
asks an ExclusionEvaluator about every directory and file, and copies the admitted
files to the same relative path under a destination directory.
"""

import os
import shutil
from pathlib import Path
from typing import Callable, Iterator, Mapping, Optional, Set

from vault2content.evaluator import ExclusionEvaluator
from vault2content.exceptions import FrontmatterParseError
from vault2content.frontmatter import parse_frontmatter
from vault2content.rule_set import RuleSet
from vault2content.tree_copier.copy_report import CopyRecord, CopyReport
from vault2content.tree_copier.file_identifier import FileIdentifier
from vault2content.tree_entry import TreeEntry
from vault2content.types import Disposition, EntryKind, FrontmatterValue, PathType

FrontmatterParser = Callable[[bytes], Mapping[str, FrontmatterValue]]

UNSUPPORTED_FORMAT = "unsupported format"
SYMBOLIC_LINK = "symbolic link"
SYMLINK_LOOP = "symlink loop"
NOT_A_REGULAR_FILE = "not a regular file"


class FilteredTreeCopier:
    """Copies the publishable part of a vault into a destination directory.

    Every entry under the source root produces exactly one CopyRecord:

    - Directories are tested against the path rules only. An excluded directory is not
      descended into and no destination directory is created for it. An admitted
      directory is mirrored (creating it is idempotent) and walked.
    - Files whose extension is not allowed are skipped as an unsupported format.
      Note files are read and their frontmatter parsed; a malformed header is recorded
      as a warning and the note is evaluated as if it had no metadata. Admitted files
      are copied byte for byte, overwriting whatever is at the destination path.

    Children are visited in sorted order so that runs over the same vault produce the
    same records in the same order.

    Symbolic Link Behavior:
        By default links are followed, so a linked note or folder is published like a
        regular one. A directory link pointing back to one of its ancestors is skipped
        as a loop. With ``follow_symlinks=False`` every link is skipped.

    Filesystem errors (permissions, full disks, vanished files) are not handled: they
    propagate to the caller, which is expected to abort the run.

    Attributes:
        rule_set (RuleSet): Rules deciding what gets published.
        evaluator (ExclusionEvaluator): Evaluator built from the rule set.
        frontmatter_parser (FrontmatterParser): Callable turning note bytes into
            metadata, raising FrontmatterParseError on malformed headers.
        follow_symlinks (bool): Whether symbolic links are followed.

    Example:
        >>> import tempfile
        >>> from pathlib import Path
        >>> with tempfile.TemporaryDirectory() as tmp:
        ...     vault, content = Path(tmp) / "vault", Path(tmp) / "content"
        ...     (vault / "Notes").mkdir(parents=True)
        ...     _ = (vault / "Notes" / "public.md").write_text("---\\ntags: [public]\\n---\\nHello")
        ...     _ = (vault / "Notes" / "draft.md").write_text("---\\ndraft: true\\n---\\nLater")
        ...     report = FilteredTreeCopier(RuleSet.default()).copy(vault, content)
        ...     sorted(p.name for p in (content / "Notes").iterdir())
        ['public.md']
    """

    def __init__(
        self,
        rule_set: RuleSet,
        frontmatter_parser: FrontmatterParser = parse_frontmatter,
        follow_symlinks: bool = True,
    ) -> None:
        self.rule_set = rule_set
        self.evaluator = ExclusionEvaluator(rule_set)
        self.frontmatter_parser = frontmatter_parser
        self.follow_symlinks = follow_symlinks

    def iter_copy(self, source_root: PathType, destination_root: PathType) -> Iterator[CopyRecord]:
        """Copy admitted entries, yielding a record for every entry as it is handled.

        The walk happens lazily: nothing is copied until the iterator is consumed.

        Args:
            source_root: Root of the vault to publish.
            destination_root: Directory receiving the mirrored tree. Created if missing.

        Yields:
            One CopyRecord per visited file or directory, parents before children.

        Raises:
            FileNotFoundError: If the source root doesn't exist.
            NotADirectoryError: If the source root isn't a directory.
            ValueError: If the destination lies inside the source tree.
            OSError: For any filesystem error during the walk or the copy.
        """
        source = Path(source_root)
        destination = Path(destination_root)
        check_roots(source, destination)

        destination.mkdir(parents=True, exist_ok=True)

        # Identifiers of the directories on the current branch, for loop detection
        ancestors: Set[FileIdentifier] = {FileIdentifier.of(source)}
        yield from self._walk(source, destination, "", ancestors)

    def copy(
        self,
        source_root: PathType,
        destination_root: PathType,
        on_record: Optional[Callable[[CopyRecord], None]] = None,
    ) -> CopyReport:
        """Run the whole copy and collect its records.

        Args:
            source_root: Root of the vault to publish.
            destination_root: Directory receiving the mirrored tree.
            on_record: Optional callback invoked with each record as soon as it exists,
                for progress reporting.

        Returns:
            The CopyReport of the run.
        """
        root_name = Path(destination_root).name or str(destination_root)
        report = CopyReport(root_name, self.rule_set.metadata_extensions)
        for record in self.iter_copy(source_root, destination_root):
            report.add(record)
            if on_record is not None:
                on_record(record)
        return report

    def _walk(
        self, directory: Path, destination_root: Path, relative_dir: str, ancestors: Set[FileIdentifier]
    ) -> Iterator[CopyRecord]:
        for name in sorted(os.listdir(directory)):
            path = directory / name
            relative_path = f"{relative_dir}/{name}" if relative_dir else name

            if path.is_symlink() and not self.follow_symlinks:
                kind = EntryKind.DIRECTORY if path.is_dir() else EntryKind.FILE
                yield CopyRecord(relative_path, kind, Disposition.SKIPPED, SYMBOLIC_LINK)
            elif path.is_dir():
                yield from self._visit_directory(path, destination_root, relative_path, ancestors)
            elif path.is_file():
                yield self._visit_file(path, destination_root, relative_path)
            else:
                yield CopyRecord(relative_path, EntryKind.FILE, Disposition.SKIPPED, NOT_A_REGULAR_FILE)

    def _visit_directory(
        self, path: Path, destination_root: Path, relative_path: str, ancestors: Set[FileIdentifier]
    ) -> Iterator[CopyRecord]:
        decision = self.evaluator.evaluate(TreeEntry.directory(relative_path))
        if decision.excluded:
            yield CopyRecord(relative_path, EntryKind.DIRECTORY, Disposition.EXCLUDED, str(decision.reason))
            return

        file_id = FileIdentifier.of(path)
        if file_id in ancestors:
            yield CopyRecord(relative_path, EntryKind.DIRECTORY, Disposition.SKIPPED, SYMLINK_LOOP)
            return

        _destination_path(destination_root, relative_path).mkdir(parents=True, exist_ok=True)
        yield CopyRecord(relative_path, EntryKind.DIRECTORY, Disposition.COPIED, "created directory")

        ancestors.add(file_id)
        try:
            yield from self._walk(path, destination_root, relative_path, ancestors)
        finally:
            ancestors.discard(file_id)

    def _visit_file(self, path: Path, destination_root: Path, relative_path: str) -> CopyRecord:
        if not self.rule_set.is_allowed_extension(path.name):
            return CopyRecord(relative_path, EntryKind.FILE, Disposition.SKIPPED, UNSUPPORTED_FORMAT)

        content: Optional[bytes] = None
        frontmatter: Optional[Mapping[str, FrontmatterValue]] = None
        warning: Optional[str] = None
        if self.rule_set.has_metadata(path.name):
            content = path.read_bytes()
            try:
                frontmatter = self.frontmatter_parser(content)
            except FrontmatterParseError as e:
                warning = str(e)

        entry = TreeEntry.file(relative_path, frontmatter, parse_error=warning)
        decision = self.evaluator.evaluate(entry)
        if decision.excluded:
            return CopyRecord(relative_path, EntryKind.FILE, Disposition.EXCLUDED, str(decision.reason), warning)

        target = _destination_path(destination_root, relative_path)
        target.parent.mkdir(parents=True, exist_ok=True)
        if content is not None:
            target.write_bytes(content)
        else:
            shutil.copyfile(path, target)
        return CopyRecord(relative_path, EntryKind.FILE, Disposition.COPIED, "copied", warning, target.stat().st_size)


def _destination_path(destination_root: Path, relative_path: str) -> Path:
    return destination_root.joinpath(*relative_path.split("/"))


def check_roots(source: Path, destination: Path) -> None:
    """Validate a source/destination pair before anything is written.

    Raises:
        FileNotFoundError: If the source root doesn't exist.
        NotADirectoryError: If the source root isn't a directory.
        ValueError: If the destination is the source or lies inside it.
    """
    if not source.exists():
        raise FileNotFoundError(f"Source path does not exist: {source}")
    if not source.is_dir():
        raise NotADirectoryError(f"Source path is not a directory: {source}")

    resolved_source = source.resolve()
    resolved_destination = destination.resolve()
    if resolved_destination == resolved_source or resolved_source in resolved_destination.parents:
        raise ValueError(f"Destination {destination} must not be inside the source tree {source}")
