"""Exclusion rules based on an entry's path and file name."""

from typing import List, Optional, Pattern, Sequence, Tuple

from vault2content.decision import RuleMatch
from vault2content.tree_entry import TreeEntry
from vault2content.types import FolderMatchMode, RuleKind

from .base_rules import BaseExclusionRules


def _segments(path: str) -> List[str]:
    return [segment for segment in path.split("/") if segment]


def contains_segments(path: str, fragment: str) -> bool:
    """Check whether a fragment occurs in a path as a run of whole segments.

    Args:
        path: Relative path using '/' separators.
        fragment: Folder fragment such as ``"Work"`` or ``"Work/Confidential/"``.

    Returns:
        True if the fragment's segments appear contiguously in the path's segments.

    Example:
        >>> contains_segments("Work/Confidential/notes.md", "Work/Confidential")
        True
        >>> contains_segments("Archive/Work/Confidential", "Work/Confidential/")
        True
        >>> contains_segments("Workshop/notes.md", "Work")
        False
    """
    wanted = _segments(fragment)
    parts = _segments(path)
    if not wanted:
        return False
    for start in range(len(parts) - len(wanted) + 1):
        if parts[start : start + len(wanted)] == wanted:  # noqa: E203
            return True
    return False


class FolderExclusionRules(BaseExclusionRules):
    """Exclusion by folder fragments found in the relative path.

    Applies to directories as well as files; an excluded directory is never descended
    into, which prunes its whole subtree.

    In ``SUBSTRING`` mode the fragment may occur anywhere in the path, even inside an
    unrelated segment ("Work" matches "Workshop/a.md"). ``SEGMENT`` mode only matches
    whole segments.

    Example:
        >>> rules = FolderExclusionRules([".obsidian", "Work"], FolderMatchMode.SEGMENT)
        >>> rules.exclude(TreeEntry.directory(".obsidian"))
        True
        >>> rules.exclude(TreeEntry.file("Workshop/plan.md"))
        False
        >>> FolderExclusionRules(["Work"], FolderMatchMode.SUBSTRING).exclude(TreeEntry.file("Workshop/plan.md"))
        True
    """

    applies_to_directories = True

    def __init__(self, fragments: Sequence[str], mode: FolderMatchMode = FolderMatchMode.SEGMENT) -> None:
        self.fragments: Tuple[str, ...] = tuple(fragments)
        self.mode = mode

    def match(self, entry: TreeEntry) -> Optional[RuleMatch]:
        for fragment in self.fragments:
            if self.mode == FolderMatchMode.SUBSTRING:
                matched = fragment in entry.relative_path
            else:
                matched = contains_segments(entry.relative_path, fragment)
            if matched:
                return RuleMatch(RuleKind.FOLDER, fragment)
        return None

    def has_rules(self) -> bool:
        return bool(self.fragments)


class FilenameExclusionRules(BaseExclusionRules):
    """Exclusion by exact file name.

    Names without a '/' are compared with the file's base name. Names containing a '/'
    are compared with the whole relative path, which allows excluding one specific note
    without hiding every note of the same name.

    Example:
        >>> rules = FilenameExclusionRules(["credentials.md", "Inbox/todo.md"])
        >>> rules.exclude(TreeEntry.file("Study/Programming/credentials.md"))
        True
        >>> rules.exclude(TreeEntry.file("Projects/todo.md"))
        False
        >>> rules.exclude(TreeEntry.file("Inbox/todo.md"))
        True
    """

    def __init__(self, names: Sequence[str]) -> None:
        self.names: Tuple[str, ...] = tuple(names)

    def match(self, entry: TreeEntry) -> Optional[RuleMatch]:
        if entry.is_dir:
            return None
        for name in self.names:
            candidate = entry.relative_path if "/" in name else entry.name
            if candidate == name:
                return RuleMatch(RuleKind.FILENAME, name)
        return None

    def has_rules(self) -> bool:
        return bool(self.names)


class PatternExclusionRules(BaseExclusionRules):
    """Exclusion by regular expressions searched in the file's base name.

    Example:
        >>> import re
        >>> rules = PatternExclusionRules([re.compile(r"^_.*\\.md$")])
        >>> rules.exclude(TreeEntry.file("Ideas/_draft-idea.md"))
        True
        >>> rules.exclude(TreeEntry.file("Ideas/idea.md"))
        False
    """

    def __init__(self, patterns: Sequence[Pattern[str]]) -> None:
        self.patterns: Tuple[Pattern[str], ...] = tuple(patterns)

    def match(self, entry: TreeEntry) -> Optional[RuleMatch]:
        if entry.is_dir:
            return None
        for pattern in self.patterns:
            if pattern.search(entry.name):
                return RuleMatch(RuleKind.PATTERN, pattern.pattern)
        return None

    def has_rules(self) -> bool:
        return bool(self.patterns)
