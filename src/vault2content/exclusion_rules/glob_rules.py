"""Exclusion rules using .gitignore pattern syntax."""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern  # type: ignore

from vault2content.decision import RuleMatch
from vault2content.tree_entry import TreeEntry
from vault2content.types import PathType, RuleKind

from .base_rules import BaseExclusionRules


def read_ignore_file(path: PathType) -> List[str]:
    """Read the patterns of a .gitignore-style file.

    Blank lines and comment lines are dropped; every other line is returned as a
    pattern in file order.

    Args:
        path: Path to the ignore file (for example a vault's ``.publishignore``).

    Returns:
        The patterns found in the file.

    Raises:
        FileNotFoundError: If the file does not exist.

    Example:
        >>> import os
        >>> import tempfile
        >>> with tempfile.NamedTemporaryFile(mode="w", suffix=".ignore", delete=False) as f:
        ...     _ = f.write("# private stuff\\n\\nJournal/\\n*.canvas\\n")
        >>> read_ignore_file(f.name)
        ['Journal/', '*.canvas']
        >>> os.unlink(f.name)
    """
    ignore_path = Path(path)
    if not ignore_path.exists():
        raise FileNotFoundError(f"Ignore file not found: {ignore_path}")

    with open(ignore_path, "r", encoding="utf-8") as f:
        lines = f.read().splitlines()

    return [line for line in lines if line.strip() and not line.startswith("#")]


class GlobExclusionRules(BaseExclusionRules):
    """Exclusion by .gitignore-style patterns matched against the relative path.

    Matching follows Git's semantics through the pathspec library, including negation
    with ``!`` where a later pattern re-includes a path excluded by an earlier one.
    Directories are tested with a trailing '/' so that directory-only patterns such as
    ``Journal/`` prune the directory itself.

    Attributes:
        globs (Tuple[str, ...]): The configured patterns, in order.
        spec (PathSpec): Compiled matcher for the whole pattern list.

    Example:
        >>> rules = GlobExclusionRules(["Journal/", "*.canvas.md", "!keep.canvas.md"])
        >>> rules.exclude(TreeEntry.directory("Journal"))
        True
        >>> rules.exclude(TreeEntry.file("Boards/plan.canvas.md"))
        True
        >>> rules.exclude(TreeEntry.file("Boards/keep.canvas.md"))
        False
        >>> rules.match(TreeEntry.file("Boards/plan.canvas.md")).value
        '*.canvas.md'
    """

    applies_to_directories = True

    def __init__(self, globs: Sequence[str]) -> None:
        self.globs: Tuple[str, ...] = tuple(globs)
        self.spec = PathSpec.from_lines(GitWildMatchPattern, self.globs)
        # Single-pattern matchers used to name the glob that excluded an entry
        self._reporters: List[Tuple[str, PathSpec]] = [
            (glob, PathSpec.from_lines(GitWildMatchPattern, [glob])) for glob in self.globs if not glob.startswith("!")
        ]

    def match(self, entry: TreeEntry) -> Optional[RuleMatch]:
        path = entry.relative_path + "/" if entry.is_dir else entry.relative_path
        if not self.spec.match_file(path):
            return None

        # The last matching pattern decides, so report the last one that matches
        for glob, spec in reversed(self._reporters):
            if spec.match_file(path):
                return RuleMatch(RuleKind.GLOB, glob)
        return RuleMatch(RuleKind.GLOB, self.globs[-1])

    def has_rules(self) -> bool:
        return bool(self.globs)
