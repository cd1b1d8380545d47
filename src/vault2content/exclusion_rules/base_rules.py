from abc import ABC, abstractmethod
from typing import Optional

from vault2content.decision import RuleMatch
from vault2content.tree_entry import TreeEntry


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for one family of exclusion rules.

    Each concrete class implements a single criterion (folder fragments, file names,
    patterns, frontmatter fields, tags, globs). Rules never raise while matching: all
    validation happens when the rule set is built, so matching is a total, side-effect
    free predicate.

    Rules that look only at the path may also apply to directories; rules that need a
    file name or note metadata ignore directory entries.

    Attributes:
        applies_to_directories (bool): Whether directory entries are tested at all.

    Example:
        >>> from vault2content.types import RuleKind
        >>> class DotFileRules(BaseExclusionRules):
        ...     def match(self, entry):
        ...         if entry.name.startswith("."):
        ...             return RuleMatch(RuleKind.PATTERN, "^\\\\.")
        ...         return None
        >>> rules = DotFileRules()
        >>> rules.exclude(TreeEntry.file(".hidden.md"))
        True
        >>> rules.exclude(TreeEntry.file("visible.md"))
        False
    """

    applies_to_directories: bool = False

    @abstractmethod
    def match(self, entry: TreeEntry) -> Optional[RuleMatch]:
        """
        Find the first configured rule excluding an entry.

        This method must be implemented by concrete subclasses.

        Args:
            entry (TreeEntry): The file or directory under evaluation.

        Returns:
            Optional[RuleMatch]: The matching rule, or None if the entry is not excluded
                by this family of rules.
        """
        pass

    def exclude(self, entry: TreeEntry) -> bool:
        """
        Determine if an entry should be excluded by this family of rules.

        Args:
            entry (TreeEntry): The file or directory under evaluation.

        Returns:
            bool: True if the entry should be excluded, False if it should be included.
        """
        return self.match(entry) is not None

    def has_rules(self) -> bool:
        """
        Check if any rules of this family are configured.

        Returns:
            bool: True by default; subclasses report whether their collection is empty.
        """
        return True
