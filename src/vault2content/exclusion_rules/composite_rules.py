"""Composite exclusion rules for combining multiple rule families."""

from typing import List, Optional, Sequence

from vault2content.decision import RuleMatch
from vault2content.tree_entry import TreeEntry

from .base_rules import BaseExclusionRules


class CompositeExclusionRules(BaseExclusionRules):
    """Composite exclusion rules that combine several rule families.

    An entry is excluded if ANY of the constituent rules excludes it. Rules are tried
    in the order given and the first match is reported, so the order only affects which
    rule shows up in diagnostics, never whether an entry is excluded.

    Directory entries are only offered to rules whose ``applies_to_directories`` flag
    is set.

    Attributes:
        rules (List[BaseExclusionRules]): Constituent rules in evaluation order.

    Example:
        >>> import re
        >>> from vault2content.exclusion_rules.path_rules import FilenameExclusionRules, PatternExclusionRules
        >>> composite = CompositeExclusionRules(
        ...     [FilenameExclusionRules(["_secret.md"]), PatternExclusionRules([re.compile("^_")])]
        ... )
        >>> composite.match(TreeEntry.file("_secret.md")).kind.value
        'filename'
        >>> composite.match(TreeEntry.file("_other.md")).kind.value
        'pattern'
        >>> composite.exclude(TreeEntry.file("public.md"))
        False
    """

    def __init__(self, rules: Sequence[BaseExclusionRules]):
        """Initialize composite exclusion rules.

        Args:
            rules: Sequence of exclusion rules to combine, in evaluation order.

        Raises:
            ValueError: If the rules list is empty.
            TypeError: If any rule doesn't implement BaseExclusionRules.
        """
        if not rules:
            raise ValueError("At least one exclusion rule must be provided")

        for i, rule in enumerate(rules):
            if not isinstance(rule, BaseExclusionRules):
                raise TypeError(f"Rule at index {i} must implement BaseExclusionRules, " f"got {type(rule)}")

        self.rules: List[BaseExclusionRules] = list(rules)

    @property
    def applies_to_directories(self) -> bool:  # type: ignore[override]
        return any(rule.applies_to_directories for rule in self.rules)

    def match(self, entry: TreeEntry) -> Optional[RuleMatch]:
        """Return the first match among the constituent rules.

        Args:
            entry: File or directory under evaluation.

        Returns:
            The first matching rule, or None if every constituent rule admits the entry.
        """
        for rule in self.rules:
            if entry.is_dir and not rule.applies_to_directories:
                continue
            found = rule.match(entry)
            if found is not None:
                return found
        return None

    def has_rules(self) -> bool:
        """Check if any constituent rule has rules configured."""
        return any(rule.has_rules() for rule in self.rules)

    def get_rules(self) -> List[BaseExclusionRules]:
        """Get a copy of the constituent rules list."""
        return list(self.rules)
