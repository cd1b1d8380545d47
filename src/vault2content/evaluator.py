"""Evaluation of vault entries against a rule set."""

from vault2content.decision import Decision
from vault2content.exclusion_rules.composite_rules import CompositeExclusionRules
from vault2content.exclusion_rules.frontmatter_rules import FrontmatterExclusionRules, TagExclusionRules
from vault2content.exclusion_rules.glob_rules import GlobExclusionRules
from vault2content.exclusion_rules.path_rules import (
    FilenameExclusionRules,
    FolderExclusionRules,
    PatternExclusionRules,
)
from vault2content.rule_set import RuleSet
from vault2content.tree_entry import TreeEntry


class ExclusionEvaluator:
    """Turns tree entries into admit/exclude decisions.

    Rules are tried in a fixed order: folder fragments, globs, exact file names, file
    name patterns, frontmatter fields, then tags. The first match wins. Directories are
    only tested against the path rules (folders and globs).

    Evaluation never raises and has no side effects, so one evaluator can be shared
    freely.

    Attributes:
        rule_set (RuleSet): The rule set decisions are based on.

    Example:
        >>> evaluator = ExclusionEvaluator(RuleSet(excluded_folders=["Work/Confidential"]))
        >>> evaluator.evaluate(TreeEntry.file("Work/Confidential/notes.md")).reason
        'folder "Work/Confidential"'
        >>> evaluator.evaluate(TreeEntry.file("Work/public.md")).admitted
        True
    """

    def __init__(self, rule_set: RuleSet) -> None:
        self.rule_set = rule_set
        self._rules = CompositeExclusionRules(
            [
                FolderExclusionRules(rule_set.excluded_folders, rule_set.folder_match),
                GlobExclusionRules(rule_set.excluded_globs),
                FilenameExclusionRules(rule_set.excluded_files),
                PatternExclusionRules(rule_set.excluded_patterns),
                FrontmatterExclusionRules(rule_set.excluded_by_frontmatter),
                TagExclusionRules(rule_set.excluded_tags, rule_set.tag_keys),
            ]
        )

    def evaluate(self, entry: TreeEntry) -> Decision:
        """Decide whether an entry is admitted or excluded.

        Args:
            entry: File or directory under evaluation. Files carrying no parsed
                frontmatter are only tested against the path and name rules.

        Returns:
            ``Decision.admit()`` or an excluding decision naming the first matching rule.
        """
        found = self._rules.match(entry)
        if found is None:
            return Decision.admit()
        return Decision.exclude(found)

    def has_rules(self) -> bool:
        """Check whether the rule set can exclude anything at all."""
        return self._rules.has_rules()
