"""Unit tests for composite exclusion rules."""

from typing import Optional

import pytest

from vault2content.decision import RuleMatch
from vault2content.exclusion_rules.base_rules import BaseExclusionRules
from vault2content.exclusion_rules.composite_rules import CompositeExclusionRules
from vault2content.exclusion_rules.path_rules import FilenameExclusionRules, FolderExclusionRules
from vault2content.tree_entry import TreeEntry
from vault2content.types import RuleKind


class MockExclusionRules(BaseExclusionRules):
    """Mock exclusion rules for testing."""

    def __init__(self, exclude_paths=None, has_rules_result=True, applies_to_directories=False):
        self.exclude_paths = exclude_paths or []
        self.has_rules_result = has_rules_result
        self.applies_to_directories = applies_to_directories
        self.seen = []

    def match(self, entry: TreeEntry) -> Optional[RuleMatch]:
        self.seen.append(entry.relative_path)
        if entry.relative_path in self.exclude_paths:
            return RuleMatch(RuleKind.PATTERN, entry.relative_path)
        return None

    def has_rules(self) -> bool:
        return self.has_rules_result


class TestCompositeExclusionRules:
    """Test the CompositeExclusionRules class."""

    def test_init_with_single_rule(self):
        """Test initialization with a single rule."""
        mock_rule = MockExclusionRules()
        composite = CompositeExclusionRules([mock_rule])

        assert len(composite.get_rules()) == 1
        assert composite.get_rules()[0] is mock_rule

    def test_init_empty_rules_raises_error(self):
        """Test that an empty rule list is rejected."""
        with pytest.raises(ValueError, match="At least one exclusion rule must be provided"):
            CompositeExclusionRules([])

    def test_init_invalid_rule_raises_error(self):
        """Test that non-rule objects are rejected."""
        with pytest.raises(TypeError, match="Rule at index 1 must implement BaseExclusionRules"):
            CompositeExclusionRules([MockExclusionRules(), "not a rule"])  # type: ignore[list-item]

    def test_first_match_wins(self):
        """Test that rules are tried in order."""
        first = MockExclusionRules(exclude_paths=["a.md"])
        second = MockExclusionRules(exclude_paths=["a.md", "b.md"])
        composite = CompositeExclusionRules([first, second])

        assert composite.match(TreeEntry.file("a.md")) is not None
        assert second.seen == []
        assert composite.exclude(TreeEntry.file("b.md"))
        assert not composite.exclude(TreeEntry.file("c.md"))

    def test_directories_only_offered_to_path_rules(self):
        """Test that directory entries skip file-only rules."""
        file_rule = MockExclusionRules(exclude_paths=["Notes"])
        dir_rule = MockExclusionRules(applies_to_directories=True)
        composite = CompositeExclusionRules([file_rule, dir_rule])

        assert not composite.exclude(TreeEntry.directory("Notes"))
        assert file_rule.seen == []
        assert dir_rule.seen == ["Notes"]
        assert composite.applies_to_directories

    def test_real_rules(self):
        """Test with concrete rule families."""
        composite = CompositeExclusionRules(
            [FolderExclusionRules([".obsidian"]), FilenameExclusionRules(["credentials.md"])]
        )

        assert composite.match(TreeEntry.directory(".obsidian")).kind == RuleKind.FOLDER
        assert composite.match(TreeEntry.file("Notes/credentials.md")).kind == RuleKind.FILENAME
        assert composite.match(TreeEntry.file("Notes/ok.md")) is None

    def test_has_rules(self):
        """Test has_rules aggregation."""
        assert not CompositeExclusionRules([MockExclusionRules(has_rules_result=False)]).has_rules()
        assert CompositeExclusionRules(
            [MockExclusionRules(has_rules_result=False), MockExclusionRules(has_rules_result=True)]
        ).has_rules()

    def test_get_rules_returns_copy(self):
        """Test that get_rules does not expose the internal list."""
        composite = CompositeExclusionRules([MockExclusionRules()])
        composite.get_rules().append(MockExclusionRules())

        assert len(composite.get_rules()) == 1
