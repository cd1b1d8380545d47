"""Unit tests for decisions and matched rules."""

import pytest

from vault2content.decision import Decision, RuleMatch, format_value
from vault2content.types import RuleKind


@pytest.mark.parametrize(
    "kind,value,expected",
    [
        (RuleKind.FOLDER, ".obsidian", 'folder ".obsidian"'),
        (RuleKind.GLOB, "Journal/", 'glob "Journal/"'),
        (RuleKind.FILENAME, "credentials.md", 'file name "credentials.md"'),
        (RuleKind.PATTERN, r"^_.*\.md$", r"pattern ^_.*\.md$"),
        (RuleKind.FRONTMATTER, "publish=false", "frontmatter publish=false"),
        (RuleKind.TAG, "private", 'tag "private"'),
    ],
)
def test_rule_match_describe(kind, value, expected):
    """Test human-readable rule descriptions."""
    assert RuleMatch(kind, value).describe() == expected


def test_format_value():
    """Test YAML-style rendering of values."""
    assert format_value(True) == "true"
    assert format_value(3) == "3"
    assert format_value(1.5) == "1.5"
    assert format_value(["a"]) == "[a]"


def test_admit_has_no_rule():
    """Test admitting decisions."""
    decision = Decision.admit()

    assert decision.admitted
    assert not decision.excluded
    assert decision.rule is None
    assert decision.reason is None


def test_exclude_carries_rule():
    """Test excluding decisions."""
    rule = RuleMatch(RuleKind.TAG, "draft")
    decision = Decision.exclude(rule)

    assert decision.excluded
    assert decision.rule == rule
    assert decision.reason == 'tag "draft"'


def test_inconsistent_decisions_rejected():
    """Test that a decision always agrees with its rule."""
    with pytest.raises(ValueError):
        Decision(True, RuleMatch(RuleKind.TAG, "draft"))
    with pytest.raises(ValueError):
        Decision(False)


def test_equality():
    """Test value semantics of decisions."""
    assert Decision.admit() == Decision.admit()
    assert Decision.exclude(RuleMatch(RuleKind.TAG, "a")) == Decision.exclude(RuleMatch(RuleKind.TAG, "a"))
    assert Decision.exclude(RuleMatch(RuleKind.TAG, "a")) != Decision.exclude(RuleMatch(RuleKind.FOLDER, "a"))
    assert repr(Decision.admit()) == "Decision(admit)"
