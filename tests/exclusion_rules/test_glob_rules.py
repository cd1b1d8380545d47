"""Unit tests for gitignore-style glob exclusion rules."""

import pytest

from vault2content.exclusion_rules.glob_rules import GlobExclusionRules, read_ignore_file
from vault2content.tree_entry import TreeEntry
from vault2content.types import RuleKind


def test_read_ignore_file(tmp_path):
    """Test reading patterns from an ignore file."""
    ignore_file = tmp_path / ".publishignore"
    ignore_file.write_text("# comment\n\nJournal/\n*.canvas\n!keep.canvas\n", encoding="utf-8")

    assert read_ignore_file(ignore_file) == ["Journal/", "*.canvas", "!keep.canvas"]


def test_read_missing_ignore_file(tmp_path):
    """Test that a missing ignore file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        read_ignore_file(tmp_path / "missing")


def test_directory_pattern_prunes_directory():
    """Test that directory-only patterns match the directory entry itself."""
    rules = GlobExclusionRules(["Journal/"])

    assert rules.applies_to_directories
    assert rules.exclude(TreeEntry.directory("Journal"))
    assert rules.exclude(TreeEntry.directory("Areas/Journal"))
    assert not rules.exclude(TreeEntry.file("Journal"))


def test_anchored_pattern():
    """Test that a leading slash anchors to the vault root."""
    rules = GlobExclusionRules(["/Inbox/"])

    assert rules.exclude(TreeEntry.directory("Inbox"))
    assert not rules.exclude(TreeEntry.directory("Projects/Inbox"))


def test_wildcards():
    """Test extension and double-star patterns."""
    rules = GlobExclusionRules(["*.excalidraw.md", "Templates/**"])

    assert rules.exclude(TreeEntry.file("Drawings/sketch.excalidraw.md"))
    assert rules.exclude(TreeEntry.file("Templates/daily.md"))
    assert not rules.exclude(TreeEntry.file("Notes/daily.md"))


def test_negation_reincludes():
    """Test that a later negation re-includes a path."""
    rules = GlobExclusionRules(["*.pdf", "!Public/*.pdf"])

    assert rules.exclude(TreeEntry.file("Papers/a.pdf"))
    assert not rules.exclude(TreeEntry.file("Public/a.pdf"))


def test_reports_last_matching_glob():
    """Test which glob is named in the match."""
    rules = GlobExclusionRules(["*.md", "Drafts/"])

    match = rules.match(TreeEntry.directory("Drafts"))
    assert match.kind == RuleKind.GLOB
    assert match.value == "Drafts/"
    assert rules.match(TreeEntry.file("a.md")).value == "*.md"


def test_no_globs():
    """Test the empty rule list."""
    rules = GlobExclusionRules([])

    assert not rules.has_rules()
    assert rules.match(TreeEntry.file("a.md")) is None
