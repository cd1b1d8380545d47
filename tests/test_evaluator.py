"""Unit tests for the ExclusionEvaluator."""

import pytest

from vault2content.decision import Decision
from vault2content.evaluator import ExclusionEvaluator
from vault2content.rule_set import RuleSet
from vault2content.tree_entry import TreeEntry
from vault2content.types import FolderMatchMode, RuleKind


@pytest.fixture
def rule_set():
    """Default rules plus a confidential folder and a credentials note."""
    return RuleSet.default().replace(
        excluded_folders=[".obsidian", ".trash", "Work/Confidential"],
        excluded_files=["credentials.md"],
    )


@pytest.fixture
def evaluator(rule_set):
    return ExclusionEvaluator(rule_set)


@pytest.mark.parametrize("mode", list(FolderMatchMode))
def test_confidential_folder(rule_set, mode):
    """Test that notes below an excluded folder are excluded in both match modes."""
    evaluator = ExclusionEvaluator(rule_set.replace(folder_match=mode))

    decision = evaluator.evaluate(TreeEntry.file("Work/Confidential/notes.md", frontmatter={}))
    assert decision.excluded
    assert decision.rule.kind == RuleKind.FOLDER
    assert decision.reason == 'folder "Work/Confidential"'


def test_credentials_by_file_name(evaluator):
    """Test exclusion by exact file name deep in the vault."""
    decision = evaluator.evaluate(TreeEntry.file("Обучение/Программирование/credentials.md", frontmatter={}))

    assert decision.excluded
    assert decision.reason == 'file name "credentials.md"'


def test_underscore_prefixed_note(evaluator):
    """Test exclusion by the underscore pattern."""
    decision = evaluator.evaluate(TreeEntry.file("Ideas/_draft-idea.md", frontmatter={}))

    assert decision.excluded
    assert decision.rule.kind == RuleKind.PATTERN
    assert decision.rule.value == r"^_.*\.md$"


def test_daily_note(evaluator):
    """Test exclusion by the daily note pattern."""
    decision = evaluator.evaluate(TreeEntry.file("Journal/2024-01-15 journal.md", frontmatter={}))

    assert decision.excluded
    assert decision.rule.value == r"^\d{4}-\d{2}-\d{2}.*\.md$"


def test_public_note_admitted(evaluator):
    """Test that a note tagged public with no exclusion fields is admitted."""
    assert evaluator.evaluate(TreeEntry.file("public-note.md", frontmatter={"tags": ["public"]})) == Decision.admit()


def test_asset_without_metadata_admitted(evaluator):
    """Test that assets are only checked by path and name."""
    assert evaluator.evaluate(TreeEntry.file("Diagrams/diagram.svg")).admitted


@pytest.mark.parametrize(
    "frontmatter,reason",
    [
        ({"publish": False}, "frontmatter publish=false"),
        ({"draft": True}, "frontmatter draft=true"),
        ({"private": True}, "frontmatter private=true"),
        ({"tags": ["public", "personal"]}, 'tag "personal"'),
        ({"tag": "draft"}, 'tag "draft"'),
    ],
)
def test_metadata_exclusions(evaluator, frontmatter, reason):
    """Test frontmatter field and tag exclusions."""
    decision = evaluator.evaluate(TreeEntry.file("note.md", frontmatter=frontmatter))

    assert decision.excluded
    assert decision.reason == reason


@pytest.mark.parametrize(
    "frontmatter",
    [
        {"publish": True},
        {"publish": 0},
        {"publish": "false"},
        {"draft": False, "private": False},
        {"tags": ["public", "programming"]},
        {},
    ],
)
def test_metadata_admits(evaluator, frontmatter):
    """Test that non-matching metadata is admitted."""
    assert evaluator.evaluate(TreeEntry.file("note.md", frontmatter=frontmatter)).admitted


def test_folder_rule_reported_before_metadata(evaluator):
    """Test the evaluation order for diagnostics."""
    entry = TreeEntry.file("Work/Confidential/_x.md", frontmatter={"draft": True, "tags": ["private"]})

    assert evaluator.evaluate(entry).rule.kind == RuleKind.FOLDER


def test_file_name_reported_before_metadata(evaluator):
    """Test that the file name rule wins over metadata rules."""
    entry = TreeEntry.file("credentials.md", frontmatter={"publish": False})

    assert evaluator.evaluate(entry).rule.kind == RuleKind.FILENAME


def test_glob_reported_after_folder():
    """Test that globs come right after folder fragments."""
    evaluator = ExclusionEvaluator(RuleSet(excluded_folders=["Archive"], excluded_globs=["*.md"]))

    assert evaluator.evaluate(TreeEntry.file("Archive/a.md")).rule.kind == RuleKind.FOLDER
    assert evaluator.evaluate(TreeEntry.file("Notes/a.md")).rule.kind == RuleKind.GLOB


def test_parse_failure_only_skips_metadata_rules(evaluator):
    """Test that a note whose header failed to parse is still checked by path and name."""
    broken = TreeEntry.file("ok.md", parse_error="Malformed frontmatter: expected a mapping, got list")
    broken_excluded = TreeEntry.file("_hidden.md", parse_error="Malformed frontmatter: bad")

    assert evaluator.evaluate(broken).admitted
    assert evaluator.evaluate(broken_excluded).excluded


def test_directories(evaluator):
    """Test that directories are only tested against path rules."""
    assert evaluator.evaluate(TreeEntry.directory(".obsidian")).excluded
    assert evaluator.evaluate(TreeEntry.directory("Work/Confidential")).excluded
    assert evaluator.evaluate(TreeEntry.directory("Work")).admitted
    assert evaluator.evaluate(TreeEntry.directory("_Templates")).admitted
    assert evaluator.evaluate(TreeEntry.directory("credentials.md")).admitted


def test_segment_versus_substring():
    """Test the folder match mode difference."""
    segment = ExclusionEvaluator(RuleSet(excluded_folders=["Work"]))
    substring = ExclusionEvaluator(RuleSet(excluded_folders=["Work"], folder_match="substring"))
    entry = TreeEntry.file("Workshop/a.md")

    assert segment.evaluate(entry).admitted
    assert substring.evaluate(entry).excluded


def test_evaluation_is_repeatable(evaluator):
    """Test that evaluating the same entry twice gives the same decision."""
    entry = TreeEntry.file("note.md", frontmatter={"tags": ["private"]})

    assert evaluator.evaluate(entry) == evaluator.evaluate(entry)


def test_has_rules():
    """Test has_rules for empty and default rule sets."""
    assert not ExclusionEvaluator(RuleSet()).has_rules()
    assert ExclusionEvaluator(RuleSet.default()).has_rules()
