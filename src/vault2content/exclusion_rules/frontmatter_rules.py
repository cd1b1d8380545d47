"""Exclusion rules based on note metadata."""

from typing import List, Mapping, Optional, Sequence, Tuple

from vault2content.decision import RuleMatch, format_value
from vault2content.tree_entry import TreeEntry
from vault2content.types import FrontmatterValue, RuleKind, ScalarValue

from .base_rules import BaseExclusionRules


def values_equal(actual: FrontmatterValue, expected: ScalarValue) -> bool:
    """Compare a frontmatter value with a configured value, without type coercion.

    Booleans only equal booleans and strings only equal strings. Integers and floats
    compare numerically with each other. Lists never equal a scalar.

    Example:
        >>> values_equal(False, False), values_equal(0, False), values_equal("false", False)
        (True, False, False)
        >>> values_equal(1, 1.0)
        True
    """
    if isinstance(actual, bool) or isinstance(expected, bool):
        return isinstance(actual, bool) and isinstance(expected, bool) and actual == expected
    if isinstance(actual, str) or isinstance(expected, str):
        return isinstance(actual, str) and isinstance(expected, str) and actual == expected
    if isinstance(actual, (int, float)) and isinstance(expected, (int, float)):
        return actual == expected
    return False


def tags_of(frontmatter: Mapping[str, FrontmatterValue], tag_keys: Sequence[str]) -> List[str]:
    """Return a note's tags as a list.

    The first tag field holding a non-empty value wins. A scalar value is treated as a
    single tag.

    Example:
        >>> tags_of({"tags": [], "tag": "public"}, ["tags", "tag"])
        ['public']
        >>> tags_of({"tags": ["a", "b"], "tag": "c"}, ["tags", "tag"])
        ['a', 'b']
        >>> tags_of({"title": "No tags"}, ["tags", "tag"])
        []
    """
    for key in tag_keys:
        value = frontmatter.get(key)
        if value is None or value == "" or value == []:
            continue
        if isinstance(value, list):
            return list(value)
        return [value if isinstance(value, str) else format_value(value)]
    return []


class FrontmatterExclusionRules(BaseExclusionRules):
    """Exclusion by frontmatter field values.

    A note is excluded when any configured field is present in its metadata with
    exactly the configured value. Files without parsed metadata are never excluded by
    this rule.

    Example:
        >>> rules = FrontmatterExclusionRules({"publish": False, "draft": True})
        >>> rules.match(TreeEntry.file("a.md", frontmatter={"publish": False})).value
        'publish=false'
        >>> rules.exclude(TreeEntry.file("b.md", frontmatter={"publish": True, "draft": False}))
        False
        >>> rules.exclude(TreeEntry.file("c.md"))
        False
    """

    def __init__(self, expected: Mapping[str, ScalarValue]) -> None:
        self.expected: Tuple[Tuple[str, ScalarValue], ...] = tuple(expected.items())

    def match(self, entry: TreeEntry) -> Optional[RuleMatch]:
        if entry.is_dir or entry.frontmatter is None:
            return None
        for field, expected in self.expected:
            if field in entry.frontmatter and values_equal(entry.frontmatter[field], expected):
                return RuleMatch(RuleKind.FRONTMATTER, f"{field}={format_value(expected)}")
        return None

    def has_rules(self) -> bool:
        return bool(self.expected)


class TagExclusionRules(BaseExclusionRules):
    """Exclusion by tags listed in a note's frontmatter.

    Tags are compared by exact membership; the first of the note's tags that is
    excluded is reported.

    Example:
        >>> rules = TagExclusionRules(["private", "draft"])
        >>> rules.match(TreeEntry.file("a.md", frontmatter={"tags": ["public", "draft"]})).value
        'draft'
        >>> rules.exclude(TreeEntry.file("b.md", frontmatter={"tag": "private"}))
        True
        >>> rules.exclude(TreeEntry.file("c.md", frontmatter={"tags": ["public"]}))
        False
    """

    def __init__(self, tags: Sequence[str], tag_keys: Sequence[str] = ("tags", "tag")) -> None:
        self.tags: Tuple[str, ...] = tuple(tags)
        self.tag_keys: Tuple[str, ...] = tuple(tag_keys)
        self._excluded = frozenset(self.tags)

    def match(self, entry: TreeEntry) -> Optional[RuleMatch]:
        if entry.is_dir or entry.frontmatter is None or not self._excluded:
            return None
        for tag in tags_of(entry.frontmatter, self.tag_keys):
            if tag in self._excluded:
                return RuleMatch(RuleKind.TAG, tag)
        return None

    def has_rules(self) -> bool:
        return bool(self.tags)
