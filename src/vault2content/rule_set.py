"""Immutable exclusion rule set.

A ``RuleSet`` bundles every criterion used to decide what gets published from a vault.
It is validated once at construction and never changes afterwards, so a single
instance can be shared by the evaluator, the tree copier and the synchronizer.
"""

import os
import re
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Pattern, Sequence, Tuple, Union

from pathspec.patterns import GitWildMatchPattern  # type: ignore

from vault2content.exceptions import ConfigurationError
from vault2content.types import FolderMatchMode, ScalarValue


DEFAULT_ALLOWED_EXTENSIONS = (".md", ".png", ".jpg", ".jpeg", ".gif", ".svg", ".pdf")
DEFAULT_METADATA_EXTENSIONS = (".md",)
DEFAULT_TAG_KEYS = ("tags", "tag")

DEFAULT_EXCLUDED_FOLDERS = (".obsidian", ".trash")
DEFAULT_EXCLUDED_PATTERNS = (
    r"^_.*\.md$",  # notes starting with an underscore
    r".*\.private\.md$",
    r"^\d{4}-\d{2}-\d{2}.*\.md$",  # daily notes
)
DEFAULT_EXCLUDED_BY_FRONTMATTER: Mapping[str, ScalarValue] = MappingProxyType(
    {"publish": False, "draft": True, "private": True}
)
DEFAULT_EXCLUDED_TAGS = ("private", "personal", "draft")


def _string_tuple(key: str, values: Iterable[str]) -> Tuple[str, ...]:
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        raise ConfigurationError("must be a list of strings", key=key)
    result = tuple(values)
    for value in result:
        if not isinstance(value, str):
            raise ConfigurationError(f"expected a string, got {type(value).__name__} ({value!r})", key=key)
        if not value:
            raise ConfigurationError("empty strings are not allowed", key=key)
    return result


def _compile_patterns(values: Iterable[Union[str, Pattern[str]]]) -> Tuple[Pattern[str], ...]:
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        raise ConfigurationError("must be a list of regular expressions", key="excluded_patterns")
    compiled = []
    for value in values:
        if isinstance(value, re.Pattern):
            compiled.append(value)
        elif isinstance(value, str):
            try:
                compiled.append(re.compile(value))
            except re.error as e:
                raise ConfigurationError(f"invalid regular expression {value!r}: {e}", key="excluded_patterns")
        else:
            raise ConfigurationError(
                f"expected a regular expression, got {type(value).__name__}", key="excluded_patterns"
            )
    return tuple(compiled)


def _validate_globs(values: Iterable[str]) -> Tuple[str, ...]:
    globs = _string_tuple("excluded_globs", values)
    for glob in globs:
        try:
            GitWildMatchPattern(glob)
        except ValueError as e:
            raise ConfigurationError(f"invalid glob {glob!r}: {e}", key="excluded_globs")
    return globs


def _frontmatter_mapping(values: Optional[Mapping[str, ScalarValue]]) -> Mapping[str, ScalarValue]:
    if values is None:
        return MappingProxyType({})
    if not isinstance(values, Mapping):
        raise ConfigurationError("must be a mapping of field names to values", key="excluded_by_frontmatter")
    copied: Dict[str, ScalarValue] = {}
    for field, expected in values.items():
        if not isinstance(field, str) or not field:
            raise ConfigurationError(
                f"field names must be non-empty strings, got {field!r}", key="excluded_by_frontmatter"
            )
        if not isinstance(expected, (str, bool, int, float)):
            raise ConfigurationError(
                f"value for {field!r} must be a string, boolean or number, got {type(expected).__name__}",
                key="excluded_by_frontmatter",
            )
        copied[field] = expected
    return MappingProxyType(copied)


def _extensions(key: str, values: Iterable[str]) -> Tuple[str, ...]:
    extensions = tuple(ext.lower() for ext in _string_tuple(key, values))
    for ext in extensions:
        if not ext.startswith(".") or len(ext) < 2:
            raise ConfigurationError(f"extensions must look like '.md', got {ext!r}", key=key)
    return extensions


class RuleSet:
    """Complete, immutable set of exclusion criteria for one synchronization run.

    The five core criteria are excluded folder fragments, exact file names, file name
    patterns, frontmatter field values and tags. Excluded globs add gitignore-style path
    matching on top. The remaining attributes describe which files take part in
    publication at all.

    All collections are stored as tuples (or read-only mappings) and the object exposes
    no mutators; use ``replace`` to derive a modified copy.

    Attributes:
        excluded_folders (Tuple[str, ...]): Folder fragments that prune matching paths.
        excluded_files (Tuple[str, ...]): Exact file names (or relative paths when the
            entry contains a '/') to exclude.
        excluded_patterns (Tuple[Pattern[str], ...]): Regular expressions tested against
            file base names.
        excluded_by_frontmatter (Mapping[str, ScalarValue]): Frontmatter field values that
            exclude a note.
        excluded_tags (Tuple[str, ...]): Tags that exclude a note.
        excluded_globs (Tuple[str, ...]): Gitignore-style patterns tested against relative
            paths.
        folder_match (FolderMatchMode): How folder fragments are matched.
        allowed_extensions (Tuple[str, ...]): Lower-cased extensions eligible for copying.
        metadata_extensions (Tuple[str, ...]): Lower-cased extensions whose files carry
            frontmatter.
        tag_keys (Tuple[str, ...]): Frontmatter fields holding tags, in priority order.

    Example:
        >>> rules = RuleSet(excluded_tags=["private"], excluded_patterns=[r"^_"])
        >>> rules.excluded_tags
        ('private',)
        >>> rules.excluded_patterns[0].pattern
        '^_'
        >>> rules.is_allowed_extension("Diagram.SVG")
        True
    """

    def __init__(
        self,
        *,
        excluded_folders: Sequence[str] = (),
        excluded_files: Sequence[str] = (),
        excluded_patterns: Sequence[Union[str, Pattern[str]]] = (),
        excluded_by_frontmatter: Optional[Mapping[str, ScalarValue]] = None,
        excluded_tags: Sequence[str] = (),
        excluded_globs: Sequence[str] = (),
        folder_match: Union[str, FolderMatchMode] = FolderMatchMode.SEGMENT,
        allowed_extensions: Sequence[str] = DEFAULT_ALLOWED_EXTENSIONS,
        metadata_extensions: Sequence[str] = DEFAULT_METADATA_EXTENSIONS,
        tag_keys: Sequence[str] = DEFAULT_TAG_KEYS,
    ) -> None:
        """Build and validate a rule set.

        Raises:
            ConfigurationError: If any collection has the wrong type, a regular
                expression or glob does not compile, or the folder match mode is unknown.
        """
        self._excluded_folders = _string_tuple("excluded_folders", excluded_folders)
        self._excluded_files = _string_tuple("excluded_files", excluded_files)
        self._excluded_patterns = _compile_patterns(excluded_patterns)
        self._excluded_by_frontmatter = _frontmatter_mapping(excluded_by_frontmatter)
        self._excluded_tags = _string_tuple("excluded_tags", excluded_tags)
        self._excluded_globs = _validate_globs(excluded_globs)
        try:
            self._folder_match = FolderMatchMode(folder_match)
        except ValueError:
            choices = ", ".join(mode.value for mode in FolderMatchMode)
            raise ConfigurationError(f"unknown mode {folder_match!r} (expected one of: {choices})", key="folder_match")
        self._allowed_extensions = _extensions("allowed_extensions", allowed_extensions)
        self._metadata_extensions = _extensions("metadata_extensions", metadata_extensions)
        self._tag_keys = _string_tuple("tag_keys", tag_keys)

    @classmethod
    def default(cls) -> "RuleSet":
        """Rule set used when no configuration is supplied.

        Excludes Obsidian's internal folders, underscore-prefixed notes, ``*.private.md``
        notes, daily notes, notes marked ``publish: false``, ``draft: true`` or
        ``private: true`` and notes tagged private, personal or draft.

        Example:
            >>> RuleSet.default().excluded_by_frontmatter["publish"]
            False
        """
        return cls(
            excluded_folders=DEFAULT_EXCLUDED_FOLDERS,
            excluded_patterns=DEFAULT_EXCLUDED_PATTERNS,
            excluded_by_frontmatter=DEFAULT_EXCLUDED_BY_FRONTMATTER,
            excluded_tags=DEFAULT_EXCLUDED_TAGS,
        )

    @property
    def excluded_folders(self) -> Tuple[str, ...]:
        return self._excluded_folders

    @property
    def excluded_files(self) -> Tuple[str, ...]:
        return self._excluded_files

    @property
    def excluded_patterns(self) -> Tuple[Pattern[str], ...]:
        return self._excluded_patterns

    @property
    def excluded_by_frontmatter(self) -> Mapping[str, ScalarValue]:
        return self._excluded_by_frontmatter

    @property
    def excluded_tags(self) -> Tuple[str, ...]:
        return self._excluded_tags

    @property
    def excluded_globs(self) -> Tuple[str, ...]:
        return self._excluded_globs

    @property
    def folder_match(self) -> FolderMatchMode:
        return self._folder_match

    @property
    def allowed_extensions(self) -> Tuple[str, ...]:
        return self._allowed_extensions

    @property
    def metadata_extensions(self) -> Tuple[str, ...]:
        return self._metadata_extensions

    @property
    def tag_keys(self) -> Tuple[str, ...]:
        return self._tag_keys

    def is_allowed_extension(self, name: str) -> bool:
        """Check whether a file name has an extension eligible for publication."""
        return os.path.splitext(name)[1].lower() in self._allowed_extensions

    def has_metadata(self, name: str) -> bool:
        """Check whether a file name has an extension whose files carry frontmatter."""
        return os.path.splitext(name)[1].lower() in self._metadata_extensions

    def as_dict(self) -> Dict[str, Any]:
        """Return the rule set as constructor keyword arguments.

        Patterns are returned as their source strings and tuples as lists, so the result
        is also a valid configuration mapping.

        Example:
            >>> RuleSet(excluded_tags=["draft"]).as_dict()["excluded_tags"]
            ['draft']
        """
        return {
            "excluded_folders": list(self._excluded_folders),
            "excluded_files": list(self._excluded_files),
            "excluded_patterns": [pattern.pattern for pattern in self._excluded_patterns],
            "excluded_by_frontmatter": dict(self._excluded_by_frontmatter),
            "excluded_tags": list(self._excluded_tags),
            "excluded_globs": list(self._excluded_globs),
            "folder_match": self._folder_match.value,
            "allowed_extensions": list(self._allowed_extensions),
            "metadata_extensions": list(self._metadata_extensions),
            "tag_keys": list(self._tag_keys),
        }

    def replace(self, **changes: Any) -> "RuleSet":
        """Return a new rule set with some fields replaced.

        Args:
            **changes: Constructor keyword arguments to override.

        Raises:
            ConfigurationError: If a change is invalid or names an unknown field.

        Example:
            >>> base = RuleSet(excluded_tags=["draft"])
            >>> base.replace(folder_match="substring").folder_match.value
            'substring'
            >>> base.excluded_tags == base.replace(folder_match="substring").excluded_tags
            True
        """
        values = self.as_dict()
        for key in changes:
            if key not in values:
                raise ConfigurationError("unknown rule set field", key=key)
        values.update(changes)
        return RuleSet(**values)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, RuleSet):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __hash__(self) -> int:
        return hash(
            (
                self._excluded_folders,
                self._excluded_files,
                tuple(pattern.pattern for pattern in self._excluded_patterns),
                tuple(sorted(self._excluded_by_frontmatter.items(), key=lambda item: item[0])),
                self._excluded_tags,
                self._excluded_globs,
                self._folder_match,
                self._allowed_extensions,
                self._metadata_extensions,
                self._tag_keys,
            )
        )

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in self.as_dict().items())
        return f"RuleSet({fields})"
