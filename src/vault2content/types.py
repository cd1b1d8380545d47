from enum import Enum
from os import PathLike
from typing import List, Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]

# Closed set of values a parsed frontmatter field can hold
FrontmatterValue = Union[str, bool, int, float, List[str]]

# Values a frontmatter exclusion rule can expect
ScalarValue = Union[str, bool, int, float]


class EntryKind(str, Enum):
    """Kind of a node met while walking the vault.

    Attributes:
        FILE: Regular file
        DIRECTORY: Directory
    """

    FILE = "file"
    DIRECTORY = "directory"


class Disposition(str, Enum):
    """Outcome recorded for every entry visited by the tree copier.

    Attributes:
        COPIED: The file was admitted and copied (or the directory was mirrored).
        EXCLUDED: An exclusion rule matched.
        SKIPPED: The entry was not considered for publication (unsupported format,
            symbolic link, loop, special file).
    """

    COPIED = "copied"
    EXCLUDED = "excluded"
    SKIPPED = "skipped"


class RuleKind(str, Enum):
    """Exclusion criteria, in the order they are evaluated."""

    FOLDER = "folder"
    GLOB = "glob"
    FILENAME = "filename"
    PATTERN = "pattern"
    FRONTMATTER = "frontmatter"
    TAG = "tag"


class FolderMatchMode(str, Enum):
    """How excluded folder fragments are compared against relative paths.

    Attributes:
        SEGMENT: The fragment must match whole path segments ("Work" matches
            "Work/a.md" but not "Workshop/a.md").
        SUBSTRING: Plain substring containment anywhere in the relative path.
    """

    SEGMENT = "segment"
    SUBSTRING = "substring"
