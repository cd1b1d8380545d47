"""Frontmatter extraction for note files.

Notes carry an optional YAML header delimited by ``---`` lines at the very top of the
file. This module extracts that header and normalizes its values to the closed set of
types the exclusion rules understand (see ``FrontmatterValue``).

Headers are read with ``FrontmatterLoader``, which resolves booleans the YAML 1.2 way:
only ``true`` and ``false`` are booleans, while ``yes``, ``no``, ``on`` and ``off`` stay
strings.
"""

import datetime
import re
from typing import Any, Dict, Optional

import yaml

from vault2content.exceptions import FrontmatterParseError
from vault2content.types import FrontmatterValue

FRONTMATTER_START = "---"
FRONTMATTER_END = ("---", "...")

BOOL_TAG = "tag:yaml.org,2002:bool"


class FrontmatterLoader(yaml.SafeLoader):
    """SafeLoader with YAML 1.2 core schema booleans.

    Example:
        >>> yaml.load("a: no\\nb: True\\nc: off", Loader=FrontmatterLoader)
        {'a': 'no', 'b': True, 'c': 'off'}
    """


FrontmatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != BOOL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
FrontmatterLoader.add_implicit_resolver(
    BOOL_TAG, re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"), list("tTfF")
)


def load_yaml(text: str) -> Any:
    """Load a YAML document with ``FrontmatterLoader``.

    Raises:
        yaml.YAMLError: If the text is not valid YAML.
    """
    return yaml.load(text, Loader=FrontmatterLoader)


def extract_frontmatter_block(text: str) -> Optional[str]:
    """Return the raw YAML header of a note, or None if the note has no header.

    A header that is opened but never closed runs to the end of the file.

    Args:
        text: Decoded note content.

    Returns:
        The text between the opening and closing delimiters, or None when the first
        line is not a ``---`` delimiter.

    Example:
        >>> extract_frontmatter_block("---\\ntitle: Hi\\n---\\nBody")
        'title: Hi'
        >>> extract_frontmatter_block("---\\ndraft: true\\nprivate: true\\n")
        'draft: true\\nprivate: true'
        >>> extract_frontmatter_block("# Just a heading") is None
        True
    """
    lines = text.splitlines()
    if not lines or lines[0].rstrip() != FRONTMATTER_START:
        return None

    for index in range(1, len(lines)):
        if lines[index].rstrip() in FRONTMATTER_END:
            return "\n".join(lines[1:index])

    return "\n".join(lines[1:])


def normalize_value(value: Any) -> Optional[FrontmatterValue]:
    """Convert a YAML value to a frontmatter value, or None if it has no representation.

    Booleans, numbers and strings are kept as they are. Dates become ISO strings. Lists
    become lists of strings with unsupported items dropped. Mappings and nulls have no
    representation.

    Example:
        >>> normalize_value(False)
        False
        >>> normalize_value(datetime.date(2024, 1, 15))
        '2024-01-15'
        >>> normalize_value(["a", 2, None, {"x": 1}])
        ['a', '2']
        >>> normalize_value({"nested": True}) is None
        True
    """
    if isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        items = []
        for item in value:
            if isinstance(item, (datetime.date, datetime.datetime)):
                items.append(item.isoformat())
            elif isinstance(item, (bool, int, float, str)):
                items.append(str(item))
        return items
    return None


def _describe_yaml_error(error: yaml.YAMLError) -> str:
    problem = getattr(error, "problem", None)
    mark = getattr(error, "problem_mark", None)
    if problem is None:
        return f"invalid YAML: {error}"
    if mark is None:
        return f"invalid YAML: {problem}"
    # Line numbers are reported relative to the file, so count the opening delimiter
    return f"invalid YAML: {problem} (line {mark.line + 2})"


def parse_frontmatter(content: bytes) -> Dict[str, FrontmatterValue]:
    """Parse the frontmatter header of a note.

    Args:
        content: Raw bytes of the note file.

    Returns:
        Mapping from field name to normalized value. Notes without a header yield an
        empty mapping. Fields whose value cannot be represented are left out.

    Raises:
        FrontmatterParseError: If the file is not valid UTF-8, the header is not valid
            YAML, or it does not describe a mapping.

    Example:
        >>> parse_frontmatter(b"---\\npublish: false\\ntags: [a, b]\\n---\\ntext")
        {'publish': False, 'tags': ['a', 'b']}
        >>> parse_frontmatter(b"no header here")
        {}
    """
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise FrontmatterParseError(f"file is not valid UTF-8 ({e.reason} at byte {e.start})")

    block = extract_frontmatter_block(text)
    if block is None:
        return {}

    try:
        data = load_yaml(block)
    except yaml.YAMLError as e:
        raise FrontmatterParseError(_describe_yaml_error(e))

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontmatterParseError(f"expected a mapping, got {type(data).__name__}")

    metadata: Dict[str, FrontmatterValue] = {}
    for key, value in data.items():
        normalized = normalize_value(value)
        if normalized is not None:
            metadata[str(key)] = normalized
    return metadata
