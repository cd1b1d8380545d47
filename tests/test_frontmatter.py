"""Unit tests for frontmatter extraction and normalization."""

import pytest
import yaml

from vault2content.exceptions import FrontmatterParseError
from vault2content.frontmatter import extract_frontmatter_block, load_yaml, parse_frontmatter


def test_no_header():
    """Test that a note without a header has no metadata."""
    assert parse_frontmatter(b"# Title\n\nBody") == {}
    assert parse_frontmatter(b"") == {}


def test_header_must_start_on_first_line():
    """Test that a delimiter further down is body text."""
    assert parse_frontmatter(b"\n---\ndraft: true\n---\n") == {}


def test_scalar_types_preserved():
    """Test booleans, numbers and strings keep their types."""
    metadata = parse_frontmatter(b"---\npublish: false\nweight: 3\nratio: 0.5\ntitle: Hello\n---\n")

    assert metadata == {"publish": False, "weight": 3, "ratio": 0.5, "title": "Hello"}
    assert metadata["publish"] is False


def test_quoted_false_stays_string():
    """Test that a quoted boolean is a string."""
    assert parse_frontmatter(b'---\npublish: "false"\n---\n') == {"publish": "false"}


def test_lists_become_string_lists():
    """Test list normalization."""
    metadata = parse_frontmatter(b"---\ntags:\n  - public\n  - 2024\n  - null\n---\n")

    assert metadata == {"tags": ["public", "2024"]}


def test_dates_become_iso_strings():
    """Test that YAML dates are rendered as ISO strings."""
    assert parse_frontmatter(b"---\ncreated: 2024-01-15\n---\n") == {"created": "2024-01-15"}


def test_unsupported_values_dropped():
    """Test that nulls and nested mappings are left out."""
    metadata = parse_frontmatter(b"---\nempty:\nnested:\n  a: 1\ntitle: x\n---\n")

    assert metadata == {"title": "x"}


def test_empty_header():
    """Test that an empty header yields no metadata."""
    assert parse_frontmatter(b"---\n---\nBody") == {}


def test_dots_close_header():
    """Test the YAML document end marker as closing delimiter."""
    assert parse_frontmatter(b"---\ndraft: true\n...\nBody") == {"draft": True}


def test_bom_and_crlf():
    """Test notes saved with a byte order mark and Windows line endings."""
    content = "\ufeff---\r\ndraft: true\r\n---\r\nBody".encode("utf-8")

    assert parse_frontmatter(content) == {"draft": True}


def test_non_ascii_values():
    """Test that non-ASCII tags survive."""
    content = "---\ntags: [личное]\n---\n".encode("utf-8")

    assert parse_frontmatter(content) == {"tags": ["личное"]}


@pytest.mark.parametrize(
    "content,reason",
    [
        (b"---\ntags: [a, b\n---\n", "invalid YAML"),
        (b"---\n- a\n- b\n---\n", "expected a mapping"),
        (b"---\ndraft: true\n---\n\xff\xfe", "UTF-8"),
    ],
)
def test_malformed_headers(content, reason):
    """Test that malformed headers raise FrontmatterParseError."""
    with pytest.raises(FrontmatterParseError) as exc_info:
        parse_frontmatter(content)
    assert reason in exc_info.value.reason


def test_extract_block_keeps_raw_text():
    """Test that the raw header is returned untouched."""
    assert extract_frontmatter_block("---\na: 1\nb: [x]\n---\nrest") == "a: 1\nb: [x]"


def test_unclosed_header_runs_to_end_of_file():
    """Test that a header without a closing delimiter is read up to the end of the file."""
    assert parse_frontmatter(b"---\ndraft: true\nprivate: true\n") == {"draft": True, "private": True}


def test_unclosed_header_with_invalid_yaml():
    """Test that an unclosed header still reports YAML errors."""
    with pytest.raises(FrontmatterParseError) as exc_info:
        parse_frontmatter(b"---\ndraft: true\n# Heading\nSome text: with: colons\n")
    assert "invalid YAML" in exc_info.value.reason


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("publish: no", "no"),
        ("draft: yes", "yes"),
        ("draft: on", "on"),
        ("publish: Off", "Off"),
    ],
)
def test_yes_no_values_stay_strings(raw, expected):
    """Test that only true and false are read as booleans."""
    key = raw.split(":")[0]
    content = f"---\n{raw}\n---\n".encode("utf-8")

    assert parse_frontmatter(content) == {key: expected}


@pytest.mark.parametrize("raw,expected", [("true", True), ("True", True), ("FALSE", False), ("false", False)])
def test_true_false_are_booleans(raw, expected):
    """Test the spellings that are read as booleans."""
    assert parse_frontmatter(f"---\ndraft: {raw}\n---\n".encode("utf-8")) == {"draft": expected}


def test_null_and_numbers_still_resolve():
    """Test that dropping the yes/no booleans leaves the other scalar types intact."""
    content = b"---\nnothing: null\ncount: 3\nratio: 0.5\nnote: n\n---\n"

    assert parse_frontmatter(content) == {"count": 3, "ratio": 0.5, "note": "n"}


def test_loader_leaves_safe_loader_untouched():
    """Test that SafeLoader keeps its own boolean rules."""
    assert yaml.safe_load("a: no") == {"a": False}
    assert load_yaml("a: no") == {"a": "no"}
