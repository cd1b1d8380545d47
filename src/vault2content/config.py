"""Loading rule sets from YAML configuration files.

A configuration file is a YAML mapping whose keys are the ``RuleSet`` fields::

    excluded_folders: [".obsidian", ".trash", "Work/Confidential"]
    excluded_files: ["credentials.md"]
    excluded_patterns: ['^_.*\\.md$']
    excluded_by_frontmatter: {publish: false, draft: true}
    excluded_tags: [private]
    folder_match: segment

Keys that are left out keep the value of ``RuleSet.default()``; keys set to null
become empty.
"""

from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from vault2content.exceptions import ConfigurationError
from vault2content.frontmatter import load_yaml
from vault2content.rule_set import RuleSet
from vault2content.types import PathType

CONFIG_FILENAMES = ("vault2content.yaml", "vault2content.yml", ".vault2content.yaml")

CONFIG_KEYS = (
    "excluded_folders",
    "excluded_files",
    "excluded_patterns",
    "excluded_by_frontmatter",
    "excluded_tags",
    "excluded_globs",
    "folder_match",
    "allowed_extensions",
    "metadata_extensions",
    "tag_keys",
)


def rule_set_from_mapping(data: Mapping[str, Any], base: Optional[RuleSet] = None) -> RuleSet:
    """Build a rule set from a configuration mapping.

    Args:
        data: Parsed configuration. Only keys from ``CONFIG_KEYS`` are accepted.
        base: Rule set supplying values for keys absent from ``data``. Defaults to
            ``RuleSet.default()``.

    Returns:
        The validated rule set.

    Raises:
        ConfigurationError: If ``data`` is not a mapping, contains unknown keys, or any
            value is invalid.

    Example:
        >>> rules = rule_set_from_mapping({"excluded_tags": ["secret"], "excluded_folders": None})
        >>> rules.excluded_tags, rules.excluded_folders
        (('secret',), ())
        >>> rules.excluded_by_frontmatter["draft"]
        True
    """
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"top level must be a mapping, got {type(data).__name__}")

    unknown = sorted(str(key) for key in data if key not in CONFIG_KEYS)
    if unknown:
        raise ConfigurationError(f"unknown keys: {', '.join(unknown)}")

    changes: Dict[str, Any] = {}
    for key, value in data.items():
        if value is None:
            if key == "folder_match":
                raise ConfigurationError("a folder match mode is required", key=key)
            # An empty YAML entry clears the collection
            value = {} if key == "excluded_by_frontmatter" else []
        changes[key] = value

    if base is None:
        base = RuleSet.default()
    return base.replace(**changes)


def load_rule_set(path: PathType) -> RuleSet:
    """Load and validate a rule set from a YAML file.

    An empty file yields ``RuleSet.default()``.

    Args:
        path: Path to the configuration file.

    Returns:
        The validated rule set.

    Raises:
        ConfigurationError: If the file cannot be read, is not valid YAML, or does not
            describe a valid rule set.
    """
    config_path = Path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigurationError(f"config file not found: {config_path}")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"cannot read config file {config_path}: {e}")

    try:
        data = load_yaml(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"{config_path} is not valid YAML: {e}")

    if data is None:
        return RuleSet.default()
    return rule_set_from_mapping(data)


def find_config_file(directory: PathType) -> Optional[Path]:
    """Return the first configuration file found in a directory, if any.

    Candidates are checked in the order of ``CONFIG_FILENAMES``.
    """
    for name in CONFIG_FILENAMES:
        candidate = Path(directory) / name
        if candidate.is_file():
            return candidate
    return None
