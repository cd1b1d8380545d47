"""Exclusion rules for filtering vault files and directories."""

from .base_rules import BaseExclusionRules
from .composite_rules import CompositeExclusionRules
from .frontmatter_rules import FrontmatterExclusionRules, TagExclusionRules
from .glob_rules import GlobExclusionRules, read_ignore_file
from .path_rules import FilenameExclusionRules, FolderExclusionRules, PatternExclusionRules

__all__ = [
    "BaseExclusionRules",
    "CompositeExclusionRules",
    "FilenameExclusionRules",
    "FolderExclusionRules",
    "FrontmatterExclusionRules",
    "GlobExclusionRules",
    "PatternExclusionRules",
    "TagExclusionRules",
    "read_ignore_file",
]
