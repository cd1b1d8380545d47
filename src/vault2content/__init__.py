"""Obsidian vault to publishable content filtering.

This package decides which notes and attachments of a personal knowledge vault may be
published, and copies the admitted part of the vault into a content directory for a
static site generator. Exclusion rules cover folders, file names, regular expressions,
gitignore-style globs, frontmatter fields and tags.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("vault2content")
except PackageNotFoundError:
    __version__ = "unknown"
