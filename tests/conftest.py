"""Test configuration and fixtures for vault2content."""

from pathlib import Path

import pytest


def pytest_addoption(parser):
    """Add custom command-line options for tests."""
    parser.addoption("--run-cli-tests", action="store_true", default=False, help="Run CLI integration tests (slow)")


@pytest.fixture
def vault(tmp_path):
    """Create a small vault exercising every kind of exclusion."""
    root = tmp_path / "vault"
    files = {
        "index.md": "---\ntitle: Welcome\n---\n# Welcome\n",
        "Notes/public.md": "---\ntags: [public]\n---\nHello\n",
        "Notes/draft.md": "---\ndraft: true\n---\nLater\n",
        "Notes/secret.md": "---\ntags: [private]\n---\nHidden\n",
        "Notes/_scratch.md": "scratch\n",
        "Notes/2024-01-15 Daily.md": "daily\n",
        "Notes/image.png": "\x89PNG fake",
        "Notes/data.csv": "a,b\n",
        "Work/Confidential/plan.md": "plan\n",
        "Work/public.md": "public work\n",
        ".obsidian/workspace.json": "{}",
    }
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def content_dir(tmp_path) -> Path:
    """Destination directory next to the vault."""
    return tmp_path / "content"
