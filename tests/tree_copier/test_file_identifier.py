"""Unit tests for FileIdentifier."""

import os
import platform

import pytest

from vault2content.tree_copier.file_identifier import FileIdentifier


def test_same_directory_same_identifier(tmp_path):
    """Test that two paths to one directory share an identifier."""
    (tmp_path / "a").mkdir()

    assert FileIdentifier.of(tmp_path / "a") == FileIdentifier.of(tmp_path / "a" / ".." / "a")
    assert FileIdentifier.of(tmp_path / "a") != FileIdentifier.of(tmp_path)


@pytest.mark.skipif(platform.system() == "Windows", reason="Symlink tests require a Unix system")
def test_symlink_resolves_to_target(tmp_path):
    """Test that links are followed."""
    (tmp_path / "target").mkdir()
    os.symlink(tmp_path / "target", tmp_path / "link")

    assert FileIdentifier.of(tmp_path / "link") == FileIdentifier.of(tmp_path / "target")


def test_missing_path_raises(tmp_path):
    """Test that stat errors propagate."""
    with pytest.raises(FileNotFoundError):
        FileIdentifier.of(tmp_path / "missing")


def test_usable_in_sets():
    """Test hashing and repr."""
    identifiers = {FileIdentifier(1, 2), FileIdentifier(1, 2)}

    assert len(identifiers) == 1
    assert repr(FileIdentifier(1, 2)) == "FileIdentifier(device_id=1, inode_number=2)"
    assert FileIdentifier(1, 2) != (1, 2)
