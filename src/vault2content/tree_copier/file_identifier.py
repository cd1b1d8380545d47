"""File identifier for uniquely identifying directories by device and inode."""

import os
from typing import Any

from vault2content.types import PathType


class FileIdentifier:
    """Identity of a directory on disk, independent of the path used to reach it.

    The tree copier keeps the identifiers of the directories on the current branch so
    that a symbolic link pointing back to one of its ancestors is recognized as a loop
    instead of being walked forever.

    Attributes:
        device_id (int): The device ID from stat information.
        inode_number (int): The inode number from stat information.

    Example:
        >>> FileIdentifier(1, 42) == FileIdentifier(1, 42)
        True
        >>> len({FileIdentifier(1, 42), FileIdentifier(1, 42), FileIdentifier(2, 42)})
        2
    """

    def __init__(self, device_id: int, inode_number: int):
        self.device_id = device_id
        self.inode_number = inode_number

    @classmethod
    def of(cls, path: PathType) -> "FileIdentifier":
        """Identify the file a path resolves to, following symbolic links.

        Raises:
            OSError: If the path cannot be stat'ed.
        """
        stat_info = os.stat(path)
        return cls(stat_info.st_dev, stat_info.st_ino)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, FileIdentifier):
            return False
        return self.device_id == other.device_id and self.inode_number == other.inode_number

    def __hash__(self) -> int:
        return hash((self.device_id, self.inode_number))

    def __repr__(self) -> str:
        return f"FileIdentifier(device_id={self.device_id}, inode_number={self.inode_number})"
