"""File identifier for uniquely identifying directories by device and inode."""

import os
from typing import NamedTuple, Optional

from treeconcat.types import PathType


class FileIdentifier(NamedTuple):
    """Device and inode pair that uniquely identifies a file or directory.

    Used to detect symlink loops when symbolic links are followed during
    traversal: a directory whose identifier is already among its ancestors'
    identifiers is a loop and is not descended into.

    Note:
        On Windows, inode numbers might be handled differently than on Unix systems,
        but Python's os.stat implementation provides values that can be used
        for uniquely identifying files.
    """

    device_id: int
    inode_number: int

    @classmethod
    def from_path(cls, path: PathType) -> Optional["FileIdentifier"]:
        """Stat a path, following symlinks. Returns None if it cannot be stat'ed."""
        try:
            stat_info = os.stat(path)
        except OSError:
            return None
        return cls(stat_info.st_dev, stat_info.st_ino)
