"""Unit tests for the FileIdentifier class."""

import os

from treeconcat.file_system_tree.file_identifier import FileIdentifier


def test_file_identifier():
    id1 = FileIdentifier(123, 456)
    id2 = FileIdentifier(123, 456)
    id3 = FileIdentifier(789, 456)

    assert id1 == id2
    assert id1 != id3
    assert hash(id1) == hash(id2)
    assert id2 in {id1, id3}
    assert repr(id1) == "FileIdentifier(device_id=123, inode_number=456)"


def test_from_path(tmp_path):
    stat_info = os.stat(tmp_path)
    assert FileIdentifier.from_path(tmp_path) == FileIdentifier(stat_info.st_dev, stat_info.st_ino)


def test_from_path_missing(tmp_path):
    assert FileIdentifier.from_path(tmp_path / "missing") is None
