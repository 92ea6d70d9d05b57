from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class NodeType(Enum):
    """Enumeration of node variants in a file system tree.

    Every node in a tree carries exactly one of these tags, and code that walks
    a tree branches on it rather than on the node's class.

    Attributes:
        FILE: Regular file (a leaf)
        DIRECTORY: Directory owning an ordered list of children
    """

    FILE = "file"
    DIRECTORY = "directory"
