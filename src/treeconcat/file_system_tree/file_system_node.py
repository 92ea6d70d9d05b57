"""Node representation for file system elements in the tree."""

from pathlib import Path
from typing import Iterable, Optional, Tuple

from anytree import Node, TreeError

from treeconcat.types import NodeType, PathType


class FileSystemNode(Node):  # type: ignore
    """Node class representing a file or directory in the filesystem tree.

    Extends anytree.Node, which guarantees a strict hierarchy: a node has at most
    one parent and cycles are rejected on attachment. The variant is carried by the
    node_type tag rather than by subclasses; only directories may have children.

    Use the file_node() and directory_node() constructors rather than calling this
    class directly.

    Attributes:
        name (str): The name of the file or directory (a single path segment).
        node_type (NodeType): FILE or DIRECTORY.
        location (Path): Filesystem location the node stands for.
        relative_path (str): Posix path relative to the node's own traversal root,
            "" for a traversal root.
        is_virtual (bool): True for directories synthesized while merging selections.
            Virtual directories were never traversed and have no exclusion rule scope.
        children (tuple[FileSystemNode]): The child nodes (inherited from anytree.Node).

    Example:
        >>> root = directory_node("proj", "/tmp/proj")
        >>> child = file_node("a.ts", "/tmp/proj/a.ts", "a.ts")
        >>> child.parent = root
        >>> root.is_dir, child.is_dir
        (True, False)
        >>> child.relative_path
        'a.ts'
    """

    def __init__(
        self,
        name: str,
        node_type: NodeType,
        location: PathType,
        relative_path: str = "",
        is_virtual: bool = False,
        parent: Optional["FileSystemNode"] = None,
    ) -> None:
        super().__init__(name, parent)
        self.node_type = node_type
        self.location = Path(location)
        self.relative_path = relative_path
        self.is_virtual = is_virtual

    @property
    def is_dir(self) -> bool:
        return self.node_type is NodeType.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.node_type is NodeType.FILE

    def _pre_attach(self, parent: "FileSystemNode") -> None:
        if parent.node_type is not NodeType.DIRECTORY:
            raise TreeError(f"Cannot attach {self.name!r} below file {parent.name!r}")

    def __repr__(self) -> str:
        virtual = ", virtual" if self.is_virtual else ""
        return f"FileSystemNode({self.name!r}, {self.node_type.value}, {self.relative_path!r}{virtual})"


def file_node(name: str, location: PathType, relative_path: str = "") -> FileSystemNode:
    """Create a File node."""
    return FileSystemNode(name, NodeType.FILE, location, relative_path)


def directory_node(
    name: str,
    location: PathType,
    relative_path: str = "",
    children: Iterable[FileSystemNode] = (),
    is_virtual: bool = False,
) -> FileSystemNode:
    """Create a Directory node owning the given children, kept in sorted order."""
    node = FileSystemNode(name, NodeType.DIRECTORY, location, relative_path, is_virtual=is_virtual)
    node.children = sorted_nodes(children)
    return node


def join_relative(parent_path: str, name: str) -> str:
    """Join a relative posix path and a name; "" stands for the traversal root."""
    return f"{parent_path}/{name}" if parent_path else name


def sort_key(node: FileSystemNode) -> Tuple[bool, str]:
    """Directories first, then case-sensitive lexical order by name."""
    return (node.node_type is not NodeType.DIRECTORY, node.name)


def sorted_nodes(nodes: Iterable[FileSystemNode]) -> Tuple[FileSystemNode, ...]:
    return tuple(sorted(nodes, key=sort_key))


def sort_children(directory: FileSystemNode) -> None:
    """Restore the ordering invariant after children were added to a directory."""
    directory.children = sorted_nodes(directory.children)


def find_child(directory: FileSystemNode, name: str) -> Optional[FileSystemNode]:
    """Return the child with the given name, or None."""
    for child in directory.children:
        if child.name == name:
            return child
    return None
