"""File system tree representation with scoped .gitignore handling.

This module provides the FileSystemTree class, a lazily built view of one root
directory, and helpers that flatten or count any node tree, including trees
produced by merging several selections.
"""

from pathlib import Path
from typing import Iterator, Optional, Tuple

from treeconcat.file_system_tree.directory_traverser import DirectoryTraverser
from treeconcat.file_system_tree.file_system_node import FileSystemNode
from treeconcat.file_system_tree.traversal_options import TraversalOptions
from treeconcat.file_system_tree.tree_renderer import render_tree, stream_tree
from treeconcat.types import NodeType, PathType


def iterate_files(node: FileSystemNode) -> Iterator[FileSystemNode]:
    """Yield the file leaves of a tree in display order (depth first, sorted)."""
    if node.node_type is NodeType.FILE:
        yield node
        return
    for child in node.children:
        yield from iterate_files(child)


def count_nodes(node: FileSystemNode) -> Tuple[int, int]:
    """Count (directories, files) below a node. The node itself is not counted."""
    directories = files = 0
    for descendant in node.descendants:
        if descendant.node_type is NodeType.DIRECTORY:
            directories += 1
        else:
            files += 1
    return directories, files


class FileSystemTree:
    """A tree representation of a directory structure.

    The tree is built lazily on first access and can be refreshed to reflect
    filesystem changes. Both full tree access and iterative file listing are
    supported.

    Attributes:
        root_path (Path): The root directory.
        options (TraversalOptions): Extension filter and exclusion rule settings.

    Example:
        >>> tree = FileSystemTree(".")  # doctest: +SKIP
        >>> print(tree.get_tree_representation())  # doctest: +SKIP
        project
        ├─ src
        |  └─ main.py
        └─ README.md
    """

    def __init__(
        self,
        root_path: PathType,
        options: Optional[TraversalOptions] = None,
        traverser: Optional[DirectoryTraverser] = None,
    ) -> None:
        """Initialize a FileSystemTree.

        Args:
            root_path: Path to the root directory to represent. Can be any path-like object.
            options: Traversal options. Defaults to TraversalOptions().
            traverser: Traverser used to build the tree. Defaults to a new DirectoryTraverser.
        """
        self.root_path = Path(root_path)
        self.options = options or TraversalOptions()
        self._traverser = traverser or DirectoryTraverser()
        self._tree: Optional[FileSystemNode] = None

    def get_tree(self) -> FileSystemNode:
        """Get the root node of the tree, building it on first access.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            NotADirectoryError: If the root path isn't a directory.
        """
        if self._tree is None:
            self._build_tree()
        assert self._tree is not None
        return self._tree

    def _build_tree(self) -> None:
        if not self.root_path.exists():
            raise FileNotFoundError(f"Root path does not exist: {self.root_path}")
        if not self.root_path.is_dir():
            raise NotADirectoryError(f"Root path is not a directory: {self.root_path}")
        self._tree = self._traverser.traverse(self.root_path, self.options)

    def get_file_count(self) -> int:
        """Get the number of files in the tree, after filtering."""
        return count_nodes(self.get_tree())[1]

    def get_directory_count(self) -> int:
        """Get the number of directories in the tree, excluding the root."""
        return count_nodes(self.get_tree())[0]

    def iterate_files(self) -> Iterator[Tuple[str, str]]:
        """Iterate over all files in the tree.

        Yields:
            Pairs of (absolute_path, relative_path) for each file, in tree order.

        Example:
            >>> tree = FileSystemTree("src")  # doctest: +SKIP
            >>> for abs_path, rel_path in tree.iterate_files():  # doctest: +SKIP
            ...     print(rel_path)
            utils/helpers.py
            main.py
        """
        for node in iterate_files(self.get_tree()):
            yield str(node.location.absolute()), node.relative_path

    def stream_tree_representation(self) -> Iterator[str]:
        """Generate the tree diagram one line at a time."""
        yield from stream_tree(self.get_tree())

    def get_tree_representation(self) -> str:
        """Get the complete tree diagram as a string."""
        return render_tree(self.get_tree())

    def refresh(self) -> None:
        """Discard the cached tree and rebuild it from the filesystem."""
        self._tree = None
        self._build_tree()
