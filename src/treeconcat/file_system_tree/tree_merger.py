"""Merging of independently selected files and directories into one tree.

A user may select any mix of files and directories. Each selected directory is
traversed on its own, with its own exclusion rules; the resulting subtrees and the
selected files are then grafted onto a unified root placed at the deepest directory
that contains every selection. Directories between that root and a selection are
created as virtual nodes.

Merging only starts once every traversal has finished, so insertion never races
with a traversal still in progress.
"""

import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path, PurePath
from typing import List, NamedTuple, Optional, Sequence

from treeconcat.exceptions import HierarchyUnavailableError
from treeconcat.file_system_tree.directory_traverser import DirectoryTraverser
from treeconcat.file_system_tree.file_system_node import (
    FileSystemNode,
    directory_node,
    file_node,
    find_child,
    join_relative,
    sort_children,
)
from treeconcat.file_system_tree.traversal_options import TraversalOptions
from treeconcat.logging import get_logger
from treeconcat.types import NodeType, PathType

logger = get_logger(__name__)


class Selections(NamedTuple):
    """Selected locations classified by kind, sorted and without duplicates."""

    directories: List[Path]
    files: List[Path]

    @property
    def all(self) -> List[Path]:
        return sorted(self.directories + self.files)


def common_ancestor(locations: Sequence[PathType]) -> Optional[Path]:
    """Find the deepest directory that is a prefix of every location.

    The comparison is purely lexical on path components: paths are not resolved,
    so symlink aliases and case-insensitive filesystems are not taken into account.

    Args:
        locations: Locations to compare.

    Returns:
        The common ancestor. For a single location this is its containing directory.
        None if there are no locations or the paths share no leading component.

    Example:
        >>> common_ancestor(["/home/u/proj/src/a.ts", "/home/u/proj/docs"]).as_posix()
        '/home/u/proj'
        >>> common_ancestor(["/home/u/proj/src/a.ts"]).as_posix()
        '/home/u/proj/src'
        >>> common_ancestor(["a/x.txt", "b/y.txt"]) is None
        True
        >>> common_ancestor([]) is None
        True
    """
    if not locations:
        return None
    if len(locations) == 1:
        return Path(locations[0]).parent

    common = list(PurePath(locations[0]).parts)
    for location in locations[1:]:
        parts = PurePath(location).parts
        length = 0
        while length < len(common) and length < len(parts) and common[length] == parts[length]:
            length += 1
        del common[length:]

    if not common:
        return None
    return Path(*common)


def insert_node(root: FileSystemNode, relative_path: str, node: FileSystemNode) -> bool:
    """Attach a node below root at a posix path relative to root.

    Missing intermediate directories are created as virtual directories. If the
    final parent already has a child with the node's name, nothing happens, so
    inserting the same node twice is harmless. Cost is proportional to the depth
    of relative_path, not to the size of the tree.

    Args:
        root: Directory to insert into.
        relative_path: Path of the node relative to root, including the node's name,
            e.g. "src/utils/helper.ts".
        node: The file or directory node to attach.

    Returns:
        True if the node was attached, False if a child of that name already
        existed or a file stands where an intermediate directory is needed.

    Example:
        >>> root = directory_node("proj", "/proj", is_virtual=True)
        >>> insert_node(root, "a/b/c.txt", file_node("c.txt", "/proj/a/b/c.txt"))
        True
        >>> insert_node(root, "a/b", directory_node("b", "/proj/a/b"))
        False
        >>> [child.name for child in root.children], root.children[0].is_virtual
        (['a'], True)
    """
    parts = [part for part in relative_path.split("/") if part]
    current = root
    for part in parts[:-1]:
        child = find_child(current, part)
        if child is None:
            child = directory_node(
                part,
                current.location / part,
                join_relative(current.relative_path, part),
                is_virtual=True,
            )
            child.parent = current
            sort_children(current)
        elif child.node_type is NodeType.FILE:
            logger.warning("insert_blocked_by_file", path=relative_path, file=child.name)
            return False
        current = child

    if find_child(current, node.name) is not None:
        return False

    node.parent = current
    sort_children(current)
    return True


def normalize_selections(paths: Sequence[PathType]) -> Selections:
    """Deduplicate, sort and classify selected locations.

    Selections that lie inside another selected directory are dropped, since the
    traversal of that directory already covers them. Locations that are neither a
    directory nor a regular file are logged and dropped.

    Args:
        paths: The selected locations.

    Returns:
        The remaining directories and files, each sorted by path.
    """
    unique = sorted({Path(os.path.abspath(path)) for path in paths})

    directories: List[Path] = []
    files: List[Path] = []
    for path in unique:
        if path.is_dir():
            directories.append(path)
        elif path.is_file():
            files.append(path)
        else:
            logger.warning("selection_skipped", path=str(path), reason="not a file or directory")

    def is_covered(path: Path) -> bool:
        return any(directory != path and directory in path.parents for directory in directories)

    return Selections(
        directories=[d for d in directories if not is_covered(d)],
        files=[f for f in files if not is_covered(f)],
    )


def build_unified_tree(
    paths: Sequence[PathType],
    options: Optional[TraversalOptions] = None,
    *,
    traverser: Optional[DirectoryTraverser] = None,
    max_workers: Optional[int] = None,
) -> FileSystemNode:
    """Build one tree covering every selected file and directory.

    Args:
        paths: Selected locations.
        options: Traversal options applied to every selected directory. Explicitly
            selected files are always included, regardless of the extension filter.
        traverser: Traverser to use. Defaults to a new DirectoryTraverser.
        max_workers: Number of threads traversing selected directories concurrently.
            None or 1 traverses them one after another.

    Returns:
        A virtual Directory node at the common ancestor of the selections.

    Raises:
        HierarchyUnavailableError: If the selections share no common ancestor.
    """
    traverser = traverser or DirectoryTraverser()
    selections = normalize_selections(paths)
    ancestor = common_ancestor(selections.all)
    if ancestor is None:
        raise HierarchyUnavailableError(selections.all or list(paths))

    if max_workers is not None and max_workers > 1 and len(selections.directories) > 1:
        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="Traversal") as executor:
            subtrees = list(executor.map(lambda d: traverser.traverse(d, options), selections.directories))
    else:
        subtrees = [traverser.traverse(directory, options) for directory in selections.directories]

    root = directory_node(ancestor.name or str(ancestor), ancestor, is_virtual=True)
    for directory, subtree in zip(selections.directories, subtrees):
        insert_node(root, _relative_posix(directory, ancestor), subtree)
    for path in selections.files:
        relative_path = _relative_posix(path, ancestor)
        insert_node(root, relative_path, file_node(path.name, path, relative_path))

    logger.info(
        "unified_tree_built",
        root=str(ancestor),
        directories=len(selections.directories),
        files=len(selections.files),
    )
    return root


def _relative_posix(path: Path, ancestor: Path) -> str:
    return path.relative_to(ancestor).as_posix()
