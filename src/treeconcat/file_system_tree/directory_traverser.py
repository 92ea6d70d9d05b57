"""Recursive directory traversal with scoped .gitignore handling."""

import os
from pathlib import Path
from typing import FrozenSet, List, Optional

from treeconcat.exclusion_rules import PatternStack, add_default_rules, create, load_directory_rules
from treeconcat.file_system_tree.file_identifier import FileIdentifier
from treeconcat.file_system_tree.file_system_node import (
    FileSystemNode,
    directory_node,
    file_node,
    join_relative,
)
from treeconcat.file_system_tree.traversal_options import TraversalOptions
from treeconcat.logging import get_logger
from treeconcat.types import NodeType, PathType

logger = get_logger(__name__)


class DirectoryTraverser:
    """Builds a filtered, sorted node tree for one root directory.

    Every directory level receives the pattern stack of its parent by value and,
    if it holds a non-blank .gitignore, pushes a frame scoped to its own relative
    path onto a new stack that only its own subtree sees. Sibling subtrees never
    observe each other's rules, so traversals share no mutable state and can run
    on separate threads without locking.

    Failures never abort a traversal: an unreadable directory becomes a directory
    without children, and an unreadable .gitignore contributes no rules.

    Example:
        >>> traverser = DirectoryTraverser()
        >>> tree = traverser.traverse("src", TraversalOptions(allowed_extensions={"py"}))  # doctest: +SKIP
        >>> [child.name for child in tree.children]  # doctest: +SKIP
        ['treeconcat']
    """

    def traverse(self, root: PathType, options: Optional[TraversalOptions] = None) -> FileSystemNode:
        """Traverse a directory and return its tree.

        Args:
            root: Directory to traverse. Can be any path-like object.
            options: Traversal options. Defaults to TraversalOptions().

        Returns:
            A Directory node named after the root, with relative_path "".
        """
        options = options or TraversalOptions()
        root_path = Path(root)

        ancestors: FrozenSet[FileIdentifier] = frozenset()
        if options.follow_symlinks:
            root_id = FileIdentifier.from_path(root_path)
            if root_id is not None:
                ancestors = frozenset({root_id})

        children = self._traverse_directory(root_path, "", self._root_stack(root_path, options), ancestors, options)
        name = root_path.name or root_path.resolve().name or str(root_path)
        return directory_node(name, root_path, "", children)

    def _root_stack(self, root_path: Path, options: TraversalOptions) -> PatternStack:
        rules = create()
        if options.honor_exclusion_rules:
            # The root frame is always present so the default rules apply
            add_default_rules(rules)
            load_directory_rules(rules, root_path)
        rules.add_lines(list(options.extra_rules))
        if options.rules_files:
            rules.load_rules(options.rules_files)

        stack = PatternStack()
        if rules.has_rules():
            stack = stack.push(rules, "")
        return stack

    def _traverse_directory(
        self,
        path: Path,
        relative_path: str,
        stack: PatternStack,
        ancestors: FrozenSet[FileIdentifier],
        options: TraversalOptions,
    ) -> List[FileSystemNode]:
        """Return the filtered children of one directory, recursing into subdirectories."""
        if options.honor_exclusion_rules and relative_path:
            local_rules = create()
            if load_directory_rules(local_rules, path):
                stack = stack.push(local_rules, relative_path)

        try:
            with os.scandir(path) as it:
                entries = list(it)
        except OSError as e:
            logger.warning("directory_unreadable", path=str(path), error=str(e))
            return []

        nodes: List[FileSystemNode] = []
        for entry in entries:
            node_type = self._classify(entry, options)
            if node_type is None:
                continue

            entry_relative_path = join_relative(relative_path, entry.name)
            if stack.is_excluded(entry_relative_path, is_dir=node_type is NodeType.DIRECTORY):
                logger.debug("entry_excluded", path=entry_relative_path)
                continue

            entry_path = path / entry.name
            if node_type is NodeType.DIRECTORY:
                child_ancestors = ancestors
                if options.follow_symlinks:
                    file_id = FileIdentifier.from_path(entry_path)
                    if file_id is not None and file_id in ancestors:
                        logger.info("symlink_loop_skipped", path=str(entry_path))
                        continue
                    if file_id is not None:
                        child_ancestors = ancestors | {file_id}
                children = self._traverse_directory(entry_path, entry_relative_path, stack, child_ancestors, options)
                nodes.append(directory_node(entry.name, entry_path, entry_relative_path, children))
            elif options.allows_file(entry.name):
                nodes.append(file_node(entry.name, entry_path, entry_relative_path))

        return nodes

    @staticmethod
    def _classify(entry: "os.DirEntry[str]", options: TraversalOptions) -> Optional[NodeType]:
        """Map a directory entry to a node type; None for entries left out of the tree."""
        try:
            if entry.is_symlink() and not options.follow_symlinks:
                return None
            if entry.is_dir():
                return NodeType.DIRECTORY
            if entry.is_file():
                return NodeType.FILE
        except OSError:
            return None
        # Sockets, FIFOs, devices and dangling symlinks
        return None


def traverse(root: PathType, options: Optional[TraversalOptions] = None) -> FileSystemNode:
    """Traverse a directory with a default DirectoryTraverser."""
    return DirectoryTraverser().traverse(root, options)
