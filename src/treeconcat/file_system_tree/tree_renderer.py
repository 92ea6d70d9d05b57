"""ASCII rendering of a node tree."""

from typing import Iterator

from treeconcat.file_system_tree.file_system_node import FileSystemNode
from treeconcat.types import NodeType

BRANCH = "├─ "
LAST_BRANCH = "└─ "
CONTINUATION = "|  "
PADDING = "   "


def stream_tree(root: FileSystemNode) -> Iterator[str]:
    """Generate the lines of a tree diagram one at a time.

    The first line is the root's name; every other line is a child preceded by a
    branch connector. Children are printed in the order the tree holds them, so
    the output is deterministic for a given tree. No filtering or I/O is done.

    Yields:
        Lines of the diagram, without trailing newlines.

    Example:
        >>> from treeconcat.file_system_tree.file_system_node import directory_node, file_node
        >>> src = directory_node("src", "proj/src", "src", [file_node("a.ts", "proj/src/a.ts", "src/a.ts")])
        >>> for line in stream_tree(directory_node("proj", "proj", "", [src])):
        ...     print(line)
        proj
        └─ src
           └─ a.ts
    """
    yield root.name
    yield from _stream_children(root, "")


def _stream_children(node: FileSystemNode, prefix: str) -> Iterator[str]:
    children = node.children
    for index, child in enumerate(children):
        is_last = index == len(children) - 1
        yield f"{prefix}{LAST_BRANCH if is_last else BRANCH}{child.name}"
        if child.node_type is NodeType.DIRECTORY:
            yield from _stream_children(child, prefix + (PADDING if is_last else CONTINUATION))


def render_tree(root: FileSystemNode) -> str:
    """Render a tree diagram as a single string.

    Example:
        >>> from treeconcat.file_system_tree.file_system_node import directory_node, file_node
        >>> src = directory_node("src", "proj/src", "src", [file_node("a.ts", "proj/src/a.ts", "src/a.ts")])
        >>> render_tree(directory_node("proj", "proj", "", [src]))
        'proj\\n└─ src\\n   └─ a.ts'
    """
    return "\n".join(stream_tree(root))
