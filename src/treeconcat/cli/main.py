"""Command-line interface for treeconcat.

This module provides the command-line interface for treeconcat, which merges the
selected files and directories into one tree, prints it, and lists the selected
files for further processing by other tools.

Exit Codes:
    0: Successful completion
    1: Runtime error during execution
    2: Command-line syntax error
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # Tree and file list of a project
    $ treeconcat /path/to/project

    # Only TypeScript files from two directories
    $ treeconcat -x ts src tests
"""

import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple

from treeconcat.cli.argparser import build_options, create_parser, validate_args
from treeconcat.cli.safe_writer import SafeWriter
from treeconcat.cli.signal_handler import setup_signal_handling, signal_handler
from treeconcat.exceptions import HierarchyUnavailableError
from treeconcat.file_system_tree.directory_traverser import DirectoryTraverser
from treeconcat.file_system_tree.file_system_node import FileSystemNode
from treeconcat.file_system_tree.file_system_tree import count_nodes, iterate_files
from treeconcat.file_system_tree.traversal_options import TraversalOptions
from treeconcat.file_system_tree.tree_merger import build_unified_tree, normalize_selections
from treeconcat.file_system_tree.tree_renderer import stream_tree
from treeconcat.logging import setup_logging


def format_counts(counts: Mapping[str, int]) -> str:
    """Format the counts into a human-readable string."""
    return "\n".join([f"Directories: {counts['directories']}", f"Files: {counts['files']}"])


def hierarchy_lines(tree: FileSystemNode) -> Iterator[str]:
    """Yield the header line and the rendered tree."""
    yield f"File Hierarchy (from {tree.name}):"
    yield from stream_tree(tree)


def file_lines(tree: FileSystemNode) -> Iterator[str]:
    """Yield the path of every file in the tree, relative to the tree's root."""
    for node in iterate_files(tree):
        yield node.location.relative_to(tree.location).as_posix()


def fallback_listing(paths: Sequence[Path], options: TraversalOptions) -> Tuple[List[str], Tuple[int, int]]:
    """List absolute file paths of each selection when no unified tree exists.

    Returns:
        The file paths and the (directories, files) counts of what was listed.
        Every selected directory counts, together with the directories below it.
    """
    selections = normalize_selections(paths)
    traverser = DirectoryTraverser()
    lines: List[str] = []
    directories = 0
    for directory in selections.directories:
        tree = traverser.traverse(directory, options)
        directories += count_nodes(tree)[0] + 1
        lines.extend(str(node.location) for node in iterate_files(tree))
    lines.extend(str(path) for path in selections.files)
    return lines, (directories, len(lines))


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the treeconcat command-line interface.

    Args:
        argv: Arguments to parse. Defaults to sys.argv[1:].
    """
    setup_signal_handling()

    try:
        parser = create_parser()
        args = parser.parse_args(argv)
        validate_args(args)

        setup_logging(args.verbose)
        options = build_options(args)

        tree: Optional[FileSystemNode] = None
        fallback_paths: List[str] = []
        fallback_counts = (0, 0)
        try:
            tree = build_unified_tree(args.paths, options, max_workers=args.jobs)
        except HierarchyUnavailableError as e:
            print(f"Warning: {str(e)}. The hierarchy is omitted.", file=sys.stderr)
            fallback_paths, fallback_counts = fallback_listing(args.paths, options)

        output_file = args.output if args.output else sys.stdout.fileno()

        with SafeWriter(output_file) as safe_writer:
            try:
                if tree is not None and not args.no_tree:
                    safe_writer.write_lines(hierarchy_lines(tree))
                    if not args.no_files:
                        safe_writer.write("\n")

                if not args.no_files:
                    if tree is not None:
                        safe_writer.write_lines(file_lines(tree))
                    else:
                        safe_writer.write_lines(fallback_paths)

                if args.summary:
                    directories, files = count_nodes(tree) if tree is not None else fallback_counts
                    count_output_str = format_counts({"directories": directories, "files": files})
                    if args.summary == "stderr":
                        print(count_output_str, file=sys.stderr)
                    else:
                        safe_writer.write("\n" + count_output_str + "\n")

                if args.no_tree and args.no_files and not args.summary:
                    print(
                        "Warning: Both tree and file list printing were disabled. No output generated.",
                        file=sys.stderr,
                    )

            except BrokenPipeError:
                pass  # SafeWriter will automatically close in the context manager

    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    # Handle exit codes based on received signals
    if signal_handler.sigpipe_received.is_set():
        sys.exit(141)
    elif signal_handler.sigint_received.is_set():
        sys.exit(130)


if __name__ == "__main__":
    main()
