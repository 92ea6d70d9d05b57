"""Command-line argument parsing for treeconcat.

This module defines the command-line interface for treeconcat,
handling argument parsing and validation.
"""

import argparse
from pathlib import Path

from treeconcat import __version__
from treeconcat.file_system_tree.traversal_options import TraversalOptions


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with treeconcat's options.
    """
    description = """
    treeconcat: Combine selected files and directories into one ordered tree.

    Each selected directory is walked recursively. .gitignore files are honored at
    every level, scoped to the directory that holds them, and the .git directory is
    always left out. All selections are merged into a single hierarchy rooted at
    their deepest common directory.

    The output is the rendered tree followed by the list of selected files, one
    path per line, relative to that common directory.
    """

    epilog = """
    Examples:
      # Tree and file list of a project
      treeconcat /path/to/project

      # Only TypeScript and Markdown files
      treeconcat -x ts -x md /path/to/project

      # Several selections merged into one tree
      treeconcat src/core docs/README.md tests

      # Ignore .gitignore files but still skip logs
      treeconcat -G -i "*.log" /path/to/project

      # Extra patterns from a shared ignore file
      treeconcat -e ~/.config/treeconcat.ignore /path/to/project

      # Write to a file and print a summary to stderr
      treeconcat -o tree.txt -s stderr /path/to/project

      # Traverse selections on four threads, with debug logging
      treeconcat -j 4 -vv src tests
    """

    parser = argparse.ArgumentParser(
        prog="treeconcat",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"treeconcat {__version__}", help="Show the version and exit"
    )
    parser.add_argument(
        "paths",
        type=Path,
        nargs="+",
        metavar="PATH",
        help="Files and directories to include.",
    )
    parser.add_argument(
        "-x",
        "--extension",
        dest="extensions",
        action="append",
        metavar="EXT",
        help=(
            "Only include files with this extension when walking directories (case-insensitive, "
            "leading dot optional). Can be specified multiple times. Explicitly selected files "
            "are always included."
        ),
    )
    parser.add_argument(
        "-i",
        "--ignore",
        dest="ignore",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Additional gitignore-style pattern applied at each selected directory (can be repeated).",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        dest="exclude",
        type=Path,
        action="append",
        default=[],
        metavar="FILE",
        help=(
            "File of gitignore-style patterns applied at each selected directory, in addition to "
            "its .gitignore (can be repeated)."
        ),
    )
    parser.add_argument(
        "-G",
        "--no-gitignore",
        action="store_true",
        help="Do not apply .gitignore files or the default .git exclusion.",
    )
    parser.add_argument(
        "-L",
        "--follow-symlinks",
        action="store_true",
        help="Follow symbolic links. By default symlinks are left out of the tree.",
    )
    parser.add_argument(
        "-T",
        "--no-tree",
        action="store_true",
        help="Do not print the tree.",
    )
    parser.add_argument(
        "-F",
        "--no-files",
        action="store_true",
        help="Do not print the file list.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path. If not specified, output is written to stdout.",
    )
    parser.add_argument(
        "-s",
        "--summary",
        metavar="DEST",
        choices=["stderr", "stdout", "file"],
        help="Print summary report. Valid destinations: stderr, stdout, file (requires -o)",
    )
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=1,
        metavar="N",
        help="Number of selected directories traversed concurrently (default: 1).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log output on stderr (-v for info, -vv for debug).",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments beyond what argparse checks.

    Raises:
        ValueError: If any arguments fail validation.
        FileNotFoundError: If a -e/--exclude rules file does not exist.
    """
    if args.summary == "file" and not args.output:
        raise ValueError("--summary=file requires -o/--output to be specified")
    if args.jobs < 1:
        raise ValueError("-j/--jobs must be at least 1")
    missing = [str(path) for path in args.paths if not path.exists()]
    if missing:
        raise ValueError(f"Path does not exist: {', '.join(missing)}")
    missing_rules = [str(path) for path in args.exclude if not path.is_file()]
    if missing_rules:
        raise FileNotFoundError(f"Rules file not found: {', '.join(missing_rules)}")


def build_options(args: argparse.Namespace) -> TraversalOptions:
    """Translate parsed arguments into traversal options."""
    return TraversalOptions.from_extensions(
        args.extensions,
        honor_exclusion_rules=not args.no_gitignore,
        extra_rules=tuple(args.ignore),
        rules_files=tuple(args.exclude),
        follow_symlinks=args.follow_symlinks,
    )
