"""Directory selection to tree utilities.

This package provides tools for turning one or more selected files and
directories into a single filtered, ordered tree that can be rendered as
text or flattened into a list of files for further processing.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("treeconcat")
except PackageNotFoundError:
    __version__ = "unknown"
