"""Command-line interface for treeconcat."""
