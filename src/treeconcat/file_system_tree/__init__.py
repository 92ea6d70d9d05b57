"""File system tree representation with scoped exclusion rules.

This package provides the node model, the directory traverser, the merger that
combines several selections into one tree, and the ASCII tree renderer.
"""
