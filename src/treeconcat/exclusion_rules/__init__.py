"""Exclusion rules for filtering files and directories."""

from .base_rules import BaseExclusionRules
from .git_rules import GitIgnoreExclusionRules, add_default_rules, create, load_directory_rules
from .pattern_stack import PatternFrame, PatternStack

__all__ = [
    "BaseExclusionRules",
    "GitIgnoreExclusionRules",
    "PatternFrame",
    "PatternStack",
    "add_default_rules",
    "create",
    "load_directory_rules",
]
