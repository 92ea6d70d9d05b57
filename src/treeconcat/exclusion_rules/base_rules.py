from abc import ABC, abstractmethod


class BaseExclusionRules(ABC):
    """
    Interface of a rule set that belongs to a single directory.

    A rule set answers whether a path is excluded. Paths are posix strings relative
    to the directory the rules were read from. A trailing slash marks a directory,
    which lets directory-only patterns apply. Layering rule sets of several
    directories is done by PatternStack, which only relies on this interface.

    Example:
        >>> from treeconcat.exclusion_rules.git_rules import GitIgnoreExclusionRules
        >>> rules = GitIgnoreExclusionRules()
        >>> rules.add_rule("dist/")
        >>> rules.exclude("dist/")
        True
        >>> rules.exclude("dist")
        False
    """

    @abstractmethod
    def exclude(self, path: str) -> bool:
        """
        Check one path against the rule set.

        Args:
            path (str): Directory-relative posix path, with a trailing slash for directories.

        Returns:
            bool: True if the rules exclude the path.
        """

    def has_rules(self) -> bool:
        """
        Tell whether the rule set can exclude anything at all.

        An empty rule set need not be pushed onto a pattern stack. Rule types that
        cannot tell report True.
        """
        return True
