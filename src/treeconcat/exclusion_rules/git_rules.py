"""gitignore-syntax rules for a single directory, plus the helpers that seed them."""

from os import PathLike
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern  # type: ignore

from treeconcat.logging import get_logger
from treeconcat.types import PathType

from .base_rules import BaseExclusionRules

logger = get_logger(__name__)

RULES_FILE_NAME = ".gitignore"
DEFAULT_RULES = (".git",)


class GitIgnoreExclusionRules(BaseExclusionRules):
    """The patterns of one directory's .gitignore, matched with pathspec.

    Patterns follow git's wildmatch grammar: globs and character classes, "**"
    across directories, a trailing "/" for directory-only patterns, a leading "/"
    to anchor at the directory, and "!" to re-include. Within one instance the
    last matching pattern decides, so "!keep.log" after "*.log" keeps keep.log.
    Comment lines and blank lines are accepted and never match.

    Candidate paths are posix strings relative to the directory holding the
    rules; directories are passed with a trailing slash.

    Attributes:
        spec (PathSpec): The compiled patterns, in the order they were added.

    Example:
        >>> rules = GitIgnoreExclusionRules()
        >>> rules.add_lines(["# build output", "dist/", "*.log", "!keep.log"])
        >>> rules.exclude("dist/"), rules.exclude("dist")
        (True, False)
        >>> rules.exclude("server.log"), rules.exclude("keep.log")
        (True, False)
    """

    def __init__(self, rules_files: Optional[Union[PathType, Sequence[PathType]]] = None):
        """Create a rule set, empty unless rules_files is given.

        Args:
            rules_files: One or more pattern files to read immediately.

        Raises:
            FileNotFoundError: If a named file is missing.
        """
        self.spec = PathSpec.from_lines(GitWildMatchPattern, [])
        if rules_files is not None:
            self.load_rules(rules_files)

    def exclude(self, path: str) -> bool:
        """Match a directory-relative posix path; no normalization is applied."""
        return self.spec.match_file(path)

    def has_rules(self) -> bool:
        """Return True if at least one pattern is loaded."""
        return any(pattern.include is not None for pattern in self.spec.patterns)

    def add_lines(self, lines: Iterable[str]) -> None:
        """Append the patterns of an ignore file given as lines."""
        added = PathSpec.from_lines(GitWildMatchPattern, lines).patterns
        self.spec = PathSpec([*self.spec.patterns, *added])

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Append the patterns of explicitly named files, in order.

        A missing file is an error here, unlike in load_directory_rules(), because
        the caller asked for it by name.

        Raises:
            FileNotFoundError: If a named file is missing.
        """
        paths = [rules_files] if isinstance(rules_files, (str, PathLike)) else list(rules_files)
        for path in map(Path, paths):
            if not path.is_file():
                raise FileNotFoundError(f"Rules file not found: {path}")
            self.add_lines(path.read_text(encoding="utf-8-sig").splitlines())

    def add_rule(self, rule: str) -> None:
        """Append one pattern.

        Example:
            >>> rules = GitIgnoreExclusionRules()
            >>> rules.add_rule("build/")
            >>> rules.exclude("build/output.txt")
            True
        """
        self.add_lines([rule])


def create() -> GitIgnoreExclusionRules:
    """Create a new, empty matcher."""
    return GitIgnoreExclusionRules()


def add_default_rules(rules: GitIgnoreExclusionRules) -> None:
    """Seed the permanent exclusion of version-control metadata directories."""
    rules.add_lines(list(DEFAULT_RULES))


def load_directory_rules(rules: GitIgnoreExclusionRules, directory: PathType) -> bool:
    """Load the optional .gitignore located directly inside a directory.

    A missing, unreadable, undecodable or blank file adds nothing. None of these
    conditions is reported to the caller beyond the return value.

    Args:
        rules: Matcher that receives the patterns.
        directory: Directory to look in.

    Returns:
        True if non-blank rules were loaded, False otherwise.

    Example:
        >>> import tempfile
        >>> rules = create()
        >>> with tempfile.TemporaryDirectory() as tmpdir:
        ...     load_directory_rules(rules, tmpdir)
        False
    """
    rules_path = Path(directory) / RULES_FILE_NAME
    try:
        content = rules_path.read_text(encoding="utf-8-sig")
    except FileNotFoundError:
        return False
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("rules_file_unreadable", path=str(rules_path), error=str(e))
        return False

    # A NUL byte means the file is binary even when it happens to decode
    if "\x00" in content[:512]:
        logger.debug("rules_file_binary", path=str(rules_path))
        return False

    if not content.strip():
        return False

    rules.add_lines(content.splitlines())
    return True
