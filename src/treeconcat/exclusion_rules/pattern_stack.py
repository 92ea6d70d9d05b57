"""Scoped, layered exclusion rules for recursive traversal."""

from typing import Iterator, NamedTuple, Tuple

from .base_rules import BaseExclusionRules


class PatternFrame(NamedTuple):
    """Exclusion rules contributed by one directory.

    Attributes:
        rules: The rules read from the directory.
        base_path: Traversal-relative posix path of that directory ("" for the root).
            The rules only apply to paths at or below it.
    """

    rules: BaseExclusionRules
    base_path: str

    def relative_to_base(self, path: str) -> str:
        """Strip base_path and its separator from a traversal-relative path."""
        if not self.base_path:
            return path
        return path[len(self.base_path) + 1 :]


class PatternStack:
    """An immutable stack of exclusion rule frames.

    Each frame holds the rules of one directory along the current traversal path,
    together with the directory's relative path. A candidate path is matched
    against every frame, relative to that frame's base path, and is excluded if
    ANY frame matches. There is no override between frames: a negation pattern in
    a nested directory cannot re-include a path that an ancestor's frame excludes.

    push() returns a new stack and leaves the receiver untouched, so a stack can
    be handed to several sibling subtrees, or to several threads, without any of
    them seeing the frames another one adds.

    Example:
        >>> from treeconcat.exclusion_rules.git_rules import GitIgnoreExclusionRules
        >>> root_rules = GitIgnoreExclusionRules()
        >>> root_rules.add_rule("*.log")
        >>> src_rules = GitIgnoreExclusionRules()
        >>> src_rules.add_rule("a.ts")
        >>> root = PatternStack().push(root_rules, "")
        >>> src = root.push(src_rules, "src")
        >>> src.is_excluded("src/a.ts", is_dir=False)
        True
        >>> root.is_excluded("lib/a.ts", is_dir=False)
        False
        >>> len(root), len(src)
        (1, 2)
    """

    __slots__ = ("_frames",)

    def __init__(self, frames: Tuple[PatternFrame, ...] = ()) -> None:
        self._frames = tuple(frames)

    def push(self, rules: BaseExclusionRules, base_path: str) -> "PatternStack":
        """Return a new stack with a frame for base_path on top of this one.

        Args:
            rules: Rules contributed by the directory at base_path.
            base_path: Traversal-relative posix path of that directory.

        Returns:
            A new PatternStack; this one is not modified.
        """
        return PatternStack(self._frames + (PatternFrame(rules, base_path),))

    def is_excluded(self, path: str, is_dir: bool) -> bool:
        """Check a traversal-relative path against every frame.

        Args:
            path: Posix path of the candidate entry relative to the traversal root.
            is_dir: Whether the entry is a directory. Directories are also tested
                with a trailing slash so directory-only patterns ("build/") apply.

        Returns:
            True if any frame excludes the path.
        """
        for frame in self._frames:
            local_path = frame.relative_to_base(path)
            if frame.rules.exclude(local_path):
                return True
            if is_dir and frame.rules.exclude(f"{local_path}/"):
                return True
        return False

    @property
    def frames(self) -> Tuple[PatternFrame, ...]:
        return self._frames

    def __iter__(self) -> Iterator[PatternFrame]:
        return iter(self._frames)

    def __len__(self) -> int:
        return len(self._frames)

    def __repr__(self) -> str:
        bases = ", ".join(repr(frame.base_path) for frame in self._frames)
        return f"PatternStack([{bases}])"
