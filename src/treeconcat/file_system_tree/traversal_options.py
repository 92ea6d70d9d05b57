"""Options controlling a directory traversal."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Iterable, Optional, Tuple


def normalize_extension(extension: str) -> str:
    """Lower-case an extension and strip one leading dot: ".MD" -> "md"."""
    extension = extension.strip().lower()
    return extension[1:] if extension.startswith(".") else extension


@dataclass(frozen=True)
class TraversalOptions:
    """Configuration record for DirectoryTraverser.traverse().

    Attributes:
        allowed_extensions: If set, only files whose lower-cased extension (without
            the dot) is a member are kept. Directories are never filtered by
            extension. Values are normalized on construction, so ".TS" and "ts"
            are equivalent.
        honor_exclusion_rules: Whether .gitignore files and the default ".git" rule
            are applied. Defaults to True.
        extra_rules: Additional gitignore-style patterns applied at the traversal
            root, whether or not .gitignore files are honored.
        rules_files: Files of gitignore-style patterns loaded into the same root
            frame as extra_rules. A missing file makes the traversal raise
            FileNotFoundError.
        follow_symlinks: Whether symbolic links are followed. When False (default),
            symlinks are left out of the tree.

    Example:
        >>> options = TraversalOptions(allowed_extensions={".TS", "md"})
        >>> sorted(options.allowed_extensions)
        ['md', 'ts']
        >>> options.allows_file("notes.MD")
        True
        >>> options.allows_file("package.json")
        False
    """

    allowed_extensions: Optional[FrozenSet[str]] = None
    honor_exclusion_rules: bool = True
    extra_rules: Tuple[str, ...] = field(default_factory=tuple)
    rules_files: Tuple[Path, ...] = field(default_factory=tuple)
    follow_symlinks: bool = False

    def __post_init__(self) -> None:
        if self.allowed_extensions is not None:
            normalized = frozenset(normalize_extension(ext) for ext in self.allowed_extensions)
            object.__setattr__(self, "allowed_extensions", normalized)
        object.__setattr__(self, "extra_rules", tuple(self.extra_rules))
        object.__setattr__(self, "rules_files", tuple(Path(path) for path in self.rules_files))

    @classmethod
    def from_extensions(cls, extensions: Optional[Iterable[str]], **kwargs: object) -> "TraversalOptions":
        """Build options from a possibly empty extension list; empty means no filter."""
        allowed = frozenset(extensions) if extensions else None
        return cls(allowed_extensions=allowed, **kwargs)  # type: ignore[arg-type]

    def allows_file(self, name: str) -> bool:
        """Apply the extension filter to a file name."""
        if self.allowed_extensions is None:
            return True
        stem, dot, extension = name.rpartition(".")
        # Dotfiles such as ".env" have no extension
        if not dot or not stem:
            extension = ""
        return extension.lower() in self.allowed_extensions
