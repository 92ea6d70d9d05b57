from typing import Sequence

from treeconcat.types import PathType


class HierarchyUnavailableError(Exception):
    """
    Exception raised when selected locations share no common ancestor directory.

    Without a common ancestor there is no directory to anchor a unified tree at, so
    the hierarchy cannot be built. This is not fatal for callers: the selected files
    themselves remain usable, only the combined tree is missing.

    Attributes:
        locations (tuple[str, ...]): The locations that could not be unified.

    Example:
        >>> error = HierarchyUnavailableError(["a/x.txt", "b/y.txt"])
        >>> str(error)
        'No common ancestor directory for 2 selected location(s)'
        >>> error.locations
        ('a/x.txt', 'b/y.txt')
    """

    def __init__(self, locations: Sequence[PathType]) -> None:
        """
        Initialize the exception with the locations that could not be unified.

        Args:
            locations (Sequence[PathType]): The selected locations.
        """
        self.locations = tuple(str(location) for location in locations)
        super().__init__(f"No common ancestor directory for {len(self.locations)} selected location(s)")
