"""Sample discovery for keyword-matched audio files.

This module provides the SampleScanner class, which walks a source tree
depth-first and collects every audio sample whose filename contains a
keyword, plus the pure ``is_matching_sample`` predicate it applies.

Example:
    >>> from samplesift.scanning import SampleScanner
    >>> scanner = SampleScanner(keyword="kick")
    >>> matches = scanner.find_matches(Path("~/Samples").expanduser())
    >>> print(f"{len(matches)} kicks found")
"""

import logging
import os
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

# Extensions compared after lower-casing the filename
AUDIO_EXTENSIONS = frozenset({".wav", ".aiff", ".aif"})


class DiscoveryError(Exception):
    """Raised when the source tree cannot be resolved or traversed.

    Attributes:
        path: The path that could not be resolved or read.
    """

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


def is_matching_sample(filename: str, keyword: str) -> bool:
    """Check whether a filename is an audio sample containing the keyword.

    Both the extension check and the keyword check ignore case. The keyword
    is matched as a plain substring of the filename, with no glob or regex
    semantics.

    Args:
        filename: Bare filename, without any directory part.
        keyword: Substring to look for.

    Returns:
        True if the extension is one of AUDIO_EXTENSIONS and the filename
        contains the keyword.

    Example:
        >>> is_matching_sample("KICK_perc.aiff", "kick")
        True
        >>> is_matching_sample("kick.txt", "kick")
        False
    """
    name = filename.lower()
    extension = os.path.splitext(name)[1]
    if extension not in AUDIO_EXTENSIONS:
        return False
    return keyword.lower() in name


class SampleScanner:
    """Walks a source tree collecting samples that match a keyword.

    Entries in each directory are visited in lexical order of their names,
    descending into a subdirectory at the point its name comes up, so the
    resulting order is stable for a given filesystem state. Directories are
    traversed but never matched, and symlinked directories are not followed.

    Attributes:
        keyword: Case-folded substring to match against filenames.
        debug: Whether to log each match as it is discovered.

    Example:
        >>> scanner = SampleScanner(keyword="snare", debug=True)
        >>> for path in scanner.find_matches(Path("/data/samples")):
        ...     print(path.name)
    """

    def __init__(self, keyword: str, debug: bool = False) -> None:
        """Initialize the SampleScanner.

        Args:
            keyword: Substring to look for in filenames; matched ignoring case.
            debug: If True, log every match at DEBUG level as it is found.

        Raises:
            ValueError: If the keyword is empty.
        """
        if not keyword:
            raise ValueError("keyword must not be empty")
        self.keyword = keyword.lower()
        self.debug = debug

    def find_matches(self, source: Path) -> List[Path]:
        """Collect every matching sample under a source directory.

        Args:
            source: Directory to search. Relative paths are made absolute
                against the current working directory.

        Returns:
            Absolute paths of matching samples in walk order. Duplicate
            filenames from different directories are all kept.

        Raises:
            DiscoveryError: If the source cannot be made absolute, does not
                exist, is not a directory, or any part of the walk fails.
                No partial list is returned.
        """
        try:
            root = Path(source).absolute()
        except OSError as e:
            raise DiscoveryError(
                f"Couldn't get the absolute path of the source - {e}", Path(source)
            ) from e

        if not root.exists():
            raise DiscoveryError(f"Source path does not exist: {root}", root)
        if not root.is_dir():
            raise DiscoveryError(f"Source path is not a directory: {root}", root)

        matches: List[Path] = []
        self._walk(root, matches)
        return matches

    def _walk(self, root: Path, matches: List[Path]) -> None:
        """Visit the tree under root depth-first, appending matches in name order.

        Pending entries are kept on an explicit stack, so tree depth is not
        bounded by the interpreter's recursion limit.

        Args:
            root: Directory to start from.
            matches: Accumulator owned by the caller.

        Raises:
            DiscoveryError: If a directory or one of its entries cannot be read.
        """
        pending: List[Path] = list(reversed(self._list_directory(root)))

        while pending:
            path = pending.pop()
            try:
                if path.is_dir() and not path.is_symlink():
                    pending.extend(reversed(self._list_directory(path)))
                    continue
                if not path.is_file():
                    continue
            except OSError as e:
                raise DiscoveryError(f"Error accessing {path}: {e}", path) from e

            if is_matching_sample(path.name, self.keyword):
                if self.debug:
                    logger.debug(f"match found: {path}")
                matches.append(path)

    def _list_directory(self, directory: Path) -> List[Path]:
        """Return the children of a directory sorted by name."""
        try:
            with os.scandir(directory) as it:
                names = sorted(entry.name for entry in it)
        except OSError as e:
            raise DiscoveryError(f"Error reading directory {directory}: {e}", directory) from e
        return [directory / name for name in names]
