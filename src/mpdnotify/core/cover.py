"""Album cover lookup in a track's directory.

Covers are found by filename only: the first file whose name contains one
of the known cover-art words wins. Entries are checked in the order the
filesystem lists them and, for each entry, the words in priority order.
"""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

# Lowercase substrings, highest priority first
COVER_PATTERNS: tuple[str, ...] = ("front", "folder", "albumart", "cover", "thumb")


class CoverSearchError(Exception):
    """The track directory could not be opened or listed."""

    def __init__(self, directory: Path, reason: str) -> None:
        self.directory = directory
        self.reason = reason
        super().__init__(f"Couldn't browse {directory}: {reason}")


def match_cover(names: Iterable[str], patterns: Iterable[str] = COVER_PATTERNS) -> str | None:
    """Return the first name that looks like a cover image.

    Args:
        names: Candidate file names in listing order.
        patterns: Lowercase substrings in priority order.

    Returns:
        The first matching name, or None.
    """
    ordered = tuple(patterns)
    for name in names:
        lowered = name.lower()
        for pattern in ordered:
            if pattern in lowered:
                return name
    return None


def _list_files(directory: Path) -> list[str]:
    """List regular file names in directory order.

    Raises:
        CoverSearchError: If the directory cannot be opened or read.
    """
    try:
        with os.scandir(directory) as entries:
            return [entry.name for entry in entries if entry.is_file()]
    except OSError as e:
        raise CoverSearchError(directory, e.strerror or str(e)) from e


def find_cover(directory: str | os.PathLike[str]) -> Path | None:
    """Find a cover image in the given directory.

    Args:
        directory: Directory holding the current track.

    Returns:
        Absolute path of the cover file, or None if nothing matches.

    Raises:
        CoverSearchError: If the directory cannot be opened or listed.
    """
    path = Path(directory).absolute()
    name = match_cover(_list_files(path))
    if name is None:
        logger.debug("No cover image in %s", path)
        return None

    cover = path / name
    logger.debug("Cover image: %s", cover)
    return cover
