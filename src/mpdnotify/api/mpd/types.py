"""MPD protocol data types.

Frozen dataclasses for the two MPD responses the notifier consumes.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class MpdTrack:
    """Current track information from MPD.

    Attributes:
        file: Path to the audio file relative to MPD's music directory,
            or a stream URI.
        title: Track title from tags.
        artist: Artist name(s) from tags.
        album: Album name from tags.
        id: MPD song ID in the current playlist (0 when missing or malformed).
    """

    file: str = ""
    title: str = ""
    artist: str = ""
    album: str = ""
    id: int = 0

    @property
    def is_stream(self) -> bool:
        """Return True if the file is a stream URI rather than a local path."""
        return "://" in self.file

    @property
    def directory_parts(self) -> list[str]:
        """Return the path segments of the file's containing directory."""
        return self.file.split("/")[:-1]


@dataclass(frozen=True)
class MpdStatus:
    """MPD player status.

    Attributes:
        state: Raw player state - "play", "pause", "stop" or empty if absent.
    """

    state: str = ""
