"""Playback state and the snapshot of what has already been notified."""

from dataclasses import dataclass
from enum import Enum

from mpdnotify.api.mpd.types import MpdTrack

UNKNOWN_STATE_BODY = "Unknown state"


class PlaybackState(Enum):
    """Player state as reported by MPD's ``status`` command."""

    PLAYING = "play"
    PAUSED = "pause"
    STOPPED = "stop"
    UNKNOWN = "unknown"

    @classmethod
    def from_mpd(cls, raw: str) -> "PlaybackState":
        """Map a raw MPD state string, falling back to UNKNOWN."""
        for state in (cls.PLAYING, cls.PAUSED, cls.STOPPED):
            if raw == state.value:
                return state
        return cls.UNKNOWN

    @property
    def title(self) -> str:
        """Return the notification title for this state."""
        return _TITLES[self]


_TITLES: dict[PlaybackState, str] = {
    PlaybackState.PLAYING: "Now Playing",
    PlaybackState.PAUSED: "Now Paused",
    PlaybackState.STOPPED: "Stopped",
    PlaybackState.UNKNOWN: "??",
}


@dataclass(frozen=True, slots=True)
class PlaybackSnapshot:
    """The last playback identity a notification was sent for.

    The default instance holds no song ID and no state, so it differs
    from every real reading.

    Attributes:
        song_id: MPD song ID, or None before the first notification.
        state: Playback state, or None before the first notification.
    """

    song_id: int | None = None
    state: PlaybackState | None = None

    def differs(self, song_id: int, state: PlaybackState) -> bool:
        """Return True if the given reading should trigger a notification."""
        return self.song_id != song_id or self.state != state


def notification_body(state: PlaybackState, track: MpdTrack) -> str:
    """Build the notification body text.

    Args:
        state: Current playback state.
        track: Current track; empty fields render as empty strings.

    Returns:
        Artist/song/album lines, or "Unknown state" for an unmapped state.
    """
    if state is PlaybackState.UNKNOWN:
        return UNKNOWN_STATE_BODY
    return f"Artist: {track.artist}\nSong: {track.title}\nAlbum: {track.album}"
