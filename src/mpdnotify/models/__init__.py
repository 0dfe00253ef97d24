"""Data models for playback state tracking."""

from mpdnotify.models.playback import (
    PlaybackSnapshot,
    PlaybackState,
    notification_body,
)

__all__ = [
    "PlaybackSnapshot",
    "PlaybackState",
    "notification_body",
]
