"""Core notifier logic.

This module contains the poll loop and the pieces it drives.

Classes:
    PlaybackWatcher: Polls MPD and notifies on changes.
    ConfigManager: QSettings wrapper for configuration.

Functions:
    find_cover: Locate a cover image in a track directory.
    generate_thumbnail: Write a resized copy of a cover.
    wait_until_reachable: Block until the MPD port accepts connections.
"""

from mpdnotify.core.availability import is_reachable, wait_until_reachable
from mpdnotify.core.config import ConfigError, ConfigManager, read_music_directory
from mpdnotify.core.cover import CoverSearchError, find_cover
from mpdnotify.core.thumbnail import generate_thumbnail
from mpdnotify.core.watcher import PlaybackWatcher, PollResult

__all__ = [
    "ConfigError",
    "ConfigManager",
    "CoverSearchError",
    "PlaybackWatcher",
    "PollResult",
    "find_cover",
    "generate_thumbnail",
    "is_reachable",
    "read_music_directory",
    "wait_until_reachable",
]
