"""MPD client module.

This module provides the async MPD client the notifier uses to poll
player status and the current song.

Example:
    from mpdnotify.api.mpd import MpdClient

    async with MpdClient("localhost", password="secret") as client:
        status = await client.status()
        track = await client.currentsong()
"""

from mpdnotify.api.mpd.client import MpdClient, MpdConnectionError
from mpdnotify.api.mpd.protocol import MpdError
from mpdnotify.api.mpd.types import MpdStatus, MpdTrack

__all__ = [
    "MpdClient",
    "MpdConnectionError",
    "MpdError",
    "MpdStatus",
    "MpdTrack",
]
