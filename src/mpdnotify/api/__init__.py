"""Clients for the services the notifier talks to."""

from mpdnotify.api.mpd import MpdClient, MpdConnectionError, MpdError

__all__ = [
    "MpdClient",
    "MpdConnectionError",
    "MpdError",
]
