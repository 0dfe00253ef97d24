"""mpdnotify - desktop notifications for MPD track and state changes."""

__version__ = "0.1.0"
