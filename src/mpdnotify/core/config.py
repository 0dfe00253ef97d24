"""Notifier settings and the MPD configuration file reader.

Connection settings persist in QSettings; the music directory is read
from MPD's own configuration so both programs agree on where tracks live.
"""

import logging
import os
import re
from pathlib import Path

from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

DEFAULT_MPD_CONF = Path("/etc/mpd.conf")

# Settings keys
_KEY_MPD_HOST = "mpd/host"
_KEY_MPD_PORT = "mpd/port"
_KEY_MPD_PASSWORD = "mpd/password"
_KEY_MPD_POLL_INTERVAL = "mpd/poll_interval"

_MUSIC_DIRECTORY_LINE = re.compile(r'^music_directory\s+"([^"]*)"')


class ConfigError(Exception):
    """MPD configuration is missing or incomplete."""


def read_music_directory(conf_path: str | os.PathLike[str] = DEFAULT_MPD_CONF) -> Path:
    """Extract music_directory from an MPD configuration file.

    The first ``music_directory "path"`` line wins. Leading whitespace is
    ignored, as is anything after the closing quote. A leading ``~`` is
    expanded to the current user's home directory.

    Args:
        conf_path: Path of the MPD configuration file.

    Returns:
        The music directory.

    Raises:
        ConfigError: If the file cannot be read or has no music_directory.
    """
    path = Path(conf_path)
    try:
        with path.open(encoding="utf-8", errors="replace") as conf:
            for line in conf:
                match = _MUSIC_DIRECTORY_LINE.match(line.strip())
                if match:
                    music_dir = Path(match.group(1)).expanduser()
                    logger.debug("music_directory from %s: %s", path, music_dir)
                    return music_dir
    except OSError as e:
        raise ConfigError(f"Couldn't read MPD configuration {path}: {e}") from e

    raise ConfigError(f"No music_directory declared in {path}")


class ConfigManager:
    """Wrapper around QSettings for type-safe config access.

    QSettings stores config in platform-specific locations:
    - Linux: ~/.config/mpdnotify/mpdnotify.conf
    - macOS: ~/Library/Preferences/com.mpdnotify.mpdnotify.plist
    - Windows: HKEY_CURRENT_USER\\Software\\mpdnotify\\mpdnotify

    Example:
        config = ConfigManager()
        client = MpdClient(config.get_mpd_host(), config.get_mpd_port())
    """

    def __init__(self, organization: str = "mpdnotify", application: str = "mpdnotify") -> None:
        """Initialize the config manager.

        Args:
            organization: Organization name for QSettings.
            application: Application name for QSettings.
        """
        self._settings = QSettings(organization, application)

    @property
    def settings(self) -> QSettings:
        """Return the underlying QSettings instance."""
        return self._settings

    # -- MPD settings ----------------------------------------------------------

    def get_mpd_host(self) -> str:
        """Return the MPD host.

        Returns:
            Host string (default "localhost").
        """
        value = self._settings.value(_KEY_MPD_HOST, "localhost", str)
        return str(value) if value else "localhost"

    def set_mpd_host(self, host: str) -> None:
        """Set the MPD host.

        Args:
            host: Hostname or IP.
        """
        self._settings.setValue(_KEY_MPD_HOST, host)

    def get_mpd_port(self) -> int:
        """Return the MPD port.

        Returns:
            Port number (default 6600).
        """
        value = self._settings.value(_KEY_MPD_PORT, 6600, int)
        return max(1, min(65535, int(value)))  # type: ignore[arg-type]

    def set_mpd_port(self, port: int) -> None:
        """Set the MPD port.

        Args:
            port: Port number (1-65535).
        """
        self._settings.setValue(_KEY_MPD_PORT, max(1, min(65535, port)))

    def get_mpd_password(self) -> str:
        """Return the MPD password.

        Returns:
            Password string, or empty string when MPD has no password.
        """
        value = self._settings.value(_KEY_MPD_PASSWORD, "", str)
        return str(value) if value else ""

    def set_mpd_password(self, password: str) -> None:
        """Set the MPD password.

        Args:
            password: Password, or empty string for none.
        """
        self._settings.setValue(_KEY_MPD_PASSWORD, password)

    def get_mpd_poll_interval(self) -> int:
        """Return the MPD poll interval in seconds.

        Returns:
            Interval in seconds (default 2).
        """
        value = self._settings.value(_KEY_MPD_POLL_INTERVAL, 2, int)
        return max(1, min(30, int(value)))  # type: ignore[arg-type]

    def set_mpd_poll_interval(self, seconds: int) -> None:
        """Set the MPD poll interval.

        Args:
            seconds: Interval in seconds (1-30).
        """
        self._settings.setValue(_KEY_MPD_POLL_INTERVAL, max(1, min(30, seconds)))

    # -- General settings ------------------------------------------------------

    def clear(self) -> None:
        """Clear all settings (useful for testing or reset)."""
        self._settings.clear()

    def sync(self) -> None:
        """Force settings to be written to disk."""
        self._settings.sync()
