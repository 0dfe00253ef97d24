"""Playback watcher: polls MPD and notifies on song or state changes.

One poll cycle queries status and the current song, compares the
(song ID, state) pair with the last one notified about and, if it
differs, looks for a cover next to the track and shows a notification.

Example:
    watcher = PlaybackWatcher(client, Path("/srv/music"), TrayNotifier())
    await watcher.run()
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

from mpdnotify.api.mpd import MpdConnectionError, MpdError, MpdTrack
from mpdnotify.core.availability import RETRY_DELAY, wait_until_reachable
from mpdnotify.core.cover import find_cover
from mpdnotify.core.thumbnail import THUMBNAIL_WIDTH, generate_thumbnail
from mpdnotify.models.playback import PlaybackSnapshot, PlaybackState, notification_body

if TYPE_CHECKING:
    from mpdnotify.api.mpd import MpdClient, MpdStatus
    from mpdnotify.ui.notifier import NotificationSink

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 2.0  # seconds
QUERY_ERROR_DELAY = 30.0  # seconds
NOTIFICATION_TIMEOUT_MS = 3000


class PollResult(Enum):
    """Outcome of a single poll cycle."""

    UNCHANGED = "unchanged"
    NOTIFIED = "notified"
    QUERY_FAILED = "query_failed"


class PlaybackWatcher:
    """Polls MPD and shows a notification whenever playback changes.

    The watcher owns the snapshot of the last notified (song ID, state)
    pair. The snapshot advances as soon as a change is seen, before the
    cover lookup and the notification, so a failed notification is not
    retried.

    Attributes:
        music_directory: Root that MPD track paths are relative to.
    """

    def __init__(
        self,
        client: MpdClient,
        music_directory: Path,
        notifier: NotificationSink,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        error_delay: float = QUERY_ERROR_DELAY,
        reconnect_delay: float = RETRY_DELAY,
        thumbnail_width: int = THUMBNAIL_WIDTH,
        timeout_ms: int = NOTIFICATION_TIMEOUT_MS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize the watcher.

        Args:
            client: Connected MPD client.
            music_directory: MPD's music_directory.
            notifier: Where notifications are sent.
            poll_interval: Seconds between polls while nothing changes.
            error_delay: Seconds to wait after a failed query.
            reconnect_delay: Seconds between reachability probes on reconnect.
            thumbnail_width: Width of the cover thumbnail in pixels.
            timeout_ms: Notification display time.
            sleep: Sleep coroutine, replaceable in tests.
        """
        self.music_directory = music_directory
        self._client = client
        self._notifier = notifier
        self._poll_interval = poll_interval
        self._error_delay = error_delay
        self._reconnect_delay = reconnect_delay
        self._thumbnail_width = thumbnail_width
        self._timeout_ms = timeout_ms
        self._sleep = sleep

        self._snapshot = PlaybackSnapshot()

    @property
    def snapshot(self) -> PlaybackSnapshot:
        """Return the last (song ID, state) pair notified about."""
        return self._snapshot

    async def run(self) -> NoReturn:
        """Poll forever; only exits by raising.

        Raises:
            CoverSearchError: If a track directory cannot be listed.
            MpdError: If re-authentication after a lost connection fails.
        """
        logger.info("Watching MPD at %s:%d", self._client.host, self._client.port)
        while True:
            result = await self.poll_once()
            if result is PollResult.UNCHANGED:
                await self._sleep(self._poll_interval)
            elif result is PollResult.QUERY_FAILED:
                await self._sleep(self._error_delay)
                if not self._client.is_connected:
                    await self._reconnect()

    async def poll_once(self) -> PollResult:
        """Run one poll cycle.

        Returns:
            What the cycle did.

        Raises:
            CoverSearchError: If the current track's directory cannot be listed.
        """
        try:
            status, track = await self._query()
        except MpdError as e:
            logger.error("Error getting status: %s", e)
            return PollResult.QUERY_FAILED
        except (MpdConnectionError, TimeoutError) as e:
            logger.error("Error getting status: %s", str(e) or "timed out")
            # The stream may hold a half-read reply; start over on a new connection
            await self._client.disconnect()
            return PollResult.QUERY_FAILED

        state = PlaybackState.from_mpd(status.state)
        if not self._snapshot.differs(track.id, state):
            return PollResult.UNCHANGED

        self._snapshot = PlaybackSnapshot(song_id=track.id, state=state)
        logger.info("Playback changed: song %d, %s", track.id, state.name.lower())

        image = self._thumbnail_for(track)
        body = notification_body(state, track)
        if not self._notifier.show(state.title, body, image, self._timeout_ms):
            logger.warning("Notification for song %d was not shown", track.id)
        return PollResult.NOTIFIED

    def track_directory(self, track: MpdTrack) -> Path:
        """Return the local directory holding the track's file."""
        return self.music_directory.joinpath(*track.directory_parts)

    async def _query(self) -> tuple[MpdStatus, MpdTrack]:
        """Fetch status and current song; no song yields an empty track."""
        status = await self._client.status()
        track = await self._client.currentsong()
        return status, track if track is not None else MpdTrack()

    def _thumbnail_for(self, track: MpdTrack) -> str:
        """Return a thumbnail path for the track's cover, or empty string."""
        if not track.file:
            return ""
        if track.is_stream:
            logger.debug("No local directory for stream %s", track.file)
            return ""

        cover = find_cover(self.track_directory(track))
        if cover is None:
            return ""

        thumb = generate_thumbnail(cover, self._thumbnail_width, 0)
        return str(thumb) if thumb is not None else ""

    async def _reconnect(self) -> None:
        """Wait for MPD to come back and open a new connection.

        Raises:
            MpdError: If the server rejects the password.
        """
        logger.warning("Lost connection to MPD, reconnecting")
        await wait_until_reachable(
            self._client.host,
            self._client.port,
            retry_delay=self._reconnect_delay,
            sleep=self._sleep,
        )
        try:
            await self._client.connect()
        except MpdConnectionError as e:
            logger.error("Couldn't reconnect to MPD: %s", e)
