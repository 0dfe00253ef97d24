"""Test fixtures for mpdnotify tests."""

import asyncio
import os
from unittest.mock import AsyncMock, MagicMock

# Qt must not need a display in CI
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from mpdnotify.api.mpd.types import MpdStatus, MpdTrack


class MockStreamReader:
    """Mock asyncio StreamReader for testing."""

    def __init__(self, responses: list[bytes]) -> None:
        self._responses = responses
        self._index = 0
        self._buffer = b""

    async def readline(self) -> bytes:
        """Read a line from mock data; b"" once the data runs out."""
        while b"\n" not in self._buffer:
            if self._index >= len(self._responses):
                return b""
            self._buffer += self._responses[self._index]
            self._index += 1

        line, self._buffer = self._buffer.split(b"\n", 1)
        return line + b"\n"


class MockStreamWriter:
    """Mock asyncio StreamWriter for testing."""

    def __init__(self) -> None:
        self.data: list[bytes] = []
        self._closed = False

    def write(self, data: bytes) -> None:
        """Record written data."""
        self.data.append(data)

    async def drain(self) -> None:
        """Mock drain."""

    def close(self) -> None:
        """Mark as closed."""
        self._closed = True

    async def wait_closed(self) -> None:
        """Mock wait_closed."""

    def is_closing(self) -> bool:
        """Check if closing."""
        return self._closed

    @property
    def commands(self) -> list[str]:
        """Return the commands written so far."""
        return [chunk.decode().rstrip("\n") for chunk in self.data]


@pytest.fixture
def mock_connection():
    """Create mock connection for testing."""

    def _mock_connection(responses: list[bytes]) -> tuple[MockStreamReader, MockStreamWriter]:
        reader = MockStreamReader(responses)
        writer = MockStreamWriter()
        return reader, writer

    return _mock_connection


@pytest.fixture
def mpd_client() -> MagicMock:
    """Return a connected MpdClient stand-in playing song 1."""
    client = MagicMock()
    client.host = "localhost"
    client.port = 6600
    client.is_connected = True
    client.status = AsyncMock(return_value=MpdStatus(state="play"))
    client.currentsong = AsyncMock(
        return_value=MpdTrack(file="Artist/Album/01.flac", id=1, title="Song")
    )
    client.connect = AsyncMock()
    client.disconnect = AsyncMock()
    return client


@pytest.fixture
def notifier() -> MagicMock:
    """Return a notification sink that always succeeds."""
    sink = MagicMock()
    sink.show.return_value = True
    return sink


class StopLoop(Exception):
    """Raised by a scripted sleep to end an infinite loop."""


@pytest.fixture
def scripted_sleep():
    """Return a sleep stand-in that records delays and stops after N calls."""

    def _scripted_sleep(max_calls: int) -> AsyncMock:
        delays: list[float] = []

        async def _sleep(seconds: float) -> None:
            delays.append(seconds)
            if len(delays) >= max_calls:
                raise StopLoop
            await asyncio.sleep(0)

        sleep = AsyncMock(side_effect=_sleep)
        sleep.delays = delays
        sleep.stop = StopLoop
        return sleep

    return _scripted_sleep
