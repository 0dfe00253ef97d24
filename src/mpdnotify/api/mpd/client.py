"""Async MPD client.

This module provides an asyncio-based MPD client covering the commands
the notifier needs: authentication, status and the current song.

Example:
    async with MpdClient("192.168.1.100") as client:
        status = await client.status()
        if status.state == "play":
            track = await client.currentsong()
            print(f"Playing: {track.title} by {track.artist}")
"""

import asyncio
import logging
from typing import Self

from mpdnotify.api.mpd.protocol import (
    format_command,
    parse_response,
    parse_status,
    parse_track,
)
from mpdnotify.api.mpd.types import MpdStatus, MpdTrack

logger = logging.getLogger(__name__)

DEFAULT_PORT = 6600
CONNECT_TIMEOUT = 5.0
COMMAND_TIMEOUT = 10.0


class MpdConnectionError(Exception):
    """Failed to connect to MPD server."""


class MpdClient:
    """Async MPD client.

    Holds a single connection to the server. Commands are serialized
    through a lock so one request/response exchange runs at a time.

    Attributes:
        host: MPD server hostname or IP.
        port: MPD server port (default 6600).
        password: Optional password for authentication.
    """

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_PORT,
        password: str = "",
    ) -> None:
        """Initialize MPD client.

        Args:
            host: MPD server hostname or IP.
            port: MPD server port.
            password: Optional password for authentication.
        """
        self.host = host
        self.port = port
        self.password = password

        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None
        self._lock = asyncio.Lock()
        self._version: str = ""

    @property
    def is_connected(self) -> bool:
        """Return True if connected to MPD."""
        return self._writer is not None and not self._writer.is_closing()

    @property
    def version(self) -> str:
        """Return MPD protocol version from initial handshake."""
        return self._version

    async def connect(self) -> None:
        """Connect to MPD server and authenticate.

        Raises:
            MpdConnectionError: If connection fails.
            MpdError: If authentication fails.
        """
        try:
            self._reader, self._writer = await asyncio.wait_for(
                asyncio.open_connection(self.host, self.port),
                timeout=CONNECT_TIMEOUT,
            )

            # Read greeting: "OK MPD version"
            greeting = await asyncio.wait_for(self._read_line(), timeout=CONNECT_TIMEOUT)
            if not greeting.startswith("OK MPD "):
                raise MpdConnectionError(f"Invalid MPD greeting: {greeting}")

            self._version = greeting[7:]
            logger.info("Connected to MPD %s at %s:%d", self._version, self.host, self.port)

            if self.password:
                await self._command("password", self.password)

        except TimeoutError as e:
            await self.disconnect()
            raise MpdConnectionError(f"Connection to {self.host}:{self.port} timed out") from e
        except OSError as e:
            await self.disconnect()
            raise MpdConnectionError(f"Failed to connect to {self.host}:{self.port}: {e}") from e
        except Exception:
            await self.disconnect()
            raise

    async def disconnect(self) -> None:
        """Disconnect from MPD server."""
        if self._writer:
            try:
                self._writer.close()
                await self._writer.wait_closed()
            except (OSError, TimeoutError, asyncio.CancelledError) as e:
                logger.debug("Expected error during MPD disconnect: %s", e)
            except Exception as e:  # noqa: BLE001
                logger.warning("Unexpected error during MPD disconnect: %s", e)
            finally:
                self._writer = None
                self._reader = None
                logger.info("Disconnected from MPD")

    async def __aenter__(self) -> Self:
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, *_: object) -> None:
        """Async context manager exit."""
        await self.disconnect()

    async def _read_line(self) -> str:
        """Read a single line from MPD.

        Raises:
            MpdConnectionError: If not connected, or the stream failed or
                delivered an unreadable line.
        """
        if not self._reader:
            raise MpdConnectionError("Not connected")
        try:
            line = await self._reader.readline()
            text = line.decode("utf-8")
        # ValueError covers over-long lines and invalid UTF-8
        except (OSError, ValueError) as e:
            self._abort()
            raise MpdConnectionError(f"Bad read from {self.host}:{self.port}: {e}") from e
        if not line:
            self._abort()
            raise MpdConnectionError("Connection closed by server")
        return text.rstrip("\n")

    def _abort(self) -> None:
        """Close the stream so is_connected reports the loss."""
        if self._writer:
            self._writer.close()

    async def _read_until_ok(self) -> list[str]:
        """Read response lines until OK or ACK.

        Returns:
            List of response lines (including final OK/ACK).
        """
        lines: list[str] = []
        while True:
            line = await self._read_line()
            lines.append(line)
            if line == "OK" or line.startswith("ACK "):
                break
        return lines

    async def _command(self, cmd: str, *args: str) -> list[str]:
        """Send command and read response.

        Args:
            cmd: Command name.
            *args: Command arguments.

        Returns:
            List of response lines (without OK).

        Raises:
            MpdConnectionError: If not connected or the connection drops.
            MpdError: If command returns an error.
        """
        async with self._lock:
            if not self._writer:
                raise MpdConnectionError("Not connected")

            command_str = format_command(cmd, *args)
            # Never log the password itself
            logger.debug("MPD command: %s", "password ***" if cmd == "password" else command_str)

            try:
                self._writer.write(f"{command_str}\n".encode())
                await self._writer.drain()
            except OSError as e:
                raise MpdConnectionError(f"Lost connection to {self.host}:{self.port}: {e}") from e

            lines = await asyncio.wait_for(
                self._read_until_ok(),
                timeout=COMMAND_TIMEOUT,
            )

            # parse_response raises MpdError on ACK
            parse_response(lines)

            return [line for line in lines if line != "OK"]

    # -------------------------------------------------------------------------
    # Status & Info Commands
    # -------------------------------------------------------------------------

    async def status(self) -> MpdStatus:
        """Get current player status.

        Returns:
            MpdStatus with the current player state.
        """
        lines = await self._command("status")
        data = parse_response(lines)
        return parse_status(data)

    async def currentsong(self) -> MpdTrack | None:
        """Get current song information.

        Returns:
            MpdTrack if a song is loaded, None otherwise.
        """
        lines = await self._command("currentsong")
        if not lines:
            return None
        data = parse_response(lines)
        if "file" not in data:
            return None
        return parse_track(data)

    async def ping(self) -> None:
        """Ping MPD server to check connection."""
        await self._command("ping")
