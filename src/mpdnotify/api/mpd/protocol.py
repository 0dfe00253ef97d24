"""MPD protocol parsing utilities.

MPD uses a simple line-based text protocol:
- Commands are sent as plain text lines
- Responses are key-value pairs: "key: value"
- Responses end with "OK" or "ACK [error] {command} message"

Reference: https://mpd.readthedocs.io/en/stable/protocol.html
"""

import re
from dataclasses import fields
from typing import Any

from mpdnotify.api.mpd.types import MpdStatus, MpdTrack


class MpdError(Exception):
    """MPD protocol error."""

    def __init__(self, code: int, command: str, message: str) -> None:
        self.code = code
        self.command = command
        self.message = message
        super().__init__(f"MPD error {code} in {command}: {message}")


# Pattern for ACK responses: ACK [error@command_listNum] {current_command} message_text
ACK_PATTERN = re.compile(r"ACK \[(\d+)@\d+\] \{(\w*)\} (.+)")

# MPD key name mappings to dataclass field names
_TRACK_KEY_MAP: dict[str, str] = {
    "file": "file",
    "title": "title",
    "artist": "artist",
    "album": "album",
    "id": "id",
}

_STATUS_KEY_MAP: dict[str, str] = {
    "state": "state",
}


def parse_response(lines: list[str]) -> dict[str, str]:
    """Parse MPD response lines into a key-value dict.

    Args:
        lines: Response lines (without the final OK/ACK).

    Returns:
        Dictionary of key-value pairs.

    Raises:
        MpdError: If response is an ACK error.
    """
    result: dict[str, str] = {}

    for line in lines:
        if line.startswith("ACK "):
            match = ACK_PATTERN.match(line)
            if match:
                code = int(match.group(1))
                command = match.group(2)
                message = match.group(3)
                raise MpdError(code, command, message)
            raise MpdError(0, "", line)

        if line == "OK":
            continue

        if ": " in line:
            key, value = line.split(": ", 1)
            result[key.lower()] = value

    return result


def _coerce(value: str, field_type: object, default: Any) -> Any:
    """Convert a raw protocol value to the dataclass field type.

    Numbers that fail to parse fall back to the field default.
    """
    try:
        if field_type is int:
            return int(value)
    except ValueError:
        return default
    return value


def parse_track(data: dict[str, str]) -> MpdTrack:
    """Parse track data into MpdTrack.

    A missing or non-numeric ``Id`` yields 0.

    Args:
        data: Key-value dict from parse_response.

    Returns:
        MpdTrack instance.
    """
    kwargs: dict[str, Any] = {}
    track_fields = {f.name: f for f in fields(MpdTrack)}

    for mpd_key, field_name in _TRACK_KEY_MAP.items():
        if mpd_key in data:
            field = track_fields[field_name]
            kwargs[field_name] = _coerce(data[mpd_key], field.type, field.default)

    return MpdTrack(**kwargs)


def parse_status(data: dict[str, str]) -> MpdStatus:
    """Parse status data into MpdStatus.

    Args:
        data: Key-value dict from parse_response.

    Returns:
        MpdStatus instance.
    """
    kwargs: dict[str, Any] = {}
    status_fields = {f.name: f for f in fields(MpdStatus)}

    for mpd_key, field_name in _STATUS_KEY_MAP.items():
        if mpd_key in data:
            field = status_fields[field_name]
            kwargs[field_name] = _coerce(data[mpd_key], field.type, field.default)

    return MpdStatus(**kwargs)


def escape_arg(arg: str) -> str:
    """Escape an argument for MPD command.

    MPD requires arguments with spaces or special chars to be quoted.
    Inside quotes, backslash and double-quote must be escaped.

    Args:
        arg: The argument to escape.

    Returns:
        Escaped argument, quoted if necessary.
    """
    if arg and not any(c in arg for c in ' "\t\n\\'):
        return arg

    escaped = arg.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def format_command(command: str, *args: str) -> str:
    """Format an MPD command with arguments.

    Args:
        command: The MPD command name.
        *args: Command arguments.

    Returns:
        Formatted command string (without newline).
    """
    if not args:
        return command
    escaped_args = [escape_arg(arg) for arg in args]
    return f"{command} {' '.join(escaped_args)}"
