"""Reachability probe for the MPD server.

The probe only opens and closes a TCP connection; it does not read the
greeting or authenticate. It is used before the authenticated connect so
the notifier can be started before MPD.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

PROBE_TIMEOUT = 1.0  # seconds
RETRY_DELAY = 10.0  # seconds


async def is_reachable(host: str, port: int, timeout: float = PROBE_TIMEOUT) -> bool:
    """Check whether host:port accepts TCP connections.

    Args:
        host: Hostname or IP address.
        port: TCP port.
        timeout: Connect timeout in seconds.

    Returns:
        True if a connection could be opened, False otherwise.
    """
    try:
        _, writer = await asyncio.wait_for(asyncio.open_connection(host, port), timeout=timeout)
    except TimeoutError:
        logger.debug("Probe to %s:%d timed out after %.1fs", host, port, timeout)
        return False
    except OSError as e:
        logger.debug("Probe to %s:%d failed: %s", host, port, e)
        return False

    writer.close()
    try:
        await writer.wait_closed()
    except OSError as e:
        logger.debug("Error closing probe connection to %s:%d: %s", host, port, e)
    return True


async def wait_until_reachable(
    host: str,
    port: int,
    retry_delay: float = RETRY_DELAY,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> None:
    """Block until host:port accepts connections, retrying forever.

    Args:
        host: Hostname or IP address.
        port: TCP port.
        retry_delay: Seconds to wait between probes.
        sleep: Sleep coroutine, replaceable in tests.
    """
    attempts = 0
    while not await is_reachable(host, port):
        attempts += 1
        if attempts == 1:
            logger.warning(
                "MPD at %s:%d is not reachable, retrying every %.0fs", host, port, retry_delay
            )
        else:
            logger.debug("MPD at %s:%d still unreachable (attempt %d)", host, port, attempts)
        await sleep(retry_delay)

    if attempts:
        logger.info("MPD at %s:%d is reachable after %d retries", host, port, attempts)
