"""Main entry point for the mpdnotify daemon."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from mpdnotify import __version__
from mpdnotify.api.mpd import MpdClient, MpdConnectionError, MpdError
from mpdnotify.core.availability import wait_until_reachable
from mpdnotify.core.config import DEFAULT_MPD_CONF, ConfigError, ConfigManager, read_music_directory
from mpdnotify.core.cover import CoverSearchError
from mpdnotify.core.watcher import PlaybackWatcher
from mpdnotify.ui.notifier import NotificationSink, TrayNotifier

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
EXIT_FATAL = 2


def build_parser(config: ConfigManager) -> argparse.ArgumentParser:
    """Build the command line parser with stored settings as defaults.

    Args:
        config: Settings that supply the defaults.

    Returns:
        The argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="mpdnotify",
        description="Desktop notifications for MPD track and state changes",
    )
    parser.add_argument(
        "host", nargs="?", default=config.get_mpd_host(), help="MPD hostname or IP",
    )
    parser.add_argument(
        "--port", type=int, default=config.get_mpd_port(), help="MPD port (default: %(default)s)",
    )
    parser.add_argument(
        "--password", default=config.get_mpd_password(), help="MPD password",
    )
    parser.add_argument(
        "--poll-interval",
        type=float,
        default=float(config.get_mpd_poll_interval()),
        help="seconds between polls while nothing changes (default: %(default)s)",
    )
    parser.add_argument(
        "--mpd-conf",
        type=Path,
        default=DEFAULT_MPD_CONF,
        help="MPD configuration holding music_directory (default: %(default)s)",
    )
    parser.add_argument(
        "--save", action="store_true", help="store host, port, password and interval as defaults",
    )
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def save_settings(config: ConfigManager, args: argparse.Namespace) -> None:
    """Persist the effective connection settings."""
    config.set_mpd_host(args.host)
    config.set_mpd_port(args.port)
    config.set_mpd_password(args.password)
    config.set_mpd_poll_interval(round(args.poll_interval))
    config.sync()
    logger.info("Settings saved")


async def run(
    args: argparse.Namespace,
    music_directory: Path,
    notifier: NotificationSink,
) -> int:
    """Connect to MPD and watch it until a fatal error.

    Args:
        args: Parsed command line.
        music_directory: MPD's music_directory.
        notifier: Where notifications are sent.

    Returns:
        Exit code; only returns on fatal errors.
    """
    await wait_until_reachable(args.host, args.port)

    client = MpdClient(args.host, args.port, args.password)
    try:
        await client.connect()
    except (MpdConnectionError, MpdError) as e:
        logger.error("Couldn't connect to MPD server: %s", e)
        return EXIT_FATAL

    watcher = PlaybackWatcher(client, music_directory, notifier, poll_interval=args.poll_interval)
    try:
        await watcher.run()
    except CoverSearchError as e:
        logger.error("%s, exiting...", e)
        return EXIT_FATAL
    except MpdError as e:
        logger.error("Couldn't reconnect to MPD server: %s", e)
        return EXIT_FATAL
    finally:
        await client.disconnect()


def main() -> int:
    """Run the mpdnotify daemon.

    Returns:
        Exit code (0 on interrupt, 2 on fatal errors).
    """
    QApplication.setApplicationName("mpdnotify")
    QApplication.setOrganizationName("mpdnotify")

    # Needed for the tray icon; the asyncio loop drives the program, not app.exec()
    app = QApplication(sys.argv)

    config = ConfigManager()
    args = build_parser(config).parse_args(app.arguments()[1:])

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO, format=LOG_FORMAT)

    if args.save:
        save_settings(config, args)

    try:
        music_directory = read_music_directory(args.mpd_conf)
    except ConfigError as e:
        logger.error("%s, exiting...", e)
        return EXIT_FATAL
    logger.info("Music directory: %s", music_directory)

    notifier = TrayNotifier()
    if not notifier.available:
        logger.warning("System tray messages are not supported on this platform")

    try:
        return asyncio.run(run(args, music_directory, notifier))
    except KeyboardInterrupt:
        logger.info("Interrupted, exiting")
        return 0
    finally:
        notifier.close()


if __name__ == "__main__":
    sys.exit(main())
