"""Command line entry point"""

import argparse
import os
import sys

from gamesync import __version__
from gamesync.config import get_default_config_path, load_config
from gamesync.exceptions import GameSyncError
from gamesync.session import GameSession
from gamesync.util import log
from gamesync.util.log import logger


def get_parser():
    parser = argparse.ArgumentParser(
        prog="gamesync",
        description="Sync a game's save with a cloud folder, play, then sync again.",
    )
    parser.add_argument(
        "-c", "--config", default=None, help="Path of the config file (default: config.txt next to the executable)"
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Show debug messages")
    parser.add_argument("--no-popup", action="store_true", help="Don't show the status window while playing")
    parser.add_argument("--sync-only", action="store_true", help="Sync and back up the save without launching the game")
    parser.add_argument("--version", action="version", version="%(prog)s " + __version__)
    return parser


def has_display():
    return bool(os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY"))


def main(argv=None):
    args = get_parser().parse_args(argv)
    log.set_debug(args.debug)
    log.add_file_handler()

    config_path = args.config or get_default_config_path()
    try:
        config = load_config(config_path)
        use_popup = None
        if args.no_popup:
            use_popup = False
        elif config.show_popup and not has_display():
            logger.warning("No display available, the status window won't be shown")
            use_popup = False
        session = GameSession(config, use_popup=use_popup)
        if args.sync_only:
            session.prepare()
        else:
            session.run()
    except GameSyncError as ex:
        logger.error(ex.message)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
