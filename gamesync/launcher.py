"""Start the game through the desktop's URI handler"""

from gamesync.exceptions import MisconfigurationError
from gamesync.util import system
from gamesync.util.log import logger

URI_HANDLER = "xdg-open"


def launch_game(uri: str) -> None:
    """Hand the launch URI (steam://rungameid/... and the like) to the
    default application. The outcome is not checked here; the process
    watcher finds out whether the game actually started."""
    if not uri:
        raise MisconfigurationError("No launch URI configured")
    logger.info("Launching %s", uri)
    if not system.spawn([URI_HANDLER, uri]):
        logger.warning("Could not hand %s to %s", uri, URI_HANDLER)
