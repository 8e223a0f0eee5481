"""Utility module for creating an application wide logger."""
import logging
import logging.handlers
import os
import sys

CACHE_DIR = os.path.join(
    os.environ.get("XDG_CACHE_HOME") or os.path.expanduser("~/.cache"),
    "gamesync",
)
LOG_FILENAME = os.path.join(CACHE_DIR, "gamesync.log")

# Formatters
FILE_FORMATTER = logging.Formatter("[%(levelname)s:%(asctime)s:%(module)s]: %(message)s")

SIMPLE_FORMATTER = logging.Formatter("%(asctime)s: %(message)s")

DEBUG_FORMATTER = logging.Formatter(
    "%(levelname)-8s %(asctime)s [%(module)s.%(funcName)s:%(lineno)s]:%(message)s"
)

logger = logging.getLogger("gamesync")
logger.setLevel(logging.INFO)

console_handler = logging.StreamHandler(stream=sys.stdout)
console_handler.setFormatter(SIMPLE_FORMATTER)
logger.addHandler(console_handler)


def add_file_handler(log_filename=LOG_FILENAME):
    """Also write the log to a rotating file, returns the handler or None
    if the log directory can't be created."""
    try:
        os.makedirs(os.path.dirname(log_filename), exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(log_filename, maxBytes=5242880, backupCount=3)
    except OSError as ex:
        logger.warning("Can't write log file %s: %s", log_filename, ex)
        return None
    file_handler.setFormatter(FILE_FORMATTER)
    logger.addHandler(file_handler)
    return file_handler


def set_debug(debug=True):
    """Switch the console output to the verbose format and level"""
    if debug:
        logger.setLevel(logging.DEBUG)
        console_handler.setFormatter(DEBUG_FORMATTER)
    else:
        logger.setLevel(logging.INFO)
        console_handler.setFormatter(SIMPLE_FORMATTER)
