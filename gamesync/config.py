"""Handle the game's sync configuration.

The configuration is a plain text file with one ``key = value`` pair per
line, stored next to the executable. It is read once at startup into an
immutable :class:`SyncConfig` which is then handed to every component.
"""

import os
import re
import sys
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from gamesync.exceptions import (
    InvalidSettingError,
    MisconfigurationError,
    MissingConfigFileError,
    MissingSettingError,
)
from gamesync.util.log import logger

CONFIG_FILENAME = "config.txt"

CONFIG_LINE_RE = re.compile(r"^\s*([^=#\s][^=]*?)\s*=\s*(.*?)\s*$")

# Config file key -> SyncConfig attribute
REQUIRED_KEYS = {
    "baseSaveName": "base_save_name",
    "googleDriveFolder": "cloud_folder",
    "steamSaveFolder": "local_folder",
    "healthCheckInterval": "health_check_interval",
    "gameProcessName": "process_name",
    "gameLaunchUri": "launch_uri",
}

OPTIONAL_KEYS = {
    "launchTimeout": "launch_timeout",
    "exitTimeout": "exit_timeout",
    "showPopup": "show_popup",
}

TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off")


@dataclass(frozen=True)
class SyncConfig:
    """Settings for a single game, loaded once at startup."""

    base_save_name: str
    cloud_folder: str
    local_folder: str
    health_check_interval: int
    process_name: str
    launch_uri: str
    launch_timeout: Optional[int] = None
    exit_timeout: Optional[int] = None
    show_popup: bool = True


def get_default_config_path() -> str:
    """Return the path of the config file living beside the executable"""
    executable_dir = os.path.dirname(os.path.abspath(sys.argv[0]))
    return os.path.join(executable_dir, CONFIG_FILENAME)


def parse_config_lines(lines: Iterable[str]) -> Dict[str, str]:
    """Parse ``key = value`` lines into a dict; a repeated key keeps its
    last value."""
    values = {}
    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        match = CONFIG_LINE_RE.match(stripped)
        if not match:
            logger.debug("Ignoring config line %r", stripped)
            continue
        key, value = match.groups()
        values[key] = value
    return values


def _parse_positive_int(key: str, value: str) -> int:
    try:
        number = int(value)
    except ValueError as err:
        raise InvalidSettingError(key, value, "not an integer") from err
    if number <= 0:
        raise InvalidSettingError(key, value, "must be greater than zero")
    return number


def _parse_bool(key: str, value: str) -> bool:
    lowered = value.lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise InvalidSettingError(key, value, "expected true or false")


def build_config(values: Dict[str, str]) -> SyncConfig:
    """Validate raw config values and turn them into a SyncConfig"""
    missing = [key for key in REQUIRED_KEYS if not values.get(key)]
    if missing:
        raise MissingSettingError(missing)

    kwargs = {attribute: values[key] for key, attribute in REQUIRED_KEYS.items()}
    kwargs["cloud_folder"] = os.path.expanduser(kwargs["cloud_folder"])
    kwargs["local_folder"] = os.path.expanduser(kwargs["local_folder"])
    kwargs["health_check_interval"] = _parse_positive_int("healthCheckInterval", values["healthCheckInterval"])

    for key in ("launchTimeout", "exitTimeout"):
        if values.get(key):
            kwargs[OPTIONAL_KEYS[key]] = _parse_positive_int(key, values[key])
    if values.get("showPopup"):
        kwargs["show_popup"] = _parse_bool("showPopup", values["showPopup"])
    return SyncConfig(**kwargs)


def load_config(path: str) -> SyncConfig:
    """Read the config file at `path`"""
    if not os.path.isfile(path):
        raise MissingConfigFileError(filename=path)
    logger.debug("Reading config from %s", path)
    try:
        # utf-8-sig drops the byte order mark Windows editors put in front
        with open(path, encoding="utf-8-sig") as config_file:
            values = parse_config_lines(config_file)
    except UnicodeDecodeError as ex:
        raise MisconfigurationError("Config file %s is not valid UTF-8: %s" % (path, ex)) from ex
    except OSError as ex:
        raise MisconfigurationError("Can't read config file %s: %s" % (path, ex)) from ex
    return build_config(values)
