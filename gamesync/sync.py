"""Save synchronization between the local save folder and the cloud folder.

The cloud folder is mirrored by an external sync client; nothing here talks
to the network. Before the game starts, the newest save of either side is
pulled into the local folder when the cloud holds a fresher one, then a
timestamped backup of the local save is dropped into the cloud folder.
After the game exits, the newest cloud save gets its timestamp bumped so
the sync client notices it.
"""

import os
import shutil
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from gamesync.config import SyncConfig
from gamesync.exceptions import NoSavesFoundError
from gamesync.saves import BACKUP_MARKER, SAVE_EXTENSION, SaveFile, get_latest_save
from gamesync.util.log import logger

BACKUP_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


class SyncAction(Enum):
    """Possible sync actions after comparing local and cloud saves."""

    NONE = 0
    DOWNLOAD = 1


@dataclass
class SyncResult:
    """Result of a sync.

    Attributes:
        action: The sync action that was performed.
        local_save: Newest local save before syncing, if any.
        cloud_save: Newest cloud save before syncing, if any.
        destination: Path written when a save was copied, or None.
    """

    action: SyncAction = SyncAction.NONE
    local_save: Optional[SaveFile] = None
    cloud_save: Optional[SaveFile] = None
    destination: Optional[str] = None


def classify(local_save: Optional[SaveFile], cloud_save: Optional[SaveFile]) -> SyncAction:
    """Decide what to do with the newest save of each side"""
    if not local_save and not cloud_save:
        raise NoSavesFoundError()
    if not cloud_save:
        return SyncAction.NONE
    if not local_save or cloud_save.modified > local_save.modified:
        return SyncAction.DOWNLOAD
    return SyncAction.NONE


def copy_save(save: SaveFile, directory: str) -> str:
    """Copy a save into `directory` under the same name, keeping its
    timestamps. The destination is overwritten in place."""
    os.makedirs(directory, exist_ok=True)
    destination = os.path.join(directory, save.name)
    shutil.copy2(save.path, destination)
    return destination


def sync_saves(config: SyncConfig) -> SyncResult:
    """Pull the cloud save into the local folder when it is the newer one"""
    local_save = get_latest_save(config.local_folder, config.base_save_name, include_backups=False)
    cloud_save = get_latest_save(config.cloud_folder, config.base_save_name, include_backups=False)
    logger.info("Latest local save: %s", local_save or "none")
    logger.info("Latest cloud save: %s", cloud_save or "none")

    result = SyncResult(action=classify(local_save, cloud_save), local_save=local_save, cloud_save=cloud_save)
    if result.action == SyncAction.DOWNLOAD:
        result.destination = copy_save(cloud_save, config.local_folder)
        logger.info("Copied cloud save %s to %s", cloud_save.name, result.destination)
    elif not cloud_save:
        logger.info("No cloud save yet, nothing to pull")
    else:
        logger.info("Local save is up to date")
    return result


def get_backup_name(base_name: str, now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return "%s%s%s%s" % (base_name, BACKUP_MARKER, now.strftime(BACKUP_TIMESTAMP_FORMAT), SAVE_EXTENSION)


def write_backup(config: SyncConfig, now: Optional[datetime] = None) -> Optional[str]:
    """Copy the newest local save to the cloud folder under a timestamped
    name. Returns the backup path, or None when there is no local save."""
    local_save = get_latest_save(config.local_folder, config.base_save_name, include_backups=False)
    if not local_save:
        logger.warning("No local save to back up in %s", config.local_folder)
        return None
    os.makedirs(config.cloud_folder, exist_ok=True)
    backup_path = os.path.join(config.cloud_folder, get_backup_name(config.base_save_name, now))
    try:
        shutil.copy2(local_save.path, backup_path)
    except FileNotFoundError:
        logger.warning("Local save %s disappeared, no backup made", local_save.path)
        return None
    logger.info("Backed up %s to %s", local_save.name, backup_path)
    return backup_path


def touch_latest_cloud_save(config: SyncConfig) -> Optional[SaveFile]:
    """Set the newest cloud save's modification time to now so the cloud
    client picks it up again. The content is left alone. Backups are never
    touched, and neither is a cloud save older than the local one."""
    cloud_save = get_latest_save(config.cloud_folder, config.base_save_name, include_backups=False)
    if not cloud_save:
        logger.warning("No cloud save found in %s, skipping final sync", config.cloud_folder)
        return None
    local_save = get_latest_save(config.local_folder, config.base_save_name, include_backups=False)
    if local_save and local_save.modified > cloud_save.modified:
        # A cloud save older than the local one has to stay older
        logger.warning("Local save %s is newer than cloud save %s, not marking it", local_save.name, cloud_save.name)
        return None
    try:
        os.utime(cloud_save.path, None)
    except FileNotFoundError:
        logger.warning("Cloud save %s disappeared, skipping final sync", cloud_save.path)
        return None
    logger.info("Marked %s as freshly synced", cloud_save.name)
    return SaveFile.from_path(cloud_save.path)
