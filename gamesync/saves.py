"""Locate a game's save files in a folder"""

import glob
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional

SAVE_EXTENSION = ".sav"
BACKUP_MARKER = "_Backup_"


@dataclass(frozen=True)
class SaveFile:
    """A save file seen on disk during a scan.

    Attributes:
        path: Full path to the file.
        name: File name, used when copying it to the other folder.
        modified: Last write time, as a Unix timestamp.
    """

    path: str
    name: str
    modified: float

    @classmethod
    def from_path(cls, path) -> "SaveFile":
        path = str(path)
        return cls(path=path, name=os.path.basename(path), modified=os.stat(path).st_mtime)

    @property
    def modified_at(self) -> datetime:
        return datetime.fromtimestamp(self.modified)

    def __str__(self):
        return "{} ({})".format(self.name, self.modified_at.strftime("%c"))


def is_backup(name: str, base_name: str) -> bool:
    """Whether `name` is one of the timestamped backups of `base_name`"""
    return name.startswith(base_name + BACKUP_MARKER)


def list_saves(directory: str, base_name: str, include_backups: bool = True) -> List[SaveFile]:
    """Return the saves named `{base_name}*.sav` in `directory`, newest first.
    A missing folder gives an empty list."""
    folder = Path(directory)
    if not folder.is_dir():
        return []
    saves = []
    for path in folder.glob("%s*%s" % (glob.escape(base_name), SAVE_EXTENSION)):
        if not path.is_file() or (not include_backups and is_backup(path.name, base_name)):
            continue
        try:
            saves.append(SaveFile.from_path(path))
        except FileNotFoundError:
            # Deleted between the glob and the stat
            continue
    return sorted(saves, key=lambda save: save.modified, reverse=True)


def get_latest_save(directory: str, base_name: str, include_backups: bool = True) -> Optional[SaveFile]:
    saves = list_saves(directory, base_name, include_backups=include_backups)
    if saves:
        return saves[0]
    return None
