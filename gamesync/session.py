"""Run a full play session: sync, launch, wait, sync again"""

import threading
from typing import Callable, Optional

from gamesync.config import SyncConfig
from gamesync.exceptions import ProcessWaitError
from gamesync.launcher import launch_game
from gamesync.sync import sync_saves, touch_latest_cloud_save, write_backup
from gamesync.util.log import logger
from gamesync.util.process_watcher import ProcessWatcher


class GameSession:
    """Drives one run of the game between two save syncs"""

    def __init__(
        self,
        config: SyncConfig,
        lookup: Optional[Callable[[str], bool]] = None,
        use_popup: Optional[bool] = None,
        cancel_event: Optional[threading.Event] = None,
    ):
        self.config = config
        self.watcher = ProcessWatcher(config.process_name, config.health_check_interval, lookup=lookup)
        self.use_popup = config.show_popup if use_popup is None else use_popup
        self.cancel_event = cancel_event or threading.Event()

    def prepare(self):
        """Sync the saves and back up the local one before playing"""
        result = sync_saves(self.config)
        write_backup(self.config)
        return result

    def wait_for_launch(self):
        logger.info("Waiting for %s to start...", self.config.process_name)
        if not self.watcher.wait_for_launch(timeout=self.config.launch_timeout, cancel_event=self.cancel_event):
            raise ProcessWaitError(
                "%s did not start" % self.config.process_name, process_name=self.config.process_name
            )
        logger.info("%s is running", self.config.process_name)

    def _wait_for_exit(self):
        return self.watcher.wait_for_exit(timeout=self.config.exit_timeout, cancel_event=self.cancel_event)

    def wait_for_exit(self):
        logger.info("Waiting for %s to close...", self.config.process_name)
        if self.use_popup:
            from gamesync.gui.popup import wait_with_popup

            exited = wait_with_popup(self._wait_for_exit, cancel_event=self.cancel_event)
        else:
            exited = self._wait_for_exit()
        if not exited:
            raise ProcessWaitError(
                "%s did not close" % self.config.process_name, process_name=self.config.process_name
            )
        logger.info("%s closed", self.config.process_name)

    def finish(self):
        """Flag the newest cloud save for the cloud client after playing"""
        return touch_latest_cloud_save(self.config)

    def run(self):
        self.prepare()
        launch_game(self.config.launch_uri)
        self.wait_for_launch()
        self.wait_for_exit()
        self.finish()
        logger.info("All done")
