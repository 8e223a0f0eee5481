"""Wait for the game process to show up or go away"""

import threading
import time
from typing import Callable, Optional

from gamesync.util import system
from gamesync.util.log import logger


class ProcessWatcher:
    """Polls the process table for a process name at a fixed interval"""

    def __init__(self, process_name: str, interval: float, lookup: Optional[Callable[[str], bool]] = None):
        """Create a process watcher.
        Params:
            process_name (str): name of the process to look for
            interval (float): seconds to sleep between two lookups
            lookup (callable): returns whether a process name is running,
                defaults to scanning /proc
        """
        self.process_name = process_name
        self.interval = interval
        self.lookup = lookup or system.is_process_running

    def is_running(self) -> bool:
        return self.lookup(self.process_name)

    def wait_for_state(
        self,
        want_present: bool,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> bool:
        """Block until the process existence matches `want_present`.

        Each tick sleeps for the interval, then queries the process table.
        There is no timeout unless one is given.

        Returns:
            bool: True once the state is reached, False if the timeout
            expired or `cancel_event` was set first.
        """
        cancel_event = cancel_event or threading.Event()
        deadline = time.monotonic() + timeout if timeout is not None else None
        while True:
            if cancel_event.wait(self.interval):
                logger.debug("Wait for %s cancelled", self.process_name)
                return False
            if self.is_running() == want_present:
                return True
            if deadline is not None and time.monotonic() >= deadline:
                logger.debug("Wait for %s timed out after %ss", self.process_name, timeout)
                return False

    def wait_for_launch(self, timeout=None, cancel_event=None) -> bool:
        return self.wait_for_state(True, timeout=timeout, cancel_event=cancel_event)

    def wait_for_exit(self, timeout=None, cancel_event=None) -> bool:
        return self.wait_for_state(False, timeout=timeout, cancel_event=cancel_event)
