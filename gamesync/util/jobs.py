import sys
import threading
import traceback
from typing import Callable

from gi.repository import GLib  # type: ignore

from gamesync.util.log import logger


class AsyncCall(threading.Thread):
    def __init__(self, func, callback, *args, **kwargs):
        """Execute `function` in a new thread then schedule `callback` for
        execution in the main loop.
        """
        daemon = kwargs.pop("daemon", True)
        super().__init__(target=self.target, args=args, kwargs=kwargs)
        self.function = func
        self.callback = callback if callback else lambda r, e: None
        self.daemon = daemon
        self.start()

    def target(self, *a, **kw):
        result = None
        error = None

        try:
            result = self.function(*a, **kw)
        except Exception as ex:  # pylint: disable=broad-except
            logger.error("Error while completing task %s: %s %s", self.function, type(ex), ex)
            error = ex
            _ex_type, _ex_value, trace = sys.exc_info()
            traceback.print_tb(trace)

        schedule_at_idle(self.callback, result, error)


def schedule_at_idle(func: Callable[..., None], *args) -> int:
    """Schedules a function to run once in the main loop at idle time.
    Returns the GLib source id."""

    def wrapper(*a):
        func(*a)
        return False

    return GLib.idle_add(wrapper, *args)
