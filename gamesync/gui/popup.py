"""Status window shown while the game is running"""

import gi

gi.require_version("Gtk", "3.0")

from gi.repository import Gtk

from gamesync.util.jobs import AsyncCall
from gamesync.util.log import logger

DEFAULT_MESSAGE = "Cloud save sync is active.\nYour save will be synced when the game closes."


class StatusPopup(Gtk.Window):
    """Small always-on-top window with a static message"""

    def __init__(self, message=DEFAULT_MESSAGE, title="gamesync"):
        super().__init__(title=title)
        self.set_default_size(320, 80)
        self.set_border_width(18)
        self.set_resizable(False)
        self.set_deletable(False)
        self.set_keep_above(True)
        self.set_position(Gtk.WindowPosition.CENTER)
        # Closed by the caller only, once the game is gone
        self.connect("delete-event", lambda *_args: True)

        label = Gtk.Label(label=message)
        label.set_justify(Gtk.Justification.CENTER)
        self.add(label)


def wait_with_popup(func, message=DEFAULT_MESSAGE, cancel_event=None):
    """Show the status popup and run `func` on a worker thread while the
    GTK main loop keeps the window alive. The popup is closed once `func`
    returns; its result is returned and its exception re-raised.

    If the main loop ends before `func` is done (Ctrl-C), `cancel_event`
    is set so the worker stops waiting."""
    popup = StatusPopup(message)
    outcome = {}

    def on_done(result, error):
        outcome["result"] = result
        outcome["error"] = error
        popup.destroy()
        Gtk.main_quit()

    popup.show_all()
    logger.debug("Status popup shown")
    AsyncCall(func, on_done)
    try:
        Gtk.main()
    finally:
        if "result" not in outcome:
            if cancel_event:
                cancel_event.set()
            popup.destroy()
    logger.debug("Status popup closed")

    if outcome.get("error"):
        raise outcome["error"]
    return outcome.get("result")
