"""Class to inspect a running process"""

from gamesync.util.log import logger

# Process names from /proc only contain 15 characters
PROC_NAME_LENGTH = 15


class Process:
    """Python abstraction of a Linux process"""

    def __init__(self, pid):
        try:
            self.pid = int(pid)
        except ValueError as err:
            raise ValueError("'%s' is not a valid pid" % pid) from err

    def __repr__(self):
        return "Process {}".format(self.pid)

    def __str__(self):
        return "{} ({}:{})".format(self.name, self.pid, self.state)

    def get_stat(self, parsed=True):
        stat_filename = "/proc/{}/stat".format(self.pid)
        try:
            with open(stat_filename, encoding="utf-8", errors="replace") as stat_file:
                _stat = stat_file.readline()
        except (ProcessLookupError, FileNotFoundError):
            return None
        except PermissionError as ex:
            logger.debug(ex)
            return None
        if parsed:
            return _stat[_stat.rfind(")") + 1 :].split()
        return _stat

    @property
    def name(self):
        """Filename of the executable."""
        _stat = self.get_stat(parsed=False)
        if _stat:
            return _stat[_stat.find("(") + 1 : _stat.rfind(")")]
        return None

    @property
    def state(self):
        """One character from the string "RSDZTW" where R is running, S is
        sleeping in an interruptible wait, D is waiting in uninterruptible disk
        sleep, Z is zombie, T is traced or stopped (on a signal), and W is
        paging.
        """
        _stat = self.get_stat()
        if _stat:
            return _stat[0]
        return None

    @property
    def is_zombie(self):
        return self.state == "Z"


def process_names_for(name):
    """Return the names a process called `name` can show up as in /proc.
    Wine games keep their .exe suffix in the process name."""
    name = name.strip()
    names = {name[0:PROC_NAME_LENGTH]}
    if not name.lower().endswith(".exe"):
        names.add((name + ".exe")[0:PROC_NAME_LENGTH])
    return names
