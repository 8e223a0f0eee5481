"""System utilities"""

import os
import subprocess

from gamesync.util.log import logger
from gamesync.util.process import Process, process_names_for


def spawn(command):
    """
    Execute a system command but discard its results and do not wait
    for it to complete.

    Params:
        command (list): A list containing an executable and its parameters

    Returns:
        bool: whether the command could be started
    """
    if not command:
        logger.error("No executable provided!")
        return False

    logger.debug("Spawning %s", " ".join([str(i) for i in command]))

    try:
        subprocess.Popen(  # pylint: disable=consider-using-with
            command,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except (OSError, TypeError) as ex:
        logger.error("Could not run command %s: %s", command, ex)
        return False
    return True


def get_running_pid_list():
    """Return the list of PIDs from processes currently running"""
    return [int(p) for p in os.listdir("/proc") if p[0].isdigit()]


def is_process_running(name):
    """Return whether a live (non zombie) process called `name` exists"""
    names = process_names_for(name)
    for pid in get_running_pid_list():
        process = Process(pid)
        if process.name in names and not process.is_zombie:
            return True
    return False
