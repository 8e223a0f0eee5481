"""Exception handling module"""


class GameSyncError(Exception):
    """Base exception for gamesync related errors"""

    def __init__(self, message, *args, **kwarg):
        super().__init__(message, *args, **kwarg)
        self.message = message


class MisconfigurationError(GameSyncError):
    """Raised for incorrect configuration, like a missing config file or
    missing settings. This has subclasses that are less vague."""


class MissingConfigFileError(MisconfigurationError):
    """Raised when the configuration file does not exist."""

    def __init__(self, message=None, filename=None, *args, **kwarg):
        if not message and filename:
            message = "Config file not found: {}".format(filename)
        super().__init__(message, *args, **kwarg)
        self.filename = filename


class MissingSettingError(MisconfigurationError):
    """Raised when required keys are absent from the configuration."""

    def __init__(self, keys, *args, **kwarg):
        message = "Missing required config key(s): {}".format(", ".join(keys))
        super().__init__(message, *args, **kwarg)
        self.keys = list(keys)


class InvalidSettingError(MisconfigurationError):
    """Raised when a setting is present but its value can't be used."""

    def __init__(self, key, value, reason, *args, **kwarg):
        message = "Invalid value {!r} for '{}': {}".format(value, key, reason)
        super().__init__(message, *args, **kwarg)
        self.key = key
        self.value = value


class NoSavesFoundError(GameSyncError):
    """Raised when neither the local nor the cloud folder holds a save."""

    def __init__(self, message=None, *args, **kwarg):
        super().__init__(message or "No save files found in either folder", *args, **kwarg)


class ProcessWaitError(GameSyncError):
    """Raised when waiting on the game process timed out or was cancelled."""

    def __init__(self, message, process_name=None, *args, **kwarg):
        super().__init__(message, *args, **kwarg)
        self.process_name = process_name
