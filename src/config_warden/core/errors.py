"""Exception hierarchy for Config Warden."""


class ConfigWardenError(Exception):
    """Base class for all Config Warden errors."""


class PatternConfigError(ConfigWardenError):
    """The secret pattern configuration could not be read or validated."""
