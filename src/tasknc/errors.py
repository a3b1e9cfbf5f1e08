"""Exceptions raised by tasknc."""


class TaskncError(Exception):
    """Base class for tasknc errors."""


class ExportError(TaskncError):
    """The task export held no usable task data."""


class ConfigError(TaskncError):
    """A configuration option could not be parsed."""


class TaskwarriorError(TaskncError):
    """Running the task binary failed."""
