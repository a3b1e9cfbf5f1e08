"""Data models and constants for tasknc."""

import datetime as dt
import os
from dataclasses import dataclass, field
from typing import Optional

NAME = "taskwarrior ncurses shell"
SHORTNAME = "tasknc"
AUTHOR = "mjheagle"

CONFIG_DIR = os.path.join(
    os.environ.get("XDG_CONFIG_HOME") or os.path.expanduser("~/.config"), "tasknc"
)
DEFAULT_CONFIG = os.path.join(CONFIG_DIR, "config")
DEFAULT_LOGFILE = os.path.expanduser("~/.local/share/tasknc/tasknc.log")

DATELENGTH = 10
DATE_FORMAT = "%Y%m%dT%H%M%S%z"

SORT_MODES = "npdr"
PRIORITY_RANK = {"H": 0, "M": 1, "L": 2}

# filter modes
FILTER_BY_STRING = 0
FILTER_CLEAR = 1
FILTER_DESCRIPTION = 2
FILTER_TAGS = 3
FILTER_PROJECT = 4

FILTER_KEYS = {
    "a": FILTER_BY_STRING,
    "c": FILTER_CLEAR,
    "d": FILTER_DESCRIPTION,
    "t": FILTER_TAGS,
    "p": FILTER_PROJECT,
}

# fields exchanged when two records trade places during a sort
PAYLOAD_FIELDS = (
    "id",
    "uuid",
    "tags",
    "start",
    "end",
    "entry",
    "due",
    "project",
    "priority",
    "description",
    "visible",
)


@dataclass(eq=False)
class Task:
    """A single pending task exported by taskwarrior.

    ``prev``/``next`` link the record into its TaskList. ``due`` and the other
    timestamps are epoch seconds, with 0 meaning "not set".
    """

    uuid: Optional[str] = None
    description: Optional[str] = None
    project: Optional[str] = None
    tags: Optional[str] = None
    priority: Optional[str] = None
    due: int = 0
    entry: int = 0
    start: int = 0
    end: int = 0
    id: int = 0
    visible: bool = True
    prev: Optional["Task"] = field(default=None, repr=False)
    next: Optional["Task"] = field(default=None, repr=False)

    def swap(self, other: "Task") -> None:
        """Exchange every payload field with other; links stay in place."""
        for name in PAYLOAD_FIELDS:
            mine = getattr(self, name)
            setattr(self, name, getattr(other, name))
            setattr(other, name, mine)

    def due_display(self, today: Optional[dt.date] = None) -> str:
        """Short date for the due column, or the priority if no due date."""
        if self.due:
            return format_date(self.due, today)
        if self.priority:
            return self.priority
        return ""


@dataclass(eq=False)
class Filter:
    """One filter in the active chain."""

    mode: int
    pattern: Optional[str] = None
    next: Optional["Filter"] = field(default=None, repr=False)


def format_date(timestamp: int, today: Optional[dt.date] = None) -> str:
    """Format an epoch timestamp as 'Mon DD' this year, ISO date otherwise."""
    today = today or dt.date.today()
    when = dt.datetime.fromtimestamp(timestamp)
    if when.year != today.year:
        return when.strftime("%Y-%m-%d")
    return when.strftime("%b %d")
