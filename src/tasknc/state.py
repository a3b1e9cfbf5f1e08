"""Application state shared by the event loop and the renderer."""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from . import __version__
from .config import Config
from .core import sort_list
from .errors import ConfigError, ExportError, TaskwarriorError
from .export import read_export
from .filters import FilterChain
from .models import AUTHOR, FILTER_CLEAR, FILTER_KEYS, NAME, SHORTNAME, SORT_MODES, Filter, Task
from .search import find_next
from .tasklist import TaskList
from .view import ViewState

logger = logging.getLogger(__name__)


@dataclass
class StatusBar:
    """Last status message and when it should be cleared (0 = never)."""

    message: str = ""
    expires: float = 0.0

    def set(self, message: str, timeout: int, now: Optional[float] = None) -> None:
        now = time.time() if now is None else now
        self.message = message
        self.expires = now + timeout if timeout >= 0 else 0.0

    def expire(self, now: Optional[float] = None) -> bool:
        """Clear the message if its time is up; True if it was cleared."""
        now = time.time() if now is None else now
        if self.expires and self.expires < now:
            self.message = ""
            self.expires = 0.0
            return True
        return False


@dataclass
class CommandResult:
    reload: bool = False
    redraw: bool = False
    done: bool = False


class AppState:
    """Task list, filters, view and search state for one session.

    loader returns the raw export lines; it is called on every reload.
    """

    def __init__(
        self,
        tasks: TaskList,
        config: Optional[Config] = None,
        loader: Optional[Callable[[], Iterable[str]]] = None,
    ):
        self.config = config or Config()
        self.tasks = tasks
        self.loader = loader
        self.filters = FilterChain(tasks, self.config.filter_persist, self.config.filter_cascade)
        self.view = ViewState()
        self.search_pattern: Optional[str] = None
        self.status = StatusBar()
        self.sort()

    @property
    def visible_count(self) -> int:
        return self.filters.visible_count

    @property
    def total_count(self) -> int:
        return self.filters.total_count

    def message(self, text: str, timeout: Optional[int] = None) -> None:
        if timeout is None:
            timeout = self.config.statusbar_timeout
        self.status.set(text, timeout)

    def title(self) -> str:
        return f"{SHORTNAME} v{__version__}  ({self.visible_count}/{self.total_count})"

    def selected_task(self) -> Optional[Task]:
        if self.visible_count == 0:
            return None
        return self.tasks.nth_visible(self.view.selected_line)

    # sorting

    def sort(self) -> int:
        swaps = sort_list(self.tasks, self.config.sortmode)
        logger.debug("sorted by %s (%d swaps)", self.config.sortmode, swaps)
        return swaps

    def sort_by_key(self, key: str) -> bool:
        """Switch sort mode from a key press (n/p/d/r, any case) and re-sort."""
        mode = key.lower()
        if len(mode) != 1 or mode not in SORT_MODES:
            self.message("invalid sort mode")
            return False
        self.config.sortmode = mode
        self.sort()
        return True

    # filtering

    def apply_filter(self, flt: Filter) -> int:
        """Apply and retain flt; reset if it leaves nothing visible."""
        visible = self.filters.add(flt)
        if visible == 0:
            self.filters.reset()
            self.message("filter yielded no results; reset")
        else:
            self.message("filter applied")
        self.view.clamp(self.visible_count)
        return self.visible_count

    def filter_by_key(self, key: str, pattern: Optional[str] = None) -> bool:
        """Build a filter from a mode key (a/c/d/p/t, any case) and apply it."""
        mode = FILTER_KEYS.get(key.lower()) if len(key) == 1 else None
        if mode is None:
            self.message("invalid filter mode")
            return False
        if mode == FILTER_CLEAR:
            self.apply_filter(Filter(FILTER_CLEAR))
        else:
            self.apply_filter(Filter(mode, pattern or ""))
        return True

    # searching

    def search(self, pattern: Optional[str]) -> bool:
        """Set the search pattern and jump to its first match."""
        self.search_pattern = pattern or None
        return self.search_next()

    def search_next(self) -> bool:
        if not self.search_pattern:
            self.message("no active search string")
            return False
        hit = find_next(self.tasks, self.search_pattern, self.selected_task())
        if hit is None:
            self.message(f"no matches: {self.search_pattern}")
            return False
        self.view.selected_line = self.tasks.visible_index(hit)
        self.view.clamp(self.visible_count)
        return True

    # movement

    def scroll(self, delta: int) -> None:
        self.view.scroll(delta, self.visible_count)

    def jump_first(self) -> None:
        self.view.jump_first(self.visible_count)

    def jump_last(self) -> None:
        self.view.jump_last(self.visible_count)

    # reload

    def reload(self, lines: Optional[Iterable[str]] = None) -> bool:
        """Rebuild the list, re-apply the filter chain, then re-sort.

        On failure the current list is kept and the error is reported.
        """
        logger.debug("reloading tasks")
        try:
            if lines is None:
                if self.loader is None:
                    raise TaskwarriorError("no task source configured")
                lines = self.loader()
            tasks = read_export(lines)
        except (ExportError, TaskwarriorError) as exc:
            logger.error("reload failed: %s", exc)
            self.message(f"reload failed: {exc}")
            return False

        self.tasks.remove_all()
        self.tasks = tasks
        self.filters.rebind(tasks)
        self.filters.reapply()
        self.sort()
        self.view.clamp(self.visible_count)
        return True

    # ':' command line

    def handle_command(self, cmdstr: str) -> CommandResult:
        """Run a ':' command (version, quit, reload, redraw, set, show)."""
        result = CommandResult()
        logger.debug("command received: %s", cmdstr)
        args = cmdstr.split()
        if not args:
            return result
        cmd, args = args[0], args[1:]

        if cmd == "version":
            self.message(f"{NAME} v{__version__} by {AUTHOR}")
        elif cmd in ("quit", "exit"):
            result.done = True
        elif cmd == "reload":
            result.reload = True
            self.message("task list reloaded")
        elif cmd == "redraw":
            result.redraw = True
        elif cmd == "set":
            if len(args) < 2:
                self.message("usage: set <variable> <value>")
                return result
            self._set_variable(args[0], " ".join(args[1:]), result)
        elif cmd == "show":
            if not args:
                self.message("usage: show <variable>")
                return result
            self._show_variable(args[0])
        else:
            self.message(f"error: command {cmd} not found")
            logger.error("error: command %s not found", cmd)
        return result

    def _set_variable(self, name: str, value: str, result: CommandResult) -> None:
        if name == "searchstring":
            self.search_pattern = value
            self.message(f"{name}: {value}")
            return
        try:
            self.config.set(name, value)
        except ConfigError as exc:
            self.message(str(exc))
            return
        if name == "sortmode":
            self.sort()
            result.redraw = True
        elif name == "filter_persist":
            self.filters.persist = self.config.filter_persist
        elif name == "filter_cascade":
            self.filters.cascade = self.config.filter_cascade
        elif name == "loglvl":
            from .cli import set_log_level

            set_log_level(self.config.loglvl)
        self.message(f"{name}: {self.config.show(name)}")

    def _show_variable(self, name: str) -> None:
        if name == "searchstring":
            self.message(f"{name}: {self.search_pattern}")
            return
        try:
            self.message(f"{name}: {self.config.show(name)}")
        except ConfigError as exc:
            self.message(str(exc))
