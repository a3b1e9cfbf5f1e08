"""tasknc curses-based terminal user interface."""

import curses
import curses.ascii as ascii
import curses.textpad
import datetime as dt
import logging
from typing import Callable, Optional

from .config import Config
from .errors import TaskwarriorError
from .models import DATELENGTH
from .state import AppState
from .tasklist import TaskList
from .taskwarrior import (
    ACTION_COMPLETE,
    ACTION_DELETE,
    ACTION_EDIT,
    ACTION_VIEW,
    export_lines,
    task_action,
    task_add,
    task_sync,
    task_undo,
)

logger = logging.getLogger(__name__)

KEY_ESC = 27


def pad(text: str, width: int, align: str = "l") -> str:
    """Cut text to width (marking the cut with ...) and pad with spaces."""
    if width <= 0:
        return ""
    if len(text) > width:
        text = text[: max(width - 3, 0)] + "..." if width > 3 else text[:width]
    return text.ljust(width) if align == "l" else text.rjust(width)


class TUI:
    """Curses front end for an AppState."""

    def __init__(self, stdscr, state: AppState):
        self.stdscr = stdscr
        self.state = state
        self.height, self.width = self.stdscr.getmaxyx()
        self.setup()

    def setup(self):
        curses.curs_set(0)
        curses.nonl()
        curses.cbreak()
        curses.noecho()
        self.stdscr.keypad(True)
        self.stdscr.timeout(self.state.config.nc_timeout)

        self.has_colors = curses.has_colors()
        if self.has_colors:
            curses.start_color()
            try:
                curses.use_default_colors()
            except curses.error:
                pass
            curses.init_pair(1, curses.COLOR_BLUE, curses.COLOR_BLACK)
            curses.init_pair(2, curses.COLOR_GREEN, -1)
            curses.init_pair(3, curses.COLOR_CYAN, -1)
            curses.init_pair(4, curses.COLOR_YELLOW, -1)
            curses.init_pair(5, curses.COLOR_BLACK, curses.COLOR_GREEN)
            curses.init_pair(6, curses.COLOR_BLACK, curses.COLOR_CYAN)
            curses.init_pair(7, curses.COLOR_BLACK, curses.COLOR_YELLOW)
            curses.init_pair(8, curses.COLOR_RED, -1)
            self.COL_TITLE = curses.color_pair(1)
            self.COL_PROJECT = (curses.color_pair(2), curses.color_pair(5))
            self.COL_DESC = (curses.color_pair(3), curses.color_pair(6))
            self.COL_DATE = (curses.color_pair(4), curses.color_pair(7))
            self.COL_ERROR = curses.color_pair(8)
        else:
            self.COL_TITLE = curses.A_BOLD
            self.COL_PROJECT = (curses.A_NORMAL, curses.A_REVERSE)
            self.COL_DESC = (curses.A_NORMAL, curses.A_REVERSE)
            self.COL_DATE = (curses.A_NORMAL, curses.A_REVERSE)
            self.COL_ERROR = curses.A_BOLD

    def addstr(self, y: int, x: int, text: str, attrs: int = curses.A_NORMAL):
        try:
            self.stdscr.addnstr(y, x, text, max(self.width - x - 1, 0), attrs)
        except curses.error:
            pass

    def screen_too_small(self) -> bool:
        projlen = self.state.tasks.max_project_length()
        return self.width < DATELENGTH + 20 + projlen or self.height < 5

    def check_screen_size(self):
        """Block until the terminal is large enough to draw the list."""
        self.height, self.width = self.stdscr.getmaxyx()
        while self.screen_too_small():
            self.stdscr.erase()
            self.addstr(0, 0, "screen dimensions too small", self.COL_ERROR)
            self.stdscr.refresh()
            curses.napms(100)
            self.height, self.width = self.stdscr.getmaxyx()
        self.state.view.resize(self.height - 2, self.state.visible_count)

    def draw(self):
        """Render title bar, task rows and status bar."""
        self.stdscr.erase()
        state = self.state

        today = dt.date.today()
        self.addstr(0, 0, pad(state.title(), self.width), self.COL_TITLE)
        self.addstr(0, self.width - DATELENGTH - 1, today.strftime("%b %d").rjust(DATELENGTH), self.COL_TITLE)

        projlen = state.tasks.max_project_length()
        desclen = self.width - projlen - 1 - DATELENGTH
        for row, (task, sel) in enumerate(state.view.rows(state.tasks), start=1):
            self.addstr(row, 0, pad(task.project or "", projlen - 1) + " ", self.COL_PROJECT[sel])
            self.addstr(row, projlen, pad(task.description or "", desclen) + " ", self.COL_DESC[sel])
            self.addstr(row, projlen + desclen + 1, pad(task.due_display(today), DATELENGTH, "r"), self.COL_DATE[sel])

        self.addstr(self.height - 1, 0, state.status.message)
        self.stdscr.refresh()

    def prompt(self, prompt: str) -> Optional[str]:
        """Inline text input on the status line (Enter submits, ESC cancels)."""
        curses.curs_set(1)
        self.addstr(self.height - 1, 0, pad(prompt, self.width - 1))
        self.stdscr.refresh()
        edit = curses.newwin(1, max(self.width - len(prompt) - 1, 1), self.height - 1, len(prompt))
        edit.keypad(True)
        tb = curses.textpad.Textbox(edit, insert_mode=True)

        cancelled = {"value": False}

        def validator(ch: int) -> int:
            if ch in (10, 13):
                return ascii.BEL
            if ch == KEY_ESC:
                cancelled["value"] = True
                return ascii.BEL
            if ch in (curses.KEY_BACKSPACE, 127, 8):
                return ascii.BS
            return ch

        s = tb.edit(validator)
        curses.curs_set(0)
        if cancelled["value"]:
            return None
        return (s or "").strip()

    def prompt_key(self, prompt: str) -> str:
        """Show prompt and wait (without timeout) for a single key."""
        self.addstr(self.height - 1, 0, pad(prompt, self.width - 1))
        self.stdscr.refresh()
        self.stdscr.timeout(-1)
        ch = self.stdscr.getch()
        self.stdscr.timeout(self.state.config.nc_timeout)
        return chr(ch) if 0 <= ch < 256 else ""

    def run_external(self, fn: Callable[[], int], ok: str, fail: str) -> int:
        """Hand the terminal back to the shell while fn runs a task command."""
        curses.def_prog_mode()
        curses.endwin()
        try:
            ret = fn()
        except TaskwarriorError as exc:
            logger.error("%s", exc)
            ret = -1
        finally:
            curses.reset_prog_mode()
        self.stdscr.refresh()
        self.state.message(ok if ret == 0 else fail)
        return ret

    def task_action(self, action: str, ok: str, fail: str) -> bool:
        """Run action on the selected task; True if a reload is due."""
        task = self.state.selected_task()
        if task is None:
            self.state.message("no task selected")
            return False
        self.run_external(lambda: task_action(task, action, self.state.config.version), ok, fail)
        return action != ACTION_VIEW

    def key_filter(self):
        key = self.prompt_key("filter by: Any Clear Proj Desc Tag")
        pattern = None
        if key and key.lower() in "adpt":
            pattern = self.prompt("filter string: ")
            if pattern is None:
                self.state.message("filter cancelled")
                return
        self.state.filter_by_key(key, pattern)

    def key_sort(self):
        key = self.prompt_key("enter sort mode: iNdex, Project, Due, pRiority")
        self.state.sort_by_key(key)

    def key_search(self):
        pattern = self.prompt("search phrase: ")
        if pattern is not None:
            self.state.search(pattern)

    def key_command(self) -> bool:
        """Read and run a ':' command; True when the program should quit."""
        cmdstr = self.prompt(":")
        if not cmdstr:
            return False
        result = self.state.handle_command(cmdstr)
        self.stdscr.timeout(self.state.config.nc_timeout)
        if result.reload:
            self.state.reload()
        return result.done

    def handle_key(self, ch: int) -> bool:
        """Dispatch one key press; returns True to quit."""
        state = self.state
        reload = False

        if ch in (curses.KEY_UP, ord("k")):
            state.scroll(-1)
        elif ch in (curses.KEY_DOWN, ord("j")):
            state.scroll(+1)
        elif ch == curses.KEY_HOME:
            state.jump_first()
        elif ch == curses.KEY_END:
            state.jump_last()
        elif ch == ord("e"):
            reload = self.task_action(ACTION_EDIT, "task edited", "task edit failed")
        elif ch == ord("c"):
            reload = self.task_action(ACTION_COMPLETE, "task completed", "task complete failed")
        elif ch == ord("d"):
            reload = self.task_action(ACTION_DELETE, "task deleted", "task delete fail")
        elif ch in (ord("v"), curses.KEY_ENTER, 10, 13):
            self.task_action(ACTION_VIEW, "", "")
        elif ch == ord("a"):
            self.run_external(lambda: task_add(state.config.version), "task added", "task add failed")
            reload = True
        elif ch == ord("u"):
            self.run_external(task_undo, "undo executed", "undo execution failed")
            reload = True
        elif ch == ord("y"):
            self.run_external(task_sync, "tasks synchronized", "task syncronization failed")
            reload = True
        elif ch == ord("r"):
            reload = True
            state.message("task list reloaded")
        elif ch == ord("s"):
            self.key_sort()
        elif ch == ord("/"):
            self.key_search()
        elif ch == ord("n"):
            state.search_next()
        elif ch == ord("f"):
            self.key_filter()
        elif ch in (ord(":"), ord(";")):
            if self.key_command():
                return True
        elif ch == ord("q"):
            return True
        elif ch == -1:
            pass
        else:
            state.message(f"unhandled key: {chr(ch) if 0 <= ch < 256 else ch}")

        if reload:
            state.reload()
        return False

    def run(self):
        """Main event loop."""
        while True:
            self.check_screen_size()
            self.state.status.expire()
            self.draw()
            ch = self.stdscr.getch()
            if self.handle_key(ch):
                break


def start_curses(state: AppState):
    """Initialize curses and run TUI."""

    def _main(stdscr):
        tui = TUI(stdscr, state)
        tui.run()

    curses.wrapper(_main)


def main(tasks: TaskList, config: Config) -> None:
    """TUI entry point."""
    state = AppState(tasks, config, loader=lambda: export_lines(config.version))
    logger.debug("running gui")
    try:
        start_curses(state)
    except KeyboardInterrupt:
        print("aborted")
        logger.debug("received SIGINT, exiting")
        return
    print("done")
