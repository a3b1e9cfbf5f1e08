"""tasknc - a curses shell around taskwarrior."""

__version__ = "0.5.0"

from .models import Task, Filter
from .tasklist import TaskList
from .export import parse_task, read_export
from .core import compare_tasks, sort_list, task_match
from .filters import FilterChain
from .search import find_next
from .view import ViewState

__all__ = [
    "Task",
    "Filter",
    "TaskList",
    "parse_task",
    "read_export",
    "compare_tasks",
    "sort_list",
    "task_match",
    "FilterChain",
    "find_next",
    "ViewState",
]
