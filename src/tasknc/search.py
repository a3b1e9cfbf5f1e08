"""Incremental search over the visible tasks."""

import logging
from typing import Optional

from .core import task_match
from .models import Task
from .tasklist import TaskList

logger = logging.getLogger(__name__)


def find_next(tasks: TaskList, pattern: str, start: Optional[Task]) -> Optional[Task]:
    """Return the next visible task after start matching pattern, or None.

    The walk follows list order and wraps from the tail back to the head.
    Arriving back at start ends the search; start itself is never a hit.
    Without a start task the whole list is searched once from the head.
    """
    if start is None:
        for task in tasks.visible():
            if task_match(task, pattern):
                return task
        return None

    cur = start
    while True:
        cur = cur.next
        if cur is None:
            logger.debug("search wrapped")
            cur = tasks.head
        if cur is start:
            return None
        if cur.visible and task_match(cur, pattern):
            return cur
