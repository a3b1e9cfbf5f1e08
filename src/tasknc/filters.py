"""Filter chain: marks tasks visible or hidden."""

import logging
from typing import Iterator, Optional

from .core import match_string, task_match
from .models import (
    FILTER_CLEAR,
    FILTER_DESCRIPTION,
    FILTER_PROJECT,
    FILTER_TAGS,
    Filter,
    Task,
)
from .tasklist import TaskList

logger = logging.getLogger(__name__)


def filter_match(task: Task, flt: Filter) -> bool:
    """Evaluate a single (non-clear) filter against task."""
    if flt.mode == FILTER_DESCRIPTION:
        return match_string(task.description, flt.pattern)
    if flt.mode == FILTER_TAGS:
        return match_string(task.tags, flt.pattern)
    if flt.mode == FILTER_PROJECT:
        return match_string(task.project, flt.pattern)
    return task_match(task, flt.pattern)


class FilterChain:
    """The active filters and the policy for retaining new ones.

    With persist on, a new filter only looks at tasks that are still visible,
    so successive filters AND together. With cascade on, every retained filter
    is appended to the chain; otherwise the chain holds just the latest one.
    """

    def __init__(self, tasks: TaskList, persist: bool = True, cascade: bool = True):
        self.tasks = tasks
        self.persist = persist
        self.cascade = cascade
        self.head: Optional[Filter] = None
        self.visible_count = tasks.count_visible()
        self.total_count = tasks.count_total()

    def __iter__(self) -> Iterator[Filter]:
        seen = set()
        cur = self.head
        while cur is not None:
            if id(cur) in seen:
                logger.error("circularly linked task filters")
                return
            seen.add(id(cur))
            yield cur
            cur = cur.next

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def clear_chain(self) -> None:
        """Drop every retained filter."""
        for flt in list(self):
            flt.next = None
        self.head = None

    def apply(self, flt: Filter) -> int:
        """Recompute visibility for flt in one pass; return the visible count."""
        skip_hidden = self.persist and flt.mode != FILTER_CLEAR
        if flt.mode == FILTER_CLEAR:
            self.clear_chain()

        visible = total = 0
        for task in self.tasks:
            total += 1
            if skip_hidden and not task.visible:
                continue
            if flt.mode == FILTER_CLEAR:
                task.visible = True
            else:
                task.visible = filter_match(task, flt)
            visible += task.visible

        self.visible_count = visible
        self.total_count = total
        logger.debug("filter mode %d (%s): %d/%d visible", flt.mode, flt.pattern, visible, total)
        return visible

    def add(self, flt: Filter) -> int:
        """Apply flt, then retain it in the chain according to the policy."""
        visible = self.apply(flt)
        if not self.persist or flt.mode == FILTER_CLEAR:
            return visible

        flt.next = None
        if self.cascade and self.head is not None:
            chain = list(self)
            logger.debug("%d filter position (%s)", len(chain) + 1, flt.pattern)
            chain[-1].next = flt
        else:
            self.head = flt
        return visible

    def reapply(self) -> int:
        """Apply every retained filter in chain order (after a reload)."""
        self.visible_count = self.tasks.count_visible()
        self.total_count = self.tasks.count_total()
        for flt in list(self):
            self.apply(flt)
        return self.visible_count

    def reset(self) -> int:
        """Show everything and forget the chain."""
        return self.apply(Filter(FILTER_CLEAR))

    def rebind(self, tasks: TaskList) -> None:
        """Point the chain at a freshly loaded list."""
        self.tasks = tasks
        self.visible_count = tasks.count_visible()
        self.total_count = tasks.count_total()

