"""tasknc list algorithms: matching and sorting (pure functions, no I/O)."""

import re
from typing import Optional

from .models import PRIORITY_RANK, Task
from .tasklist import TaskList


def match_string(haystack: Optional[str], needle: str) -> bool:
    """Case-insensitive regex search; a missing haystack or bad pattern never matches."""
    if haystack is None:
        return False
    try:
        return re.search(needle, haystack, re.IGNORECASE) is not None
    except re.error:
        return False


def task_match(task: Task, pattern: str) -> bool:
    """True if the project, description or tags of task match pattern."""
    return (
        match_string(task.project, pattern)
        or match_string(task.description, pattern)
        or match_string(task.tags, pattern)
    )


def compare_tasks(a: Task, b: Task, mode: str) -> bool:
    """Return True if a sorts before b under sort mode.

    n: index.  p: project => index.  d: due => priority => project => index.
    r: priority => project => index.  Records missing the sort key go last.
    """
    if mode == "n":
        return a.id < b.id

    if mode == "d":
        if not a.due:
            return not b.due and compare_tasks(a, b, "r")
        if not b.due:
            return True
        if a.due == b.due:
            return compare_tasks(a, b, "r")
        return a.due < b.due

    if mode == "r":
        if not a.priority:
            return not b.priority and compare_tasks(a, b, "p")
        if not b.priority:
            return True
        ra = PRIORITY_RANK.get(a.priority, len(PRIORITY_RANK))
        rb = PRIORITY_RANK.get(b.priority, len(PRIORITY_RANK))
        if ra == rb:
            return compare_tasks(a, b, "p")
        return ra < rb

    # "p" and anything unrecognised
    if a.project is None:
        return b.project is None and compare_tasks(a, b, "n")
    if b.project is None:
        return True
    if a.project == b.project:
        return compare_tasks(a, b, "n")
    return a.project < b.project


def sort_tasks(first: Task, last: Task, mode: str) -> int:
    """Sort the run of records first..last in place; return the swap count.

    The left endpoint is the pivot. Records that belong before it are swapped
    into a growing prefix, then the pivot payload is swapped onto the last
    node of that prefix. Nodes never move, only payloads, so the neighbours
    of the pivot node bound the two sub-ranges. The smaller sub-range is
    sorted recursively and the larger one by looping.
    """
    swaps = 0
    while first is not last:
        boundary = first
        length, before = 1, 0
        cur = first
        while cur is not last:
            cur = cur.next
            length += 1
            if compare_tasks(cur, first, mode):
                boundary = boundary.next
                before += 1
                if boundary is not cur:
                    boundary.swap(cur)
                    swaps += 1
        if boundary is not first:
            first.swap(boundary)
            swaps += 1

        # a side is empty when the pivot landed on the range boundary
        after = length - before - 1
        ranges = []
        if before:
            ranges.append((before, first, boundary.prev))
        if after:
            ranges.append((after, boundary.next, last))
        if not ranges:
            break
        ranges.sort(key=lambda r: r[0])
        for _, lo, hi in ranges[:-1]:
            swaps += sort_tasks(lo, hi, mode)
        _, first, last = ranges[-1]
    return swaps


def sort_list(tasks: TaskList, mode: str) -> int:
    """Sort a whole TaskList by mode; return the number of payload swaps."""
    if tasks.head is None:
        return 0
    return sort_tasks(tasks.head, tasks.tail, mode)
