"""Doubly linked list holding the loaded tasks."""

from typing import Iterator, Optional

from .models import Task


class TaskList:
    """Ordered, doubly linked collection of Task records.

    Sorting exchanges record payloads rather than relinking nodes, so the
    node sitting at a given position never changes between rebuilds.
    """

    def __init__(self):
        self.head: Optional[Task] = None
        self.tail: Optional[Task] = None
        self._count = 0

    def __iter__(self) -> Iterator[Task]:
        cur = self.head
        while cur is not None:
            yield cur
            cur = cur.next

    def __len__(self) -> int:
        return self._count

    def append(self, task: Task) -> Task:
        """Link task at the tail and number it by position."""
        task.id = self._count
        task.prev = self.tail
        task.next = None
        if self.tail is None:
            self.head = task
        else:
            self.tail.next = task
        self.tail = task
        self._count += 1
        return task

    def remove_all(self) -> None:
        """Unlink every record."""
        cur = self.head
        while cur is not None:
            nxt = cur.next
            cur.prev = cur.next = None
            cur = nxt
        self.head = self.tail = None
        self._count = 0

    def count_total(self) -> int:
        return sum(1 for _ in self)

    def count_visible(self) -> int:
        return sum(1 for t in self if t.visible)

    def visible(self) -> Iterator[Task]:
        """Iterate over visible records in list order."""
        return (t for t in self if t.visible)

    def nth_visible(self, n: int) -> Optional[Task]:
        """Return the record at visible position n (0-based), or None."""
        if n < 0:
            return None
        for i, task in enumerate(self.visible()):
            if i == n:
                return task
        return None

    def visible_index(self, task: Task) -> Optional[int]:
        """Return the visible position of task, or None if it is hidden."""
        for i, cur in enumerate(self.visible()):
            if cur is task:
                return i
        return None

    def max_project_length(self) -> int:
        """Width of the project column (longest project plus one)."""
        return max((len(t.project) for t in self if t.project), default=0) + 1
