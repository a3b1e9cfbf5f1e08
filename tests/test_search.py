"""Tests for searching with wraparound."""

from tasknc.models import Task
from tasknc.search import find_next

from conftest import make_list


def build():
    return make_list(
        Task(uuid="u0", description="alpha"),
        Task(uuid="u1", description="beta"),
        Task(uuid="u2", description="alpha hidden", visible=False),
        Task(uuid="u3", description="gamma"),
        Task(uuid="u4", description="alpha again"),
    )


class TestFindNext:
    """Test find_next over the visible tasks."""

    def test_cycles_through_visible_matches(self):
        tasks = build()
        cur = tasks.head
        hits = []
        for _ in range(5):
            cur = find_next(tasks, "alpha", cur)
            hits.append(cur.uuid)

        assert hits == ["u4", "u0", "u4", "u0", "u4"]

    def test_starts_after_start(self):
        tasks = build()

        assert find_next(tasks, "alpha", tasks.head.next).uuid == "u4"

    def test_wraps_to_head(self):
        tasks = build()

        assert find_next(tasks, "beta", tasks.tail).uuid == "u1"

    def test_start_is_not_a_new_match(self):
        tasks = build()
        gamma = tasks.tail.prev

        assert find_next(tasks, "gamma", gamma) is None

    def test_no_matches(self):
        tasks = build()

        assert find_next(tasks, "delta", tasks.head) is None

    def test_hidden_tasks_are_skipped(self):
        tasks = build()

        assert find_next(tasks, "hidden", tasks.head) is None

    def test_without_start(self):
        tasks = build()

        assert find_next(tasks, "gamma", None).uuid == "u3"
        assert find_next(tasks, "hidden", None) is None
