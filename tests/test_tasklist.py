"""Tests for the linked task list."""

from tasknc.models import Task
from tasknc.tasklist import TaskList

from conftest import make_list


class TestTaskList:
    """Test linking, counting and visible-position helpers."""

    def test_append_links_and_numbers(self):
        tasks = make_list(Task(uuid="a"), Task(uuid="b"), Task(uuid="c"))

        assert [t.id for t in tasks] == [0, 1, 2]
        assert tasks.head.uuid == "a"
        assert tasks.tail.uuid == "c"
        assert tasks.head.prev is None
        assert tasks.tail.next is None
        assert tasks.head.next.prev is tasks.head
        assert len(tasks) == 3

    def test_empty(self):
        tasks = TaskList()

        assert list(tasks) == []
        assert tasks.count_total() == 0
        assert tasks.count_visible() == 0
        assert tasks.nth_visible(0) is None

    def test_remove_all(self):
        tasks = make_list(Task(uuid="a"), Task(uuid="b"))
        first = tasks.head
        tasks.remove_all()

        assert tasks.head is None
        assert tasks.tail is None
        assert len(tasks) == 0
        assert first.next is None

    def test_visible_positions(self):
        tasks = make_list(Task(uuid="a"), Task(uuid="b", visible=False), Task(uuid="c"))
        hidden = tasks.head.next

        assert tasks.count_total() == 3
        assert tasks.count_visible() == 2
        assert tasks.nth_visible(1).uuid == "c"
        assert tasks.nth_visible(2) is None
        assert tasks.nth_visible(-1) is None
        assert tasks.visible_index(tasks.tail) == 1
        assert tasks.visible_index(hidden) is None

    def test_max_project_length(self):
        tasks = make_list(Task(project="home"), Task(), Task(project="ab"))

        assert tasks.max_project_length() == 5
        assert TaskList().max_project_length() == 1


def test_swap_exchanges_payload_not_links():
    tasks = make_list(
        Task(uuid="a", description="first", project="p", priority="H", due=10),
        Task(uuid="b", description="second", visible=False),
    )
    first, second = tasks.head, tasks.tail
    first.swap(second)

    assert tasks.head is first
    assert first.next is second
    assert (first.uuid, first.id, first.visible) == ("b", 1, False)
    assert (second.uuid, second.id, second.project, second.priority, second.due) == ("a", 0, "p", "H", 10)
