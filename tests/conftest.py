"""Shared helpers for the tasknc tests."""

import pytest

from tasknc.models import Task
from tasknc.tasklist import TaskList


def make_list(*tasks):
    """Link tasks into a TaskList in the given order."""
    tasks_list = TaskList()
    for task in tasks:
        tasks_list.append(task)
    return tasks_list


def ids(tasks_list):
    return [t.id for t in tasks_list]


def export_record(**fields):
    """Render fields the way taskwarrior's export writes them."""
    parts = []
    for name, value in fields.items():
        if isinstance(value, list):
            inner = ",".join(f'"{v}"' for v in value)
            parts.append(f'"{name}":[{inner}]')
        elif isinstance(value, (int, float)):
            parts.append(f'"{name}":{value}')
        else:
            parts.append(f'"{name}":"{value}"')
    return "{" + ",".join(parts) + "}"


@pytest.fixture
def sample_tasks():
    """Five tasks with a mix of projects, tags, priorities and due dates."""
    return make_list(
        Task(uuid="u0", description="fix x handle", project="A", tags="home", due=100),
        Task(uuid="u1", description="x-ray appointment", project="B", priority="H"),
        Task(uuid="u2", description="write report", project="A", priority="L", due=50),
        Task(uuid="u3", description="pack box", project="A", tags="move,home"),
        Task(uuid="u4", description="call mom", tags="phone", priority="M"),
    )
