"""Thin wrappers around the taskwarrior command line."""

import logging
import re
import subprocess
from typing import List

from .errors import TaskwarriorError
from .models import Task

logger = logging.getLogger(__name__)

TASK = "task"

ACTION_EDIT = "edit"
ACTION_COMPLETE = "done"
ACTION_DELETE = "del"
ACTION_VIEW = "info"

VERSION_RE = re.compile(r"^task (\S+)")
CREATED_RE = re.compile(r"^Created task (\d+)")

ID_REPORT = [
    "rc.report.all.columns:uuid,id",
    "rc.report.all.labels:UUID,id",
    "rc.report.all.sort:id-",
    "all",
    "status:pending",
    "rc._forcecolor=no",
]


def run_task(args: List[str], capture_output: bool = False) -> subprocess.CompletedProcess:
    """Run the task binary with args."""
    cmd = [TASK, *args]
    logger.debug("running: %s", " ".join(cmd))
    try:
        return subprocess.run(cmd, capture_output=capture_output, text=True, check=False)
    except OSError as exc:
        raise TaskwarriorError(f"could not run {TASK}: {exc}") from exc


def is_legacy(version: str) -> bool:
    """Taskwarrior 1.x addresses tasks by id and exports with export.json."""
    return bool(version) and version[0] < "2"


def task_version() -> str:
    """Return the installed taskwarrior version, or '' if unknown."""
    result = run_task(["version", "rc._forcecolor=no"], capture_output=True)
    for line in result.stdout.splitlines():
        m = VERSION_RE.match(line)
        if m:
            logger.debug("task version: %s", m.group(1))
            return m.group(1)
    return ""


def export_lines(version: str) -> List[str]:
    """Export pending tasks; returns the raw output lines."""
    command = "export.json" if is_legacy(version) else "export"
    result = run_task([command, "status:pending"], capture_output=True)
    if result.returncode != 0:
        raise TaskwarriorError(f"task {command} failed: {result.stderr.strip()}")
    return result.stdout.splitlines(keepends=True)


def get_task_id(uuid: str) -> int:
    """Look up the numeric id of a task by uuid (taskwarrior 1.x)."""
    result = run_task(ID_REPORT, capture_output=True)
    for line in result.stdout.splitlines():
        parts = line.split()
        if len(parts) >= 2 and parts[0] == uuid and parts[1].isdigit():
            return int(parts[1])
    return 0


def task_action(task: Task, action: str, version: str) -> int:
    """Run edit/done/del/info on task; return the exit status."""
    if is_legacy(version):
        task_id = get_task_id(task.uuid)
        if task_id == 0:
            logger.error("no task id found for %s", task.uuid)
            return -1
        args = [action, str(task_id)]
    else:
        args = [task.uuid, action]
    print(" ".join([TASK, *args]))
    ret = run_task(args).returncode
    if action == ACTION_VIEW:
        input("press ENTER to return")
    return ret


def task_add(version: str) -> int:
    """Add a placeholder task and open it in the editor."""
    print(f"{TASK} add new task")
    result = run_task(["add", "new task"], capture_output=True)
    task_num = None
    for line in result.stdout.splitlines():
        m = CREATED_RE.match(line)
        if m:
            task_num = m.group(1)
            break
    if task_num is None:
        logger.error("task add did not report a task number")
        return result.returncode or 1
    args = ["edit", task_num] if is_legacy(version) else [task_num, "edit"]
    print(" ".join([TASK, *args]))
    return run_task(args).returncode


def task_undo() -> int:
    return run_task(["undo"]).returncode


def task_sync() -> int:
    """Merge from and push to the configured remote."""
    ret = subprocess.run(f"yes n | {TASK} merge", shell=True, check=False).returncode
    if ret == 0:
        ret = run_task(["push"]).returncode
    return ret
