"""Parsing of taskwarrior's export output into Task records."""

import datetime as dt
import logging
from typing import Iterable, Iterator, Optional

from .errors import ExportError
from .models import DATE_FORMAT, Task
from .tasklist import TaskList

logger = logging.getLogger(__name__)

VERBOSE = 5

DATE_FIELDS = ("due", "entry", "start", "end")


def parse_date(value: str) -> int:
    """Convert a taskwarrior timestamp (20120110T231200Z) to epoch seconds."""
    when = dt.datetime.strptime(value.strip(), DATE_FORMAT)
    return int(when.timestamp())


def remove_escapes(line: str) -> str:
    return line.replace("\\", "")


def iter_records(stream: Iterable[str]) -> Iterator[str]:
    """Reassemble logical export records from physical lines.

    A value holding a literal newline spreads one record over several lines,
    so lines are joined until the buffer ends with the closing brace.
    """
    buf = ""
    for raw in stream:
        buf += raw
        record = buf.strip()
        if record in ("", "[", "]"):
            buf = ""
            continue
        if record.startswith("[{"):
            record = record[1:]
        if record.endswith("}]"):
            record = record[:-1]
        record = record.rstrip(",")
        if not record.endswith("}"):
            continue
        buf = ""
        yield remove_escapes(record)
    if buf.strip():
        logger.warning("unterminated export record: %s", buf.strip())
        yield remove_escapes(buf.strip())


def parse_task(line: str) -> Optional[Task]:
    """Parse one export record; return None if fewer than 2 fields were read."""
    task = Task()
    tokens = line.split(",")
    fields = 0
    pos = 0

    while pos < len(tokens):
        token = tokens[pos].lstrip()
        pos += 1

        if token.startswith("{"):
            token = token[1:]
        if token.startswith('"'):
            token = token[1:]
        divider = token.find(":")
        if divider < 0:
            break
        fields += 1
        name = token[:divider].rstrip().rstrip('"')
        value = token[divider + 1 :].lstrip()

        if name == "id":
            continue

        if value.startswith("["):
            endchar = "]"
            value = value[1:]
        elif value.startswith('"'):
            endchar = '"'
            value = value[1:]
        else:
            endchar = None
            value = value.rstrip().rstrip("}")

        if endchar is not None:
            # the value held commas: glue the following tokens back on
            while endchar not in value and pos < len(tokens):
                value += "," + tokens[pos]
                pos += 1
            end = value.find(endchar)
            if end >= 0:
                value = value[:end]
            else:
                logger.warning("unterminated value for field %s", name)

        logger.log(VERBOSE, "field: %s; content: %s", name, value)

        if name == "uuid":
            task.uuid = value
        elif name == "project":
            task.project = value
        elif name == "description":
            task.description = value
        elif name == "tags":
            task.tags = value.replace('"', "")
        elif name == "priority":
            task.priority = value[:1] or None
        elif name in DATE_FIELDS:
            try:
                setattr(task, name, parse_date(value))
            except ValueError:
                logger.warning("could not parse %s date: %s", name, value)

    if fields < 2:
        return None
    return task


def build_task_list(records: Iterable[str]) -> TaskList:
    """Build a TaskList from logical export records.

    Unparseable records are dropped. A record without a uuid or description,
    or an export with no usable records, fails the whole load with ExportError.
    """
    tasks = TaskList()
    for record in records:
        logger.log(VERBOSE, "%s", record)
        task = parse_task(record)
        if task is None:
            logger.warning("dropping unparseable record: %s", record)
            continue
        if task.uuid is None or task.description is None:
            raise ExportError(f"record without uuid or description: {record}")
        tasks.append(task)
        logger.log(VERBOSE, "uuid: %s", task.uuid)
        logger.log(VERBOSE, "description: %s", task.description)
        logger.log(VERBOSE, "project: %s", task.project)
        logger.log(VERBOSE, "tags: %s", task.tags)
    if len(tasks) == 0:
        raise ExportError("export held no usable records")
    return tasks


def read_export(stream: Iterable[str]) -> TaskList:
    """Parse a whole export stream (one record per logical line)."""
    return build_task_list(iter_records(stream))
