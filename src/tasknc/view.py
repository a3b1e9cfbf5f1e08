"""Selection and pagination state for the task list view."""

import logging
from dataclasses import dataclass
from typing import Iterator, Tuple

from .models import Task
from .tasklist import TaskList

logger = logging.getLogger(__name__)


@dataclass
class ViewState:
    """Selected line and page offset, both counted in visible tasks.

    viewport_height is the number of task rows the screen can show.
    """

    selected_line: int = 0
    page_offset: int = 0
    viewport_height: int = 1

    def clamp(self, visible_count: int) -> None:
        """Bring the selection into range and keep it on screen."""
        if visible_count <= 0:
            self.selected_line = 0
            self.page_offset = 0
            return
        self.selected_line = max(0, min(self.selected_line, visible_count - 1))
        height = max(1, self.viewport_height)
        if self.selected_line < self.page_offset:
            self.page_offset = self.selected_line
        elif self.selected_line >= self.page_offset + height:
            self.page_offset = self.selected_line - height + 1
        logger.debug(
            "selline:%d offset:%d taskcount:%d perscreen:%d",
            self.selected_line,
            self.page_offset,
            visible_count,
            height,
        )

    def scroll(self, delta: int, visible_count: int) -> None:
        self.selected_line += delta
        self.clamp(visible_count)

    def jump_first(self, visible_count: int) -> None:
        self.selected_line = 0
        self.clamp(visible_count)

    def jump_last(self, visible_count: int) -> None:
        self.selected_line = visible_count - 1
        self.clamp(visible_count)

    def resize(self, viewport_height: int, visible_count: int) -> None:
        self.viewport_height = max(1, viewport_height)
        self.clamp(visible_count)

    def rows(self, tasks: TaskList) -> Iterator[Tuple[Task, bool]]:
        """Yield (task, is_selected) for each visible task in the viewport."""
        end = self.page_offset + self.viewport_height
        for i, task in enumerate(tasks.visible()):
            if i >= end:
                break
            if i >= self.page_offset:
                yield task, i == self.selected_line
