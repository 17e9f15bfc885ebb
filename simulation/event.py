"""
Event - the ordered chain of remaining steps for one logical order.

Each step pairs a Task with the ITaskRecipient that must handle it. The event
driver pops the front step on every dispatch; handlers grow the chain at the
front when they expand a compound task into primitive ones.
"""
import itertools
from collections import deque
from typing import Deque, Iterable, Optional, Tuple

from interfaces.task_scheduler_interface import ITaskRecipient, Task


TaskStep = Tuple[Task, ITaskRecipient]

_event_ids = itertools.count(1)


class Event:
    """Task chain for one order, consumed front to back."""

    def __init__(self, label: str = ""):
        self.event_id = next(_event_ids)
        self.label = label or f"event-{self.event_id}"
        self._steps: Deque[TaskStep] = deque()

    def prepend_task(self, task: Task, recipient: ITaskRecipient) -> None:
        """Insert a single step at the front of the chain."""
        self._steps.appendleft((task, recipient))

    def prepend_tasks(self, steps: Iterable[TaskStep]) -> None:
        """
        Insert several steps at the front of the chain.

        Steps are given in execution order; after the call the first of them
        is the next one to be dispatched and the rest of the previous chain
        follows the last of them.
        """
        self._steps.extendleft(reversed(list(steps)))

    def append_task(self, task: Task, recipient: ITaskRecipient) -> None:
        """Add a step at the end of the chain."""
        self._steps.append((task, recipient))

    def pop_next_task(self) -> TaskStep:
        """Remove and return the front step. Raises IndexError when empty."""
        if not self._steps:
            raise IndexError(f"{self.label} has no remaining tasks")
        return self._steps.popleft()

    def peek_next_task(self) -> Optional[TaskStep]:
        return self._steps[0] if self._steps else None

    def is_empty(self) -> bool:
        return not self._steps

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self):
        return iter(list(self._steps))

    def __repr__(self) -> str:
        return f"Event(id={self.event_id}, label={self.label!r}, remaining={len(self._steps)})"
