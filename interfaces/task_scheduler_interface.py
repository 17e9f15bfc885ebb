"""
Interface for the TaskScheduler - expands retrieval requests into task chains.

Also defines the Task record exchanged between every component that sits on
an event chain (scheduler, robots, picker) and the ITaskRecipient contract
those components implement.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

from .grid_interface import GridCell

if TYPE_CHECKING:
    from robot.robot import Robot
    from simulation.event import Event
    from warehouse.item import Item


class TaskType(Enum):
    """Types of tasks that can sit on an event chain."""
    AVAILABLE_ROBOT_RETRIEVE_FROM_LOCATION = "available_robot_retrieve_from_location"
    SPECIFIC_ROBOT_PLOT_PATH = "specific_robot_plot_path"
    SPECIFIC_ROBOT_TO_LOCATION = "specific_robot_to_location"
    END_ITEM_RETRIEVAL = "end_item_retrieval"
    ROBOT_CHARGE = "robot_charge"
    RAISE_SHELF = "raise_shelf"
    LOWER_SHELF = "lower_shelf"
    PICK_ITEM_FROM_SHELF = "pick_item_from_shelf"


_REQUIRES_LOCATION = {
    TaskType.AVAILABLE_ROBOT_RETRIEVE_FROM_LOCATION,
    TaskType.SPECIFIC_ROBOT_PLOT_PATH,
    TaskType.SPECIFIC_ROBOT_TO_LOCATION,
}

_REQUIRES_ROBOT = {
    TaskType.SPECIFIC_ROBOT_PLOT_PATH,
    TaskType.END_ITEM_RETRIEVAL,
    TaskType.ROBOT_CHARGE,
}


class TaskSchedulingError(Exception):
    """Raised when a task reaches a recipient that cannot handle it."""
    pass


@dataclass(frozen=True, eq=False)
class Task:
    """
    One step of an event chain.

    Which optional fields are set depends on the task type: location-bound
    tasks carry a target cell, robot-bound tasks carry the robot executing
    them, and picking tasks carry the item to pick.
    """
    task_type: TaskType
    location: Optional[GridCell] = None
    robot: Optional["Robot"] = None
    item: Optional["Item"] = None

    def __post_init__(self):
        """Validate task data after creation."""
        if self.task_type in _REQUIRES_LOCATION and self.location is None:
            raise ValueError(f"{self.task_type.value} tasks require a location")
        if self.task_type in _REQUIRES_ROBOT and self.robot is None:
            raise ValueError(f"{self.task_type.value} tasks require a robot")

    @classmethod
    def retrieve_from_location(cls, location: GridCell,
                               item: Optional["Item"] = None) -> "Task":
        """Ask for any available robot to fetch the shelf at location."""
        return cls(TaskType.AVAILABLE_ROBOT_RETRIEVE_FROM_LOCATION, location=location, item=item)

    @classmethod
    def plot_path(cls, robot: "Robot", destination: GridCell) -> "Task":
        """Route a specific robot to destination."""
        return cls(TaskType.SPECIFIC_ROBOT_PLOT_PATH, location=destination, robot=robot)

    @classmethod
    def move_to(cls, location: GridCell) -> "Task":
        """Move the recipient robot onto an adjacent cell."""
        return cls(TaskType.SPECIFIC_ROBOT_TO_LOCATION, location=location)

    @classmethod
    def end_item_retrieval(cls, robot: "Robot") -> "Task":
        return cls(TaskType.END_ITEM_RETRIEVAL, robot=robot)

    @classmethod
    def charge(cls, robot: "Robot") -> "Task":
        return cls(TaskType.ROBOT_CHARGE, robot=robot)

    @classmethod
    def raise_shelf(cls) -> "Task":
        return cls(TaskType.RAISE_SHELF)

    @classmethod
    def lower_shelf(cls) -> "Task":
        return cls(TaskType.LOWER_SHELF)

    @classmethod
    def pick_item(cls, item: Optional["Item"]) -> "Task":
        return cls(TaskType.PICK_ITEM_FROM_SHELF, item=item)

    def __repr__(self) -> str:
        parts = [self.task_type.name]
        if self.location is not None:
            parts.append(f"location={self.location}")
        if self.robot is not None:
            parts.append(f"robot={self.robot.robot_id}")
        if self.item is not None:
            parts.append(f"item={self.item.id}")
        return f"Task({', '.join(parts)})"


class ITaskRecipient(ABC):
    """
    Component that can be named as the handler of a chain step.

    **Threading Model**: called only from the event driver's dispatch loop.
    """

    @abstractmethod
    def handle_task_event(self, task: Task, event: "Event") -> None:
        """
        Handle one task popped from the front of event's chain.

        The recipient is responsible for handing the event back to the driver
        (immediately or with a delay) unless the chain should terminate.

        Args:
            task: The task that was at the front of the chain
            event: The event owning the remaining chain
        """
        pass


class ITaskScheduler(ITaskRecipient):
    """
    Interface for the robot task scheduler.

    Responsibilities:
    - Allocate robots to retrieval requests (deferring while none is idle)
    - Expand retrieval requests into the fixed shelf round-trip chain
    - Expand path requests into per-cell movement steps
    - Drive robots through the charging state after each retrieval
    """

    @abstractmethod
    def handle_task_event(self, task: Task, event: "Event") -> None:
        """
        Handle AVAILABLE_ROBOT_RETRIEVE_FROM_LOCATION, SPECIFIC_ROBOT_PLOT_PATH,
        END_ITEM_RETRIEVAL and ROBOT_CHARGE tasks.

        Raises:
            TaskSchedulingError: If any other task type is dispatched here
        """
        pass
