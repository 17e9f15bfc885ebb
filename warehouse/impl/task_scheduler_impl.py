"""
Task Scheduler Implementation - retrieval chains, routing and charging.

Turns a retrieval request into the fixed shelf round trip, expands every
path request into one movement step per cell, and walks robots through the
charging state once a retrieval ends. Blocked work (no idle robot, no route,
robot still charging) is handed back to the event driver with the retry
delay instead of waiting.
"""
import logging
from typing import List, Optional

from interfaces.configuration_interface import SchedulerConfig
from interfaces.event_driver_interface import IEventDriver
from interfaces.path_planner_interface import IPathPlanner
from interfaces.picker_interface import IPicker
from interfaces.robot_pool_interface import IRobotPool
from interfaces.task_scheduler_interface import (
    ITaskScheduler, Task, TaskType, TaskSchedulingError
)
from robot.robot import Robot
from simulation.event import Event, TaskStep


class TaskSchedulerImpl(ITaskScheduler):
    """
    Event-chain state machine for the robot fleet.

    **Threading Model**: called only from the event driver's dispatch loop.
    """

    def __init__(self,
                 driver: IEventDriver,
                 robot_pool: IRobotPool,
                 path_planner: IPathPlanner,
                 picker: IPicker,
                 config: Optional[SchedulerConfig] = None):
        self._driver = driver
        self._robot_pool = robot_pool
        self._path_planner = path_planner
        self._picker = picker
        self._config = config or SchedulerConfig()

        self._retrievals_started = 0
        self._retrievals_completed = 0
        self._deferrals = 0

        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def retrievals_started(self) -> int:
        return self._retrievals_started

    @property
    def retrievals_completed(self) -> int:
        return self._retrievals_completed

    @property
    def deferral_count(self) -> int:
        """Times an event was put back because a robot or route was unavailable."""
        return self._deferrals

    def handle_task_event(self, task: Task, event: Event) -> None:
        if task.task_type == TaskType.AVAILABLE_ROBOT_RETRIEVE_FROM_LOCATION:
            self._handle_retrieve(task, event)
        elif task.task_type == TaskType.SPECIFIC_ROBOT_PLOT_PATH:
            self._handle_plot_path(task, event)
        elif task.task_type == TaskType.END_ITEM_RETRIEVAL:
            self._handle_end_retrieval(task, event)
        elif task.task_type == TaskType.ROBOT_CHARGE:
            self._handle_charge(task, event)
        else:
            raise TaskSchedulingError(f"Scheduler cannot handle {task!r}")

    def _defer(self, event: Event) -> None:
        self._deferrals += 1
        self._driver.schedule_event(event, self._config.retry_delay_ticks)

    def _handle_retrieve(self, task: Task, event: Event) -> None:
        robot = self._robot_pool.acquire()
        if robot is None:
            self._logger.debug("[t=%d] no robot available for %r, retrying in %d tick(s)",
                               self._driver.current_time, event, self._config.retry_delay_ticks)
            event.prepend_task(task, self)
            self._defer(event)
            return

        self._logger.info("[t=%d] robot %s assigned to retrieve shelf at %s for %r",
                          self._driver.current_time, robot.robot_id, task.location, event)
        event.prepend_tasks(self._build_retrieval_chain(robot, task))
        self._retrievals_started += 1
        self._driver.schedule_event(event)

    def _build_retrieval_chain(self, robot: Robot, task: Task) -> List[TaskStep]:
        """Shelf round trip for one order, in execution order."""
        shelf_location = task.location
        dropoff_location = self._picker.get_dropoff_location()
        return [
            (Task.plot_path(robot, shelf_location), self),
            (Task.raise_shelf(), robot),
            (Task.plot_path(robot, dropoff_location), self),
            (Task.pick_item(task.item), self._picker),
            (Task.plot_path(robot, shelf_location), self),
            (Task.lower_shelf(), robot),
            (Task.plot_path(robot, robot.home), self),
            (Task.end_item_retrieval(robot), self),
        ]

    def _handle_plot_path(self, task: Task, event: Event) -> None:
        robot = task.robot
        route = self._path_planner.find_path(robot.location, task.location, robot.has_shelf)
        if not route:
            # The plot step is consumed; the chain carries on with its next step
            self._logger.info("[t=%d] no route for robot %s from %s to %s (carrying=%s)",
                              self._driver.current_time, robot.robot_id, robot.location,
                              task.location, robot.has_shelf)
            self._defer(event)
            return

        self._logger.debug("[t=%d] robot %s routed %s -> %s in %d steps",
                           self._driver.current_time, robot.robot_id, robot.location,
                           task.location, len(route))
        event.prepend_tasks((Task.move_to(cell), robot) for cell in route)
        self._driver.schedule_event(event)

    def _handle_end_retrieval(self, task: Task, event: Event) -> None:
        robot = task.robot
        self._robot_pool.release(robot)
        self._retrievals_completed += 1
        self._logger.info("[t=%d] robot %s finished %r at charge %d",
                          self._driver.current_time, robot.robot_id, event, robot.charge_level)
        self._driver.schedule_event(event)

        charge_event = Event(label=f"charge-robot-{robot.robot_id}")
        charge_event.prepend_task(Task.charge(robot), self)
        self._driver.schedule_event(charge_event)

    def _handle_charge(self, task: Task, event: Event) -> None:
        robot = task.robot
        if self._robot_pool.charge_tick(robot):
            self._logger.debug("[t=%d] robot %s fully charged and available",
                               self._driver.current_time, robot.robot_id)
            return
        event.prepend_task(task, self)
        self._driver.schedule_event(event, self._config.retry_delay_ticks)
