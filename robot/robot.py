"""
Robot - a fleet member that executes its own primitive chain steps.

A robot is named as the recipient of SPECIFIC_ROBOT_TO_LOCATION, RAISE_SHELF
and LOWER_SHELF steps. Lifecycle state (Available / Working / Charging) is
owned by the RobotPool; the robot only records it.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from interfaces.configuration_interface import ChargingConfig, RobotConfig
from interfaces.event_driver_interface import IEventDriver
from interfaces.grid_interface import IGrid, GridCell
from interfaces.robot_pool_interface import RobotLifecycleState
from interfaces.task_scheduler_interface import (
    ITaskRecipient, Task, TaskType, TaskSchedulingError
)

if TYPE_CHECKING:
    from simulation.event import Event


class Robot(ITaskRecipient):
    """
    Mobile shelf-carrying robot on the warehouse grid.

    Moves one cell per SPECIFIC_ROBOT_TO_LOCATION step and spends one unit of
    charge (``drain_per_move``) per move. Charge is restored one unit at a
    time through advance_charge() while the pool keeps the robot Charging.
    """

    def __init__(self,
                 robot_id: int,
                 home: GridCell,
                 grid: IGrid,
                 driver: IEventDriver,
                 robot_config: Optional[RobotConfig] = None,
                 charging_config: Optional[ChargingConfig] = None,
                 initial_charge: int = 100):
        self.robot_id = robot_id
        self.home = home
        self.location = home
        self.has_shelf = False
        self.state = RobotLifecycleState.AVAILABLE

        self._grid = grid
        self._driver = driver
        self._robot_config = robot_config or RobotConfig()
        self._charging_config = charging_config or ChargingConfig()
        self._charge_level = max(0, min(initial_charge, self._charging_config.max_level))
        self._moves = 0

        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def charge_level(self) -> int:
        return self._charge_level

    @property
    def move_count(self) -> int:
        """Number of cells travelled since seeding."""
        return self._moves

    def needs_recharge(self) -> bool:
        return self._charge_level < self._charging_config.recharge_threshold

    def advance_charge(self) -> int:
        """Add one unit of charge and return the new level."""
        self._charge_level = min(self._charge_level + 1, self._charging_config.max_level)
        return self._charge_level

    def handle_task_event(self, task: Task, event: "Event") -> None:
        if task.task_type == TaskType.SPECIFIC_ROBOT_TO_LOCATION:
            self._move_to(task.location)
            self._driver.schedule_event(event, self._robot_config.move_duration_ticks)
        elif task.task_type == TaskType.RAISE_SHELF:
            self._raise_shelf()
            self._driver.schedule_event(event, self._robot_config.shelf_action_ticks)
        elif task.task_type == TaskType.LOWER_SHELF:
            self._lower_shelf()
            self._driver.schedule_event(event, self._robot_config.shelf_action_ticks)
        else:
            raise TaskSchedulingError(f"Robot {self.robot_id} cannot handle {task!r}")

    def _move_to(self, cell: GridCell) -> None:
        if abs(cell[0] - self.location[0]) + abs(cell[1] - self.location[1]) != 1:
            self._logger.warning("Robot %s jumping from %s to non-adjacent cell %s",
                                 self.robot_id, self.location, cell)
        if not self._grid.can_traverse(cell, self.has_shelf):
            self._logger.warning("Robot %s entering untraversable cell %s (carrying=%s)",
                                 self.robot_id, cell, self.has_shelf)
        self.location = cell
        self._moves += 1
        self._charge_level = max(0, self._charge_level - self._charging_config.drain_per_move)

    def _raise_shelf(self) -> None:
        if self.has_shelf:
            self._logger.warning("Robot %s already carries a shelf at %s", self.robot_id, self.location)
            return
        if not self._grid.lift_shelf(self.location):
            self._logger.warning("Robot %s found no shelf to raise at %s", self.robot_id, self.location)
            return
        self.has_shelf = True
        self._logger.debug("Robot %s raised shelf at %s", self.robot_id, self.location)

    def _lower_shelf(self) -> None:
        if not self.has_shelf:
            self._logger.warning("Robot %s has no shelf to lower at %s", self.robot_id, self.location)
            return
        if not self._grid.place_shelf(self.location):
            self._logger.warning("Robot %s cannot lower its shelf at %s", self.robot_id, self.location)
            return
        self.has_shelf = False
        self._logger.debug("Robot %s lowered shelf at %s", self.robot_id, self.location)

    def __repr__(self) -> str:
        return (f"Robot(id={self.robot_id}, location={self.location}, state={self.state.value}, "
                f"has_shelf={self.has_shelf}, charge={self._charge_level})")
