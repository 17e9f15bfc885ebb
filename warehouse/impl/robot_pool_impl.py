"""
Robot Pool Implementation

Owns the fleet and the three lifecycle groups. Available robots are handed
out longest-idle first; Working and Charging robots are held in plain lists.
Every transition moves a robot between groups and updates its recorded state
in the same call, so membership and state never disagree.
"""
from __future__ import annotations

import logging
from collections import deque
from typing import Any, Deque, Dict, List, Optional

from interfaces.configuration_interface import FleetConfig, ChargingConfig, RobotConfig
from interfaces.event_driver_interface import IEventDriver
from interfaces.grid_interface import IGrid
from interfaces.robot_pool_interface import IRobotPool, RobotLifecycleState, RobotPoolError
from robot.robot import Robot


logger = logging.getLogger(__name__)


class RobotPoolImpl(IRobotPool):
    """Fixed-size fleet with exclusive allocation."""

    def __init__(self,
                 grid: IGrid,
                 driver: IEventDriver,
                 fleet_config: Optional[FleetConfig] = None,
                 charging_config: Optional[ChargingConfig] = None,
                 robot_config: Optional[RobotConfig] = None):
        self._grid = grid
        self._driver = driver
        self._fleet_config = fleet_config or FleetConfig()
        self._charging_config = charging_config or ChargingConfig()
        self._robot_config = robot_config or RobotConfig()

        self._robots: Dict[int, Robot] = {}
        self._available: Deque[Robot] = deque()
        self._working: List[Robot] = []
        self._charging: List[Robot] = []

        self.seed_robots(self._fleet_config.robot_count)

    def seed_robots(self, count: int) -> None:
        """Create count robots on consecutive home bays, all Available."""
        if self._robots:
            raise RobotPoolError("Fleet has already been seeded")
        if count < 1:
            raise RobotPoolError(f"Fleet needs at least one robot, got {count}")

        for robot_id in range(count):
            home = (self._fleet_config.home_start_column + robot_id, self._fleet_config.home_row)
            if not self._grid.in_bounds(home):
                raise RobotPoolError(f"Home bay {home} for robot {robot_id} is outside the grid")
            if not self._grid.can_traverse(home, False):
                raise RobotPoolError(f"Home bay {home} for robot {robot_id} is not traversable")
            robot = Robot(robot_id, home, self._grid, self._driver,
                          robot_config=self._robot_config,
                          charging_config=self._charging_config,
                          initial_charge=self._fleet_config.initial_charge)
            self._robots[robot_id] = robot
            self._available.append(robot)

        logger.info("Seeded %d robots at row %d from column %d",
                    count, self._fleet_config.home_row, self._fleet_config.home_start_column)

    def acquire(self) -> Optional[Robot]:
        if not self._available:
            logger.debug("No robot available (%d working, %d charging)",
                         len(self._working), len(self._charging))
            return None
        robot = self._available.popleft()
        robot.state = RobotLifecycleState.WORKING
        self._working.append(robot)
        logger.debug("Robot %s acquired", robot.robot_id)
        return robot

    def release(self, robot: Robot) -> None:
        if robot not in self._working:
            raise RobotPoolError(f"Robot {robot.robot_id} is not working (state={robot.state.value})")
        self._working.remove(robot)
        robot.state = RobotLifecycleState.CHARGING
        self._charging.append(robot)
        logger.debug("Robot %s released to charging at level %d", robot.robot_id, robot.charge_level)

    def charge_tick(self, robot: Robot) -> bool:
        if robot not in self._charging:
            raise RobotPoolError(f"Robot {robot.robot_id} is not charging (state={robot.state.value})")
        robot.advance_charge()
        if robot.needs_recharge():
            return False
        self._charging.remove(robot)
        robot.state = RobotLifecycleState.AVAILABLE
        self._available.append(robot)
        logger.debug("Robot %s charged to %d and available", robot.robot_id, robot.charge_level)
        return True

    def get_robot(self, robot_id: int) -> Optional[Robot]:
        return self._robots.get(robot_id)

    @property
    def robot_count(self) -> int:
        return len(self._robots)

    @property
    def available_robots(self) -> List[Robot]:
        return list(self._available)

    @property
    def working_robots(self) -> List[Robot]:
        return list(self._working)

    @property
    def charging_robots(self) -> List[Robot]:
        return list(self._charging)

    def get_fleet_status(self) -> Dict[str, Any]:
        """
        Summary of the fleet for monitoring and the demo report.

        Returns:
            Dict with group counts and one entry per robot
        """
        return {
            'total': len(self._robots),
            'available': len(self._available),
            'working': len(self._working),
            'charging': len(self._charging),
            'robots': [
                {
                    'robot_id': robot.robot_id,
                    'state': robot.state.value,
                    'location': robot.location,
                    'has_shelf': robot.has_shelf,
                    'charge_level': robot.charge_level,
                }
                for robot in self._robots.values()
            ],
        }
