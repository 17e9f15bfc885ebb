"""
Unit tests for RobotPool implementation.

Tests seeding, FIFO allocation, exhaustion and the charging round trip.
"""
import unittest
from unittest.mock import Mock

from interfaces.configuration_interface import FleetConfig, ChargingConfig
from interfaces.robot_pool_interface import RobotLifecycleState, RobotPoolError
from simulation.event_driver import DiscreteEventDriver
from warehouse.impl.robot_pool_impl import RobotPoolImpl
from warehouse.map import WarehouseMap


class TestRobotPoolImpl(unittest.TestCase):
    """Test cases for RobotPool implementation."""

    def setUp(self):
        """Set up test fixtures."""
        self.grid = WarehouseMap(width=24, height=16)
        self.driver = DiscreteEventDriver()
        self.pool = RobotPoolImpl(self.grid, self.driver, fleet_config=FleetConfig(robot_count=10))

    def assert_partitioned(self):
        groups = {
            RobotLifecycleState.AVAILABLE: self.pool.available_robots,
            RobotLifecycleState.WORKING: self.pool.working_robots,
            RobotLifecycleState.CHARGING: self.pool.charging_robots,
        }
        seen = []
        for state, robots in groups.items():
            for robot in robots:
                self.assertEqual(robot.state, state)
                seen.append(robot.robot_id)
        self.assertEqual(sorted(seen), list(range(self.pool.robot_count)))

    def test_seeding(self):
        self.assertEqual(self.pool.robot_count, 10)
        robots = self.pool.available_robots
        self.assertEqual([r.robot_id for r in robots], list(range(10)))
        for robot in robots:
            self.assertEqual(robot.home, (2 + robot.robot_id, 0))
            self.assertEqual(robot.location, robot.home)
            self.assertEqual(robot.charge_level, 100)
            self.assertFalse(robot.has_shelf)
        self.assert_partitioned()

    def test_acquire_is_fifo(self):
        first = self.pool.acquire()
        second = self.pool.acquire()

        self.assertEqual((first.robot_id, second.robot_id), (0, 1))
        self.assertEqual(first.state, RobotLifecycleState.WORKING)
        self.assertEqual(self.pool.working_robots, [first, second])
        self.assert_partitioned()

    def test_acquire_when_exhausted_returns_none(self):
        acquired = [self.pool.acquire() for _ in range(10)]
        self.assertTrue(all(acquired))

        self.assertIsNone(self.pool.acquire())
        self.assertEqual(len(self.pool.working_robots), 10)
        self.assertEqual(self.pool.available_robots, [])
        self.assert_partitioned()

    def test_release_moves_working_robot_to_charging(self):
        robot = self.pool.acquire()
        self.pool.release(robot)

        self.assertEqual(robot.state, RobotLifecycleState.CHARGING)
        self.assertIn(robot, self.pool.charging_robots)
        self.assertNotIn(robot, self.pool.working_robots)
        self.assert_partitioned()

    def test_release_requires_working_robot(self):
        robot = self.pool.available_robots[0]
        with self.assertRaises(RobotPoolError):
            self.pool.release(robot)

    def test_charge_tick_requires_charging_robot(self):
        robot = self.pool.acquire()
        with self.assertRaises(RobotPoolError):
            self.pool.charge_tick(robot)

    def test_charging_round_trip(self):
        robot = self.pool.acquire()
        robot._charge_level = 95
        self.pool.release(robot)

        levels = []
        done = False
        while not done:
            done = self.pool.charge_tick(robot)
            levels.append(robot.charge_level)
            self.assert_partitioned()

        self.assertEqual(levels, [96, 97, 98, 99, 100])
        self.assertEqual(robot.state, RobotLifecycleState.AVAILABLE)
        # Recharged robots queue behind the ones that stayed idle
        self.assertIs(self.pool.available_robots[-1], robot)

    def test_lower_threshold_releases_robot_early(self):
        pool = RobotPoolImpl(self.grid, self.driver,
                             fleet_config=FleetConfig(robot_count=1, initial_charge=40),
                             charging_config=ChargingConfig(recharge_threshold=42))
        robot = pool.acquire()
        pool.release(robot)

        self.assertFalse(pool.charge_tick(robot))
        self.assertTrue(pool.charge_tick(robot))
        self.assertEqual(robot.charge_level, 42)

    def test_get_robot_and_fleet_status(self):
        self.pool.acquire()
        status = self.pool.get_fleet_status()

        self.assertEqual(status['total'], 10)
        self.assertEqual(status['available'], 9)
        self.assertEqual(status['working'], 1)
        self.assertEqual(status['charging'], 0)
        self.assertEqual(status['robots'][0]['state'], 'working')
        self.assertIs(self.pool.get_robot(3), self.pool.available_robots[2])
        self.assertIsNone(self.pool.get_robot(99))

    def test_home_outside_grid_rejected(self):
        with self.assertRaises(RobotPoolError):
            RobotPoolImpl(WarehouseMap(width=5, height=5), Mock(),
                          fleet_config=FleetConfig(robot_count=10))

    def test_walled_home_rejected(self):
        grid = WarehouseMap(layout_rows=[
            "..ww....",
            "........",
            ".......d",
        ])
        with self.assertRaises(RobotPoolError):
            RobotPoolImpl(grid, Mock(), fleet_config=FleetConfig(robot_count=1))

    def test_home_on_free_cell_accepted(self):
        grid = WarehouseMap(layout_rows=[
            "........",
            "........",
            ".......d",
        ])
        pool = RobotPoolImpl(grid, Mock(), fleet_config=FleetConfig(robot_count=3))
        self.assertEqual([r.home for r in pool.available_robots], [(2, 0), (3, 0), (4, 0)])

    def test_returned_lists_are_copies(self):
        self.pool.available_robots.clear()
        self.assertEqual(len(self.pool.available_robots), 10)


if __name__ == '__main__':
    unittest.main()
