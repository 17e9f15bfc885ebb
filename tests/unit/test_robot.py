"""
Tests for Robot as a chain step recipient.
"""
import pytest
from unittest.mock import Mock

from interfaces.configuration_interface import RobotConfig, ChargingConfig
from interfaces.task_scheduler_interface import Task, TaskSchedulingError
from robot.robot import Robot
from simulation.event import Event
from warehouse.map import WarehouseMap


class TestRobot:

    @pytest.fixture
    def grid(self):
        return WarehouseMap(layout_rows=[
            "c....",
            "..s..",
        ])

    @pytest.fixture
    def driver(self):
        driver = Mock()
        driver.current_time = 0
        return driver

    @pytest.fixture
    def robot(self, grid, driver):
        return Robot(0, (0, 0), grid, driver,
                     robot_config=RobotConfig(move_duration_ticks=2, shelf_action_ticks=3),
                     charging_config=ChargingConfig(drain_per_move=5))

    def test_move_updates_location_and_drains_charge(self, robot, driver):
        event = Event()
        robot.handle_task_event(Task.move_to((1, 0)), event)

        assert robot.location == (1, 0)
        assert robot.charge_level == 95
        assert robot.move_count == 1
        driver.schedule_event.assert_called_once_with(event, 2)

    def test_charge_never_drops_below_zero(self, grid, driver):
        robot = Robot(1, (0, 0), grid, driver, initial_charge=1,
                      charging_config=ChargingConfig(drain_per_move=5))
        robot.handle_task_event(Task.move_to((1, 0)), Event())
        assert robot.charge_level == 0

    def test_advance_charge_clamps_at_max(self, grid, driver):
        robot = Robot(1, (0, 0), grid, driver, initial_charge=99)
        assert robot.needs_recharge()
        assert robot.advance_charge() == 100
        assert robot.advance_charge() == 100
        assert not robot.needs_recharge()

    def test_raise_and_lower_shelf(self, robot, grid, driver):
        robot.location = (2, 1)
        event = Event()

        robot.handle_task_event(Task.raise_shelf(), event)
        assert robot.has_shelf
        assert not grid.has_parked_shelf((2, 1))
        driver.schedule_event.assert_called_with(event, 3)

        robot.handle_task_event(Task.lower_shelf(), event)
        assert not robot.has_shelf
        assert grid.has_parked_shelf((2, 1))

    def test_raise_without_parked_shelf_changes_nothing(self, robot, driver):
        event = Event()
        robot.handle_task_event(Task.raise_shelf(), event)

        assert not robot.has_shelf
        driver.schedule_event.assert_called_once_with(event, 3)

    def test_lower_without_shelf_changes_nothing(self, robot, grid):
        robot.location = (3, 1)
        robot.handle_task_event(Task.lower_shelf(), Event())

        assert not robot.has_shelf
        assert not grid.has_parked_shelf((3, 1))

    def test_rejects_scheduler_tasks(self, robot):
        with pytest.raises(TaskSchedulingError):
            robot.handle_task_event(Task.charge(robot), Event())
