"""
End-to-end flow test:
- Inventory seeds retrieval orders for stocked items
- TaskScheduler allocates robots and expands each order into the shelf round trip
- Robots route around parked shelves while carrying, present shelves at the picker
  and bring them back
- Every robot recharges and ends Available at its home bay
"""
import os
import tempfile
import unittest

from config.configuration_provider import ConfigurationProvider
from interfaces.configuration_interface import ConfigurationError
from interfaces.robot_pool_interface import RobotLifecycleState, RobotPoolError
from simulation.warehouse_simulation import WarehouseSimulation
from warehouse.item import Item


class TestEndToEndFullFlow(unittest.TestCase):

    def setUp(self):
        for k in list(os.environ.keys()):
            if k.startswith('WAREHOUSE_'):
                del os.environ[k]

    def _provider(self, **overrides):
        provider = ConfigurationProvider()
        for key, value in overrides.items():
            provider.set_value(key.replace('__', '.'), value)
        return provider

    def assert_fleet_home_and_charged(self, simulation):
        pool = simulation.robot_pool
        self.assertEqual(len(pool.available_robots), pool.robot_count)
        self.assertEqual(pool.working_robots, [])
        self.assertEqual(pool.charging_robots, [])
        for robot in pool.available_robots:
            self.assertEqual(robot.state, RobotLifecycleState.AVAILABLE)
            self.assertEqual(robot.location, robot.home)
            self.assertFalse(robot.has_shelf)
            self.assertEqual(robot.charge_level, 100)

    def test_default_configuration_completes_all_orders(self):
        simulation = WarehouseSimulation(self._provider())
        shelves_before = simulation.warehouse_map.shelf_locations
        orders = simulation.seed_orders()

        report = simulation.run()

        self.assertEqual(len(orders), 5)
        self.assertEqual(report.orders_submitted, 5)
        self.assertEqual(report.retrievals_completed, 5)
        self.assertTrue(report.all_orders_completed)
        self.assertEqual(report.pending_events, 0)
        self.assertEqual(len(report.picked_items), 5)
        self.assert_fleet_home_and_charged(simulation)
        for cell in shelves_before:
            self.assertTrue(simulation.warehouse_map.has_parked_shelf(cell))
        # Charging events end without being re-queued, only order events drain empty
        self.assertEqual(simulation.driver.completed_event_count, 5)

    def test_more_orders_than_robots_defers_and_completes(self):
        simulation = WarehouseSimulation(self._provider(fleet__robot_count=2, simulation__order_count=6))
        simulation.seed_orders()

        report = simulation.run()

        self.assertTrue(report.all_orders_completed)
        self.assertEqual(report.retrievals_completed, 6)
        self.assertGreater(report.deferral_count, 0)
        self.assert_fleet_home_and_charged(simulation)

    def test_single_order_visits_shelf_and_dropoff(self):
        simulation = WarehouseSimulation(self._provider(fleet__robot_count=1))
        item = Item("SKU-0001", "Item 1")
        shelf = simulation.inventory.get_item_shelf(item)
        quantity_before = shelf.get_item_quantity(item)

        simulation.submit_order(item)
        report = simulation.run()

        self.assertEqual(report.picked_items, ["SKU-0001"])
        self.assertEqual(report.short_picks, [])
        self.assertEqual(shelf.get_item_quantity(item), quantity_before - 1)
        self.assertEqual(report.inventory_summary["SKU-0001"],
                         {'name': "Item 1", 'quantity': quantity_before - 1, 'location': shelf.location})
        robot = simulation.robot_pool.get_robot(0)
        self.assertGreater(robot.move_count, 0)
        self.assert_fleet_home_and_charged(simulation)

    def test_csv_layout(self):
        rows = [
            "..cc....",
            "........",
            "..ssss..",
            ".......d",
            "..ssss..",
            "........",
        ]
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "layout.csv")
            with open(path, "w", newline="") as f:
                f.write("\n".join(",".join(row) for row in rows) + "\n")
            simulation = WarehouseSimulation(self._provider(
                grid__csv_file=path, fleet__robot_count=2, simulation__order_count=4, simulation__item_count=6))

        self.assertEqual(simulation.warehouse_map.dropoff_location, (7, 3))
        self.assertEqual(len(simulation.inventory.shelves), 8)
        simulation.seed_orders()
        report = simulation.run()

        self.assertTrue(report.all_orders_completed)
        self.assert_fleet_home_and_charged(simulation)

    def test_csv_layout_with_walled_home_rejected(self):
        rows = [
            "..ww....",
            "........",
            "..ssss.d",
        ]
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "layout.csv")
            with open(path, "w", newline="") as f:
                f.write("\n".join(",".join(row) for row in rows) + "\n")
            provider = self._provider(grid__csv_file=path, fleet__robot_count=1)
            self.assertEqual(provider.errors, [])
            with self.assertRaises(RobotPoolError):
                WarehouseSimulation(provider)

    def test_tick_limit_leaves_work_pending(self):
        simulation = WarehouseSimulation(self._provider(simulation__max_ticks=5))
        simulation.seed_orders()

        report = simulation.run()

        self.assertFalse(report.all_orders_completed)
        self.assertGreater(report.pending_events, 0)
        self.assertLessEqual(report.final_time, 5)

    def test_invalid_configuration_rejected(self):
        with self.assertRaises(ConfigurationError):
            WarehouseSimulation(self._provider(scheduler__retry_delay_ticks=0))


if __name__ == '__main__':
    unittest.main()
