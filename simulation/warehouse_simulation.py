"""
Warehouse Simulation - composition root for the shelf retrieval simulation.

Builds the grid, event driver, fleet, path planner, inventory, picker and
task scheduler from one configuration provider, seeds orders and runs the
event loop to completion.
"""
import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from interfaces.configuration_interface import IBusinessConfigurationProvider, ConfigurationError
from interfaces.grid_interface import GridError
from config.configuration_provider import ConfigurationProvider
from robot.impl.path_planner_impl import PathPlannerImpl
from simulation.event import Event
from simulation.event_driver import DiscreteEventDriver
from warehouse.impl.robot_pool_impl import RobotPoolImpl
from warehouse.impl.task_scheduler_impl import TaskSchedulerImpl
from warehouse.inventory import InventoryManager
from warehouse.item import Item
from warehouse.map import WarehouseMap
from warehouse.picker import Picker


logger = logging.getLogger(__name__)


@dataclass
class SimulationReport:
    """Outcome of a simulation run."""
    final_time: int
    dispatch_count: int
    orders_submitted: int
    retrievals_started: int
    retrievals_completed: int
    deferral_count: int
    pending_events: int
    picked_items: List[str] = field(default_factory=list)
    short_picks: List[str] = field(default_factory=list)
    fleet_status: Dict[str, Any] = field(default_factory=dict)
    inventory_summary: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    @property
    def all_orders_completed(self) -> bool:
        return self.retrievals_completed == self.orders_submitted


class WarehouseSimulation:
    """
    Wires every simulation component from configuration.

    Usage:
        simulation = WarehouseSimulation()
        simulation.seed_orders()
        report = simulation.run()
    """

    def __init__(self, config_provider: Optional[IBusinessConfigurationProvider] = None):
        self.config_provider = config_provider or ConfigurationProvider()
        errors = self.config_provider.errors
        if errors:
            raise ConfigurationError(f"Invalid configuration: {'; '.join(errors)}")

        fleet_config = self.config_provider.get_fleet_config()
        grid_config = self.config_provider.get_grid_config()
        self.simulation_config = self.config_provider.get_simulation_config()

        homes = [(fleet_config.home_start_column + i, fleet_config.home_row)
                 for i in range(fleet_config.robot_count)]
        self.warehouse_map = WarehouseMap(width=grid_config.width, height=grid_config.height,
                                          csv_file=grid_config.csv_file, charging_bays=homes)
        dropoff = self.warehouse_map.dropoff_location
        if dropoff is None:
            raise GridError("Warehouse layout has no drop-off station")

        self.driver = DiscreteEventDriver()
        self.robot_pool = RobotPoolImpl(self.warehouse_map, self.driver,
                                        fleet_config=fleet_config,
                                        charging_config=self.config_provider.get_charging_config(),
                                        robot_config=self.config_provider.get_robot_config())
        self.path_planner = PathPlannerImpl(self.warehouse_map)
        self.inventory = InventoryManager(seed=self.simulation_config.seed)
        self.picker = Picker(dropoff, self.driver, inventory=self.inventory,
                             config=self.config_provider.get_picker_config())
        self.scheduler = TaskSchedulerImpl(self.driver, self.robot_pool, self.path_planner, self.picker,
                                           config=self.config_provider.get_scheduler_config())
        self.inventory.set_order_recipient(self.scheduler)

        self._rng = random.Random(self.simulation_config.seed)
        self._orders_submitted = 0
        self._stock_inventory()

        logger.info("Simulation ready: %dx%d grid, %d robots, %d shelves, drop-off at %s",
                    self.warehouse_map.width, self.warehouse_map.height, self.robot_pool.robot_count,
                    len(self.inventory.shelves), dropoff)

    def _stock_inventory(self) -> None:
        for location in self.warehouse_map.shelf_locations:
            self.inventory.add_shelf(location)
        if not self.inventory.shelves:
            logger.warning("Warehouse layout has no shelf storage cells; no items stocked")
            return
        for index in range(self.simulation_config.item_count):
            sku = f"SKU-{index + 1:04d}"
            self.inventory.add_item(Item(sku, f"Item {index + 1}"), quantity=10)

    def submit_order(self, item: Item, delay: int = 0) -> Event:
        """Create a retrieval order for item and queue it."""
        event = self.inventory.generate_order(item)
        self.driver.schedule_event(event, delay)
        self._orders_submitted += 1
        return event

    def seed_orders(self, count: Optional[int] = None) -> List[Event]:
        """Queue count orders (default simulation.order_count) for randomly chosen stocked items."""
        if count is None:
            count = self.simulation_config.order_count
        stocked = sorted(self.inventory.get_current_inventory(), key=lambda item: item.sku)
        if not stocked:
            if count:
                logger.warning("No stocked items, skipping %d orders", count)
            return []
        return [self.submit_order(self._rng.choice(stocked)) for _ in range(count)]

    def run(self, max_ticks: Optional[int] = None) -> SimulationReport:
        """Run the event loop until it drains or passes max_ticks (default simulation.max_ticks)."""
        if max_ticks is None:
            max_ticks = self.simulation_config.max_ticks
        self.driver.run(max_ticks=max_ticks)
        report = self.get_report()
        if report.pending_events:
            logger.warning("Simulation stopped at t=%d with %d events pending",
                           report.final_time, report.pending_events)
        else:
            logger.info("Simulation finished at t=%d: %d/%d retrievals completed",
                        report.final_time, report.retrievals_completed, report.orders_submitted)
        return report

    def get_report(self) -> SimulationReport:
        return SimulationReport(
            final_time=self.driver.current_time,
            dispatch_count=self.driver.dispatch_count,
            orders_submitted=self._orders_submitted,
            retrievals_started=self.scheduler.retrievals_started,
            retrievals_completed=self.scheduler.retrievals_completed,
            deferral_count=self.scheduler.deferral_count,
            pending_events=self.driver.pending_event_count,
            picked_items=self.picker.get_picked_items(),
            short_picks=self.picker.get_short_picks(),
            fleet_status=self.robot_pool.get_fleet_status(),
            inventory_summary=self.inventory.get_inventory_summary(),
        )
