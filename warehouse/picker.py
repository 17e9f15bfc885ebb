"""
Picker station - the drop-off cell where robots present shelves for picking.
"""
import logging
from typing import List, Optional

from interfaces.configuration_interface import PickerConfig
from interfaces.event_driver_interface import IEventDriver
from interfaces.grid_interface import GridCell
from interfaces.picker_interface import IPicker
from interfaces.task_scheduler_interface import Task, TaskType, TaskSchedulingError
from simulation.event import Event
from warehouse.inventory import InventoryManager


class Picker(IPicker):
    """Records picks and takes the picked unit off the presented shelf."""

    def __init__(self,
                 dropoff_location: GridCell,
                 driver: IEventDriver,
                 inventory: Optional[InventoryManager] = None,
                 config: Optional[PickerConfig] = None):
        self._dropoff_location = dropoff_location
        self._driver = driver
        self._inventory = inventory
        self._config = config or PickerConfig()
        self._picked: List[str] = []
        self._short_picks: List[str] = []
        self._logger = logging.getLogger(self.__class__.__name__)

    def get_dropoff_location(self) -> GridCell:
        return self._dropoff_location

    def get_picked_items(self) -> List[str]:
        return list(self._picked)

    def get_short_picks(self) -> List[str]:
        return list(self._short_picks)

    def handle_task_event(self, task: Task, event: Event) -> None:
        if task.task_type != TaskType.PICK_ITEM_FROM_SHELF:
            raise TaskSchedulingError(f"Picker cannot handle {task!r}")

        item = task.item
        if item is None:
            self._logger.info("[t=%d] shelf presented for %r with no item to pick",
                              self._driver.current_time, event)
        elif self._inventory is not None and not self._inventory.remove_item(item):
            self._short_picks.append(item.id)
            self._logger.warning("[t=%d] %r is out of stock on its shelf, short pick for %r",
                                 self._driver.current_time, item, event)
        else:
            self._picked.append(item.id)
            self._logger.info("[t=%d] picked %s for %r", self._driver.current_time, item.id, event)
        self._driver.schedule_event(event, self._config.pick_duration_ticks)
