import logging
import random
import uuid
from typing import Dict, List, Optional

from interfaces.grid_interface import GridCell
from interfaces.inventory_interface import IInventory, InventoryError
from interfaces.task_scheduler_interface import ITaskRecipient, Task
from simulation.event import Event
from warehouse.item import Item
from warehouse.shelf import Shelf


logger = logging.getLogger(__name__)


class InventoryManager(IInventory):
    """
    In-memory inventory: which shelves exist, which shelf holds each item.

    Items are placed on a randomly chosen shelf when no shelf is given; pass a
    seed for reproducible placement. Orders are routed to the recipient set
    with set_order_recipient() (normally the task scheduler).
    """

    def __init__(self, seed: Optional[int] = None, order_recipient: Optional[ITaskRecipient] = None):
        self._shelves: List[Shelf] = []
        self._sku_lookup: Dict[str, Item] = {}
        self._current_inventory: Dict[Item, Shelf] = {}
        self._rng = random.Random(seed)
        self._order_recipient = order_recipient
        self._orders_generated = 0

    def set_order_recipient(self, recipient: ITaskRecipient) -> None:
        self._order_recipient = recipient

    @property
    def shelves(self) -> List[Shelf]:
        return list(self._shelves)

    def add_shelf(self, location: GridCell) -> Shelf:
        if self.get_shelf_by_location(location) is not None:
            raise InventoryError(f"A shelf is already registered at {location}")
        shelf = Shelf(str(uuid.uuid4()), location)
        self._shelves.append(shelf)
        return shelf

    def add_item(self, item: Item, quantity: int = 1) -> Shelf:
        if not self._shelves:
            raise InventoryError(f"No shelves to place {item!r} on")
        shelf = self._rng.choice(self._shelves)
        self.add_item_to_shelf(item, shelf, quantity)
        return shelf

    def add_item_to_shelf(self, item: Item, shelf: Shelf, quantity: int = 1) -> None:
        current = self._current_inventory.get(item)
        if current is not None and current is not shelf:
            # An item lives on one shelf; restocking elsewhere moves it
            logger.warning("Moving %r from shelf at %s to shelf at %s",
                           item, current.location, shelf.location)
            units = current.get_item_quantity(item)
            if units:
                current.remove_item(item, units)
        self._sku_lookup[item.sku] = item
        shelf.add_item(item, quantity)
        self._current_inventory[item] = shelf

    def remove_item(self, item: Item, quantity: int = 1) -> bool:
        """Take units of an item off its shelf; False if the item is not stocked."""
        shelf = self._current_inventory.get(item)
        if shelf is None:
            return False
        return shelf.remove_item(item, quantity)

    def get_item_shelf(self, item: Item) -> Optional[Shelf]:
        return self._current_inventory.get(item)

    def get_item_by_sku(self, sku: str) -> Optional[Item]:
        return self._sku_lookup.get(sku)

    def get_shelf_by_location(self, location: GridCell) -> Optional[Shelf]:
        for shelf in self._shelves:
            if shelf.location == location:
                return shelf
        return None

    def get_current_inventory(self) -> Dict[Item, Shelf]:
        return dict(self._current_inventory)

    def generate_order(self, item: Item) -> Event:
        if self._order_recipient is None:
            raise InventoryError("No order recipient configured")
        shelf = self._current_inventory.get(item)
        if shelf is None:
            raise InventoryError(f"{item!r} is not stocked on any shelf")

        self._orders_generated += 1
        event = Event(label=f"order-{self._orders_generated}-{item.sku}")
        event.prepend_task(Task.retrieve_from_location(shelf.location, item), self._order_recipient)
        logger.debug("Generated %r for %r on shelf at %s", event, item, shelf.location)
        return event

    def get_inventory_summary(self) -> Dict[str, Dict[str, object]]:
        """Per-SKU name, quantity and shelf location."""
        return {
            item.sku: {
                'name': item.name,
                'quantity': shelf.get_item_quantity(item),
                'location': shelf.location,
            }
            for item, shelf in self._current_inventory.items()
        }
