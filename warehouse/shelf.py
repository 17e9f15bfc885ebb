from typing import Dict

from interfaces.grid_interface import GridCell
from warehouse.item import Item


class Shelf:
    """A movable shelf whose home is a storage cell on the grid."""

    def __init__(self, shelf_id: str, location: GridCell):
        self.id = shelf_id
        self.location = location
        self.items: Dict[Item, int] = {}  # {Item: quantity}

    def add_item(self, item: Item, quantity: int = 1) -> None:
        if quantity < 1:
            raise ValueError(f"quantity must be positive, got {quantity}")
        self.items[item] = self.items.get(item, 0) + quantity

    def remove_item(self, item: Item, quantity: int = 1) -> bool:
        """Take units off the shelf; False if there are not enough of them."""
        if self.items.get(item, 0) < quantity:
            return False
        self.items[item] -= quantity
        if self.items[item] == 0:
            del self.items[item]
        return True

    def has_item(self, item: Item, quantity: int = 1) -> bool:
        """Check if shelf has at least the specified quantity of an item."""
        return self.items.get(item, 0) >= quantity

    def get_item_quantity(self, item: Item) -> int:
        return self.items.get(item, 0)

    def get_total_items(self) -> int:
        """Get total number of items on the shelf (across all item types)."""
        return sum(self.items.values())

    def __repr__(self):
        return f"Shelf(id={self.id!r}, location={self.location}, items={self.get_total_items()})"
