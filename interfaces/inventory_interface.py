"""
Interface for inventory bookkeeping - shelves, items and item placement.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Dict, Optional

from .grid_interface import GridCell

if TYPE_CHECKING:
    from simulation.event import Event
    from warehouse.item import Item
    from warehouse.shelf import Shelf


class InventoryError(Exception):
    """Raised when inventory lookups or order generation fail."""
    pass


class IInventory(ABC):
    """
    Interface for inventory management.

    Responsibilities:
    - Register shelves and place items on them
    - Resolve items by SKU and shelves by location
    - Seed retrieval orders for items
    """

    @abstractmethod
    def add_shelf(self, location: GridCell) -> "Shelf":
        """Create a shelf at location and register it."""
        pass

    @abstractmethod
    def add_item(self, item: "Item") -> "Shelf":
        """Register an item and place it on a randomly chosen shelf."""
        pass

    @abstractmethod
    def add_item_to_shelf(self, item: "Item", shelf: "Shelf") -> None:
        """Place an item on a specific shelf."""
        pass

    @abstractmethod
    def get_item_shelf(self, item: "Item") -> Optional["Shelf"]:
        """Shelf currently holding item, or None."""
        pass

    @abstractmethod
    def get_item_by_sku(self, sku: str) -> Optional["Item"]:
        """Item registered under sku, or None."""
        pass

    @abstractmethod
    def get_shelf_by_location(self, location: GridCell) -> Optional["Shelf"]:
        """Shelf whose home is location, or None."""
        pass

    @abstractmethod
    def get_current_inventory(self) -> Dict["Item", "Shelf"]:
        """Copy of the item -> shelf placement map."""
        pass

    @abstractmethod
    def generate_order(self, item: "Item") -> "Event":
        """
        Build a retrieval order for item.

        Returns:
            Event: New event whose only task asks an available robot to fetch
                   the item's shelf

        Raises:
            InventoryError: If the item is not stocked on any shelf
        """
        pass
