"""
Interface for the picker station that receives shelves from robots.
"""
from abc import abstractmethod
from typing import List

from .grid_interface import GridCell
from .task_scheduler_interface import ITaskRecipient


class IPicker(ITaskRecipient):
    """
    Interface for a picking station.

    Responsibilities:
    - Expose the drop-off cell where robots present shelves
    - Accept PICK_ITEM_FROM_SHELF notifications on the order chain
    """

    @abstractmethod
    def get_dropoff_location(self) -> GridCell:
        """Cell where robots deliver shelves."""
        pass

    @abstractmethod
    def get_picked_items(self) -> List[str]:
        """Ids of items picked so far, in pick order."""
        pass

    @abstractmethod
    def get_short_picks(self) -> List[str]:
        """Ids of items that were out of stock when their shelf was presented."""
        pass
