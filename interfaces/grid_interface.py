"""
Interface for the warehouse grid - traversable cells and shelf occupancy.

The grid is addressed by integer cell coordinates (x, y) with the origin in
the top-left corner; x grows to the east and y grows to the south.
"""
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Iterator, List, Optional, Tuple


# Grid coordinate (x, y)
GridCell = Tuple[int, int]


class CellKind(IntEnum):
    """Static cell types stored in the grid array."""
    FREE = 0
    WALL = 1
    SHELF_STORAGE = 2
    CHARGING = 3
    DROPOFF = 5


class GridError(Exception):
    """Raised when grid operations receive invalid arguments."""
    pass


class IGrid(ABC):
    """
    Interface for the warehouse floor grid.

    Responsibilities:
    - Report grid bounds and enumerate cells
    - Decide whether a robot may enter a cell given its carrying state
    - Track which storage cells currently hold a parked shelf
    """

    @property
    @abstractmethod
    def width(self) -> int:
        """Number of columns."""
        pass

    @property
    @abstractmethod
    def height(self) -> int:
        """Number of rows."""
        pass

    @abstractmethod
    def in_bounds(self, cell: GridCell) -> bool:
        """Check whether a cell lies inside the grid."""
        pass

    @abstractmethod
    def cells(self) -> Iterator[GridCell]:
        """Iterate over every cell in row-major order."""
        pass

    @abstractmethod
    def can_traverse(self, cell: GridCell, carrying_shelf: bool) -> bool:
        """
        Check whether a robot may enter a cell.

        Args:
            cell: Cell to enter
            carrying_shelf: Whether the robot currently carries a shelf

        Returns:
            bool: False for walls, out-of-bounds cells and, for shelf-carrying
                  robots, cells where a shelf is parked
        """
        pass

    @abstractmethod
    def has_parked_shelf(self, cell: GridCell) -> bool:
        """Check whether a shelf is currently parked on the cell."""
        pass

    @abstractmethod
    def lift_shelf(self, cell: GridCell) -> bool:
        """
        Remove the parked shelf from a cell (a robot raised it).

        Returns:
            bool: True if a shelf was parked there and is now lifted
        """
        pass

    @abstractmethod
    def place_shelf(self, cell: GridCell) -> bool:
        """
        Park a shelf on a cell (a robot lowered it).

        Returns:
            bool: True if the shelf was placed, False if the cell is occupied
                  or cannot hold a shelf
        """
        pass

    @property
    @abstractmethod
    def shelf_locations(self) -> List[GridCell]:
        """Storage cells that hold a shelf slot, in row-major order."""
        pass

    @property
    @abstractmethod
    def dropoff_location(self) -> Optional[GridCell]:
        """First drop-off cell, or None if the layout has none."""
        pass
