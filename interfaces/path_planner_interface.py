"""
Interface for PathPlanner - computes cell routes on the warehouse grid.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from .grid_interface import GridCell


class PathPlanningError(Exception):
    """Raised when the path planner is misconfigured."""
    pass


class IPathPlanner(ABC):
    """
    Interface for grid path planning.

    Responsibilities:
    - Compute a route between two cells using four-way movement
    - Respect the grid traversal predicate for the robot's carrying state
    - Report "no route" instead of raising when a route does not exist
    """

    @abstractmethod
    def find_path(self, start: GridCell, goal: GridCell,
                  carrying_shelf: bool) -> Optional[List[GridCell]]:
        """
        Plan a route from start to goal.

        Args:
            start: Cell the robot currently occupies
            goal: Destination cell
            carrying_shelf: Whether the robot carries a shelf

        Returns:
            Optional[List[GridCell]]: Waypoints excluding start and including
            goal, or None when start equals goal or goal is unreachable
        """
        pass
