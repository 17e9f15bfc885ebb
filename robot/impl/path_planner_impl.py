"""
PathPlanner Implementation - A* pathfinding on the warehouse grid.

Four-way movement with unit step cost and a Manhattan-distance heuristic.
Whether a cell can be entered is delegated to the grid, so shelf-carrying
robots are routed around parked shelves while empty robots pass underneath.
"""
import logging
from typing import List, Optional

import numpy as np

from interfaces.grid_interface import IGrid, GridCell
from interfaces.path_planner_interface import IPathPlanner, PathPlanningError
from utils.indexed_heap import IndexedMinHeap


logger = logging.getLogger(__name__)

NO_PARENT = -1


class PathPlannerImpl(IPathPlanner):
    """
    A* pathfinding implementation.

    Search scratch state (heuristic, cost so far, parent links, closed set)
    lives in flat numpy arrays indexed by y * width + x and is rebuilt for
    every search, so a planner can be shared by all robots.
    """

    # Neighbour expansion order: west, north, south, east
    NEIGHBOUR_OFFSETS = ((-1, 0), (0, -1), (0, 1), (1, 0))

    def __init__(self, grid: IGrid):
        """
        Initialize PathPlanner with the grid it plans on.

        Args:
            grid: Grid providing bounds and the traversal predicate
        """
        if grid.width <= 0 or grid.height <= 0:
            raise PathPlanningError(f"Cannot plan on a {grid.width}x{grid.height} grid")
        self.grid = grid
        self.movement_cost = 1

    def _index(self, cell: GridCell) -> int:
        return cell[1] * self.grid.width + cell[0]

    def _cell(self, index: int) -> GridCell:
        y, x = divmod(index, self.grid.width)
        return (x, y)

    def _manhattan_heuristic(self, goal: GridCell) -> np.ndarray:
        """Manhattan distance from every cell to goal, flattened row-major."""
        ys, xs = np.indices((self.grid.height, self.grid.width))
        return (np.abs(xs - goal[0]) + np.abs(ys - goal[1])).ravel()

    def find_path(self, start: GridCell, goal: GridCell,
                  carrying_shelf: bool) -> Optional[List[GridCell]]:
        """
        Plan a route from start to goal using A*.

        Args:
            start: Cell the robot currently occupies
            goal: Destination cell
            carrying_shelf: Whether the robot carries a shelf

        Returns:
            Optional[List[GridCell]]: Waypoints from the first step to goal,
            or None if start equals goal, either endpoint is off the grid or
            goal cannot be reached
        """
        start = (int(start[0]), int(start[1]))
        goal = (int(goal[0]), int(goal[1]))

        if start == goal:
            logger.debug("Start %s equals goal, nothing to plan", start)
            return None
        if not self.grid.in_bounds(start) or not self.grid.in_bounds(goal):
            logger.warning("Route %s -> %s has an endpoint outside the grid", start, goal)
            return None

        cell_count = self.grid.width * self.grid.height
        heuristic = self._manhattan_heuristic(goal)
        final_cost = np.zeros(cell_count, dtype=np.int64)
        parent = np.full(cell_count, NO_PARENT, dtype=np.int64)
        closed = np.zeros(cell_count, dtype=bool)

        start_index = self._index(start)
        goal_index = self._index(goal)

        open_set = IndexedMinHeap(cell_count)
        open_set.push(start_index, 0)
        expanded = 0

        while open_set:
            current, _ = open_set.pop()
            if current == goal_index:
                path = self._reconstruct_path(parent, start_index, goal_index)
                logger.debug("Path %s -> %s (carrying=%s): %d steps, %d cells expanded",
                             start, goal, carrying_shelf, len(path), expanded)
                return path

            closed[current] = True
            expanded += 1
            cx, cy = self._cell(current)

            for dx, dy in self.NEIGHBOUR_OFFSETS:
                neighbour = (cx + dx, cy + dy)
                if not self.grid.in_bounds(neighbour):
                    continue
                neighbour_index = self._index(neighbour)
                if closed[neighbour_index]:
                    continue
                if not self.grid.can_traverse(neighbour, carrying_shelf):
                    continue

                candidate = int(heuristic[neighbour_index] + final_cost[current] + self.movement_cost)
                if neighbour_index not in open_set:
                    final_cost[neighbour_index] = candidate
                    parent[neighbour_index] = current
                    open_set.push(neighbour_index, candidate)
                elif candidate < open_set.key_of(neighbour_index):
                    final_cost[neighbour_index] = candidate
                    parent[neighbour_index] = current
                    open_set.decrease_key(neighbour_index, candidate)

        logger.debug("No path %s -> %s (carrying=%s) after expanding %d cells",
                     start, goal, carrying_shelf, expanded)
        return None

    def _reconstruct_path(self, parent: np.ndarray, start_index: int, goal_index: int) -> List[GridCell]:
        """Follow parent links back from goal; the start cell is excluded."""
        path = []
        index = goal_index
        while index != start_index:
            path.append(self._cell(index))
            index = int(parent[index])
            if index == NO_PARENT:
                raise PathPlanningError("Broken parent chain while rebuilding path")
        path.reverse()
        return path
