import csv
import logging
import os
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from interfaces.grid_interface import IGrid, GridCell, CellKind, GridError


logger = logging.getLogger(__name__)


class WarehouseMap(IGrid):
    """Static warehouse floor with walls, shelf storage slots, charging bays and drop-off stations.

    Shelves are parked on storage cells. A robot that is not carrying anything
    drives underneath parked shelves; a robot carrying a shelf cannot enter a
    cell where another shelf is parked.
    """

    # CSV values -> grid values
    CSV_VALUES = {
        '.': CellKind.FREE, '0': CellKind.FREE, '': CellKind.FREE,
        'w': CellKind.WALL, '1': CellKind.WALL,
        's': CellKind.SHELF_STORAGE, '2': CellKind.SHELF_STORAGE,
        'c': CellKind.CHARGING, '3': CellKind.CHARGING,
        'd': CellKind.DROPOFF, '5': CellKind.DROPOFF,
    }
    CSV_CHARS = {
        CellKind.FREE: '.',
        CellKind.WALL: 'w',
        CellKind.SHELF_STORAGE: 's',
        CellKind.CHARGING: 'c',
        CellKind.DROPOFF: 'd',
    }

    @staticmethod
    def _read_csv_dimensions(csv_file: str) -> Tuple[int, int]:
        """Read dimensions from CSV file.

        Returns:
            Tuple of (width, height) or (0, 0) if file can't be read
        """
        try:
            with open(csv_file, 'r', newline='', encoding='utf-8-sig') as file:
                rows = list(csv.reader(file))
        except OSError as e:
            logger.warning("Could not read layout dimensions from %s: %s", csv_file, e)
            return (0, 0)

        if not rows:
            return (0, 0)
        return (max(len(row) for row in rows), len(rows))

    def __init__(self, width: int = 24, height: int = 16, csv_file: Optional[str] = None,
                 charging_bays: Optional[Iterable[GridCell]] = None,
                 layout_rows: Optional[Sequence[Sequence[str]]] = None):
        """
        Args:
            width: Columns of a generated layout
            height: Rows of a generated layout
            csv_file: CSV layout to load; its dimensions win over width/height
            charging_bays: Home bays to mark on a generated layout
            layout_rows: In-memory layout, one string (or list of codes) per row
        """
        if layout_rows is not None:
            width = max((len(row) for row in layout_rows), default=0)
            height = len(layout_rows)
            csv_file = None
        elif csv_file and os.path.exists(csv_file):
            csv_width, csv_height = self._read_csv_dimensions(csv_file)
            if csv_width > 0 and csv_height > 0:
                logger.info("CSV layout detected: using dimensions %dx%d", csv_width, csv_height)
                width = csv_width
                height = csv_height
            else:
                logger.warning("Could not read valid dimensions from %s, using defaults %dx%d",
                               csv_file, width, height)
        elif csv_file:
            logger.warning("Layout file %s not found, generating a %dx%d layout", csv_file, width, height)

        if width < 1 or height < 1:
            raise GridError(f"Grid dimensions must be positive, got {width}x{height}")

        self._width = width
        self._height = height

        # Static cell kinds, indexed [y, x]
        self.grid = np.zeros((height, width), dtype=int)
        # Cells where a shelf currently stands
        self._parked = np.zeros((height, width), dtype=bool)

        loaded = False
        if layout_rows is not None:
            self._apply_rows(layout_rows)
            loaded = True
        elif csv_file and os.path.exists(csv_file):
            loaded = self._load_from_csv(csv_file)
        if not loaded:
            # Order matters: bays and stations first, shelves fill what is left
            self._create_charging_zones(charging_bays or [])
            self._create_dropoff_stations()
            self._create_shelves()

        self._parked[:] = self.grid == CellKind.SHELF_STORAGE

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _load_from_csv(self, csv_file: str) -> bool:
        """Load warehouse layout from CSV file.

        CSV format:
        - Each cell represents a warehouse grid cell
        - Values: '.' or '0' = free space, 'w' or '1' = wall, 's' or '2' = shelf storage,
                  'c' or '3' = charging bay, 'd' or '5' = drop-off
        - Unknown values are treated as free space

        Returns:
            True if the layout was loaded, False if the caller should generate one
        """
        try:
            with open(csv_file, 'r', newline='', encoding='utf-8-sig') as file:
                rows = list(csv.reader(file))
        except OSError as e:
            logger.error("Error loading CSV file %s: %s; falling back to generated layout", csv_file, e)
            return False

        if not rows:
            logger.error("CSV file %s is empty; falling back to generated layout", csv_file)
            return False

        self._apply_rows(rows)

        logger.info("Loaded warehouse layout from %s: %dx%d, %d shelves, %d walls, "
                    "%d charging bays, %d drop-off stations",
                    csv_file, self._width, self._height,
                    int(np.sum(self.grid == CellKind.SHELF_STORAGE)),
                    int(np.sum(self.grid == CellKind.WALL)),
                    int(np.sum(self.grid == CellKind.CHARGING)),
                    int(np.sum(self.grid == CellKind.DROPOFF)))
        return True

    def _apply_rows(self, rows: Sequence[Sequence[str]]) -> None:
        for y, row in enumerate(rows[:self._height]):
            for x, cell_value in enumerate(row[:self._width]):
                # Strip BOM and other invisible characters
                cell_value = ''.join(ch for ch in str(cell_value).strip().lower() if ord(ch) >= 32)
                kind = self.CSV_VALUES.get(cell_value)
                if kind is None:
                    logger.warning("Unknown cell value '%s' at (%d, %d), treating as free space",
                                   cell_value, x, y)
                    kind = CellKind.FREE
                self.grid[y, x] = kind

    def save_to_csv(self, csv_file: str) -> None:
        """Save current warehouse layout to CSV file using the letter codes."""
        with open(csv_file, 'w', newline='') as file:
            writer = csv.writer(file)
            for y in range(self._height):
                writer.writerow([self.CSV_CHARS.get(CellKind(self.grid[y, x]), '.')
                                 for x in range(self._width)])
        logger.info("Warehouse layout saved to %s", csv_file)

    def _create_charging_zones(self, bays: Iterable[GridCell]) -> None:
        """Mark the fleet's home bays."""
        for x, y in bays:
            if not self.in_bounds((x, y)):
                raise GridError(f"Charging bay {(x, y)} is outside the {self._width}x{self._height} grid")
            self.grid[y, x] = CellKind.CHARGING

    def _create_dropoff_stations(self) -> None:
        """Create the drop-off station on the east edge."""
        dropoff_x = self._width - 1
        dropoff_y = self._height // 2
        if self.grid[dropoff_y, dropoff_x] == CellKind.FREE:
            self.grid[dropoff_y, dropoff_x] = CellKind.DROPOFF
            return
        for y in range(self._height):
            if self.grid[y, dropoff_x] == CellKind.FREE:
                self.grid[y, dropoff_x] = CellKind.DROPOFF
                return
        logger.warning("No free cell on column %d for a drop-off station", dropoff_x)

    def _create_shelves(self) -> None:
        """Create shelf lines with 2-cell-wide aisles between them, leaving 2 cells walkable at sides."""
        shelf_start_x = 2
        shelf_end_x = self._width - 2
        shelf_start_y = 2  # Keep the top row and its aisle for the home bays
        shelf_end_y = self._height - 2

        shelf_line_width = 1
        aisle_width = 2

        y = shelf_start_y
        while y < shelf_end_y:
            for x in range(shelf_start_x, shelf_end_x):
                if self.grid[y, x] == CellKind.FREE:
                    self.grid[y, x] = CellKind.SHELF_STORAGE
            y += shelf_line_width + aisle_width

    def in_bounds(self, cell: GridCell) -> bool:
        x, y = cell
        return 0 <= x < self._width and 0 <= y < self._height

    def cells(self) -> Iterator[GridCell]:
        for y in range(self._height):
            for x in range(self._width):
                yield (x, y)

    def cell_kind(self, cell: GridCell) -> CellKind:
        """Static kind of a cell."""
        if not self.in_bounds(cell):
            raise GridError(f"Cell {cell} is outside the grid")
        x, y = cell
        return CellKind(self.grid[y, x])

    def can_traverse(self, cell: GridCell, carrying_shelf: bool) -> bool:
        if not self.in_bounds(cell):
            return False
        x, y = cell
        if self.grid[y, x] == CellKind.WALL:
            return False
        return not (carrying_shelf and self._parked[y, x])

    def has_parked_shelf(self, cell: GridCell) -> bool:
        if not self.in_bounds(cell):
            return False
        x, y = cell
        return bool(self._parked[y, x])

    def lift_shelf(self, cell: GridCell) -> bool:
        if not self.has_parked_shelf(cell):
            return False
        x, y = cell
        self._parked[y, x] = False
        return True

    def place_shelf(self, cell: GridCell) -> bool:
        if not self.in_bounds(cell) or self.has_parked_shelf(cell):
            return False
        x, y = cell
        if self.grid[y, x] == CellKind.WALL:
            return False
        self._parked[y, x] = True
        return True

    def block_cell(self, cell: GridCell) -> None:
        """Turn a cell into a wall (used to build test layouts)."""
        if not self.in_bounds(cell):
            raise GridError(f"Cell {cell} is outside the grid")
        x, y = cell
        self.grid[y, x] = CellKind.WALL
        self._parked[y, x] = False

    def _cells_of_kind(self, kind: CellKind) -> List[GridCell]:
        ys, xs = np.nonzero(self.grid == kind)
        # np.nonzero walks row-major, so the list is ordered by (y, x)
        return [(int(x), int(y)) for y, x in zip(ys, xs)]

    @property
    def shelf_locations(self) -> List[GridCell]:
        return self._cells_of_kind(CellKind.SHELF_STORAGE)

    @property
    def charging_bays(self) -> List[GridCell]:
        return self._cells_of_kind(CellKind.CHARGING)

    @property
    def dropoff_stations(self) -> List[GridCell]:
        return self._cells_of_kind(CellKind.DROPOFF)

    @property
    def dropoff_location(self) -> Optional[GridCell]:
        stations = self.dropoff_stations
        return stations[0] if stations else None

    def get_obstacle_cells(self, carrying_shelf: bool = False) -> List[GridCell]:
        """Cells a robot with the given carrying state cannot enter."""
        blocked = self.grid == CellKind.WALL
        if carrying_shelf:
            blocked = blocked | self._parked
        ys, xs = np.nonzero(blocked)
        return [(int(x), int(y)) for y, x in zip(ys, xs)]
