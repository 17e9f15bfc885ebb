"""
Core interfaces for the shelf retrieval warehouse simulation.

This module defines all the major interfaces that components must implement
to ensure proper decoupling and testability.
"""

# Grid and routing
from .grid_interface import IGrid, GridCell, CellKind, GridError
from .path_planner_interface import IPathPlanner, PathPlanningError

# Tasks, events and scheduling
from .task_scheduler_interface import (
    ITaskScheduler, ITaskRecipient, Task, TaskType, TaskSchedulingError
)
from .event_driver_interface import IEventDriver, EventDriverError

# Fleet lifecycle
from .robot_pool_interface import IRobotPool, RobotLifecycleState, RobotPoolError

# Warehouse collaborators
from .picker_interface import IPicker
from .inventory_interface import IInventory, InventoryError

# Configuration
from .configuration_interface import IBusinessConfigurationProvider, ConfigurationError
