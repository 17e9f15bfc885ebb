"""
Robot Pool Interface

Defines the fleet lifecycle contract: which robots are idle, which are bound
to an order, and which are recharging. Every robot belongs to exactly one of
the three groups at any time and the fleet size never changes after seeding.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from robot.robot import Robot


class RobotLifecycleState(Enum):
    """Lifecycle state of a fleet robot - managed by the RobotPool."""
    AVAILABLE = "available"
    WORKING = "working"
    CHARGING = "charging"


class RobotPoolError(Exception):
    """Raised when a lifecycle transition is requested from the wrong state."""
    pass


class IRobotPool(ABC):
    """Abstraction for exclusive robot allocation and charge-state transitions."""

    @abstractmethod
    def acquire(self) -> Optional["Robot"]:
        """
        Take the longest-idle Available robot and mark it Working.

        Returns None without side effects when no robot is Available.
        """

    @abstractmethod
    def release(self, robot: "Robot") -> None:
        """Move a Working robot to Charging."""

    @abstractmethod
    def charge_tick(self, robot: "Robot") -> bool:
        """
        Advance a Charging robot's charge by one unit.

        Returns True when the robot is charged and has become Available.
        """

    @abstractmethod
    def get_robot(self, robot_id: int) -> Optional["Robot"]:
        """Look up a robot by id."""

    @property
    @abstractmethod
    def robot_count(self) -> int:
        """Total fleet size."""

    @property
    @abstractmethod
    def available_robots(self) -> List["Robot"]:
        """Available robots in acquisition order (copy)."""

    @property
    @abstractmethod
    def working_robots(self) -> List["Robot"]:
        """Working robots (copy)."""

    @property
    @abstractmethod
    def charging_robots(self) -> List["Robot"]:
        """Charging robots (copy)."""

    @abstractmethod
    def get_fleet_status(self) -> Dict[str, Any]:
        """Summary counts and per-robot state for monitoring."""
