"""
Configuration Management Interface - Centralized system configuration.

This module provides interfaces for managing all simulation configuration
parameters with one typed section per concern and pluggable sources.

Design Principles:
- **Single Responsibility**: Each configuration section has one clear purpose
- **Open/Closed**: New sources plug in through IConfigurationSource
- **Dependency Inversion**: Components receive typed sections, not raw dicts
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional


class ConfigurationSource(Enum):
    """Configuration source types."""
    ENVIRONMENT = "environment"
    FILE = "file"
    DEFAULT = "default"
    OVERRIDE = "override"


@dataclass
class ConfigurationValue:
    """A configuration value with metadata."""
    value: Any
    source: ConfigurationSource
    key: str
    description: str
    validation_errors: Optional[List[str]] = None

    def __post_init__(self):
        if self.validation_errors is None:
            self.validation_errors = []


@dataclass
class FleetConfig:
    """Fleet seeding parameters."""
    robot_count: int = 10
    home_row: int = 0  # grid row of the charging bays
    home_start_column: int = 2  # column of robot 0's bay; robot i sits at column + i
    initial_charge: int = 100  # 0-100


@dataclass
class ChargingConfig:
    """Charge level parameters (levels are integer units, 0 to max_level)."""
    recharge_threshold: int = 100  # robots below this level keep charging
    drain_per_move: int = 1  # units consumed per cell moved
    max_level: int = 100


@dataclass
class SchedulerConfig:
    """Task scheduler parameters."""
    retry_delay_ticks: int = 1  # delay before re-dispatching a blocked event


@dataclass
class RobotConfig:
    """Robot primitive task durations."""
    move_duration_ticks: int = 1
    shelf_action_ticks: int = 1


@dataclass
class PickerConfig:
    """Picker station parameters."""
    pick_duration_ticks: int = 1


@dataclass
class GridConfig:
    """Warehouse layout parameters."""
    width: int = 24
    height: int = 16
    csv_file: Optional[str] = None


@dataclass
class SimulationConfig:
    """Simulation run parameters."""
    max_ticks: int = 10000
    order_count: int = 5
    item_count: int = 20
    seed: int = 42


@dataclass
class SystemConfig:
    """System-wide configuration."""
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ConfigurationError(Exception):
    """Raised when configuration operations fail."""
    pass


class IBusinessConfigurationProvider(ABC):
    """
    Interface for business configuration providers.

    Responsibilities:
    - Provide typed configuration sections to simulation components
    - Load configuration from various sources
    - Validate configuration values
    - Support runtime overrides and reloading
    """

    @abstractmethod
    def get_fleet_config(self) -> FleetConfig:
        """Get fleet seeding configuration."""
        pass

    @abstractmethod
    def get_charging_config(self) -> ChargingConfig:
        """Get charge level configuration."""
        pass

    @abstractmethod
    def get_scheduler_config(self) -> SchedulerConfig:
        """Get task scheduler configuration."""
        pass

    @abstractmethod
    def get_robot_config(self) -> RobotConfig:
        """Get robot task duration configuration."""
        pass

    @abstractmethod
    def get_picker_config(self) -> PickerConfig:
        """Get picker station configuration."""
        pass

    @abstractmethod
    def get_grid_config(self) -> GridConfig:
        """Get warehouse layout configuration."""
        pass

    @abstractmethod
    def get_simulation_config(self) -> SimulationConfig:
        """Get simulation run configuration."""
        pass

    @abstractmethod
    def get_system_config(self) -> SystemConfig:
        """Get system-wide configuration."""
        pass

    @abstractmethod
    def get_value(self, key: str, default: Any = None) -> ConfigurationValue:
        """
        Get a specific configuration value.

        Args:
            key: Configuration key (e.g., "fleet.robot_count")
            default: Default value if not found

        Returns:
            ConfigurationValue: Configuration value with metadata
        """
        pass

    @abstractmethod
    def set_value(self, key: str, value: Any) -> None:
        """
        Set a runtime override for a configuration value.

        Args:
            key: Configuration key
            value: Configuration value
        """
        pass

    @abstractmethod
    def reload(self) -> None:
        """Reload configuration from sources."""
        pass

    @abstractmethod
    def validate(self) -> List[str]:
        """
        Validate all configuration values.

        Returns:
            List[str]: List of validation errors (empty if valid)
        """
        pass

    @property
    @abstractmethod
    def errors(self) -> List[str]:
        """Current configuration validation errors."""
        pass


class IConfigurationValidator(ABC):
    """
    Interface for configuration validation.

    Responsibilities:
    - Validate each configuration section
    - Validate cross-section consistency
    - Provide detailed error messages
    """

    @abstractmethod
    def validate_fleet_config(self, config: FleetConfig, grid: GridConfig) -> List[str]:
        """Validate fleet seeding against the grid it is placed on."""
        pass

    @abstractmethod
    def validate_charging_config(self, config: ChargingConfig, fleet: FleetConfig) -> List[str]:
        """Validate charge levels and the fleet's initial charge."""
        pass

    @abstractmethod
    def validate_timing_config(self, scheduler: SchedulerConfig, robot: RobotConfig,
                               picker: PickerConfig) -> List[str]:
        """Validate tick durations."""
        pass

    @abstractmethod
    def validate_grid_config(self, config: GridConfig) -> List[str]:
        """Validate layout dimensions."""
        pass

    @abstractmethod
    def validate_simulation_config(self, config: SimulationConfig) -> List[str]:
        """Validate run parameters."""
        pass

    @abstractmethod
    def validate_system_config(self, config: SystemConfig) -> List[str]:
        """Validate system configuration."""
        pass


class IConfigurationSource(ABC):
    """
    Interface for configuration sources.

    Responsibilities:
    - Load configuration from a specific source
    - Handle source-specific errors
    """

    @abstractmethod
    def load_configuration(self) -> Dict[str, Any]:
        """
        Load configuration from source.

        Returns:
            Dict[str, Any]: Flat "section.key" configuration data

        Raises:
            ConfigurationError: If loading fails
        """
        pass

    @abstractmethod
    def get_source_type(self) -> ConfigurationSource:
        """Get the source type."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the source has anything to load; the provider skips it otherwise."""
        pass
