"""
Configuration Validator Implementation - Section and cross-section validation.

Each section is checked against a table of ValidationRule entries; cross-field
and cross-section checks (fleet homes inside the grid, threshold below the
maximum charge) follow the table.
"""
from dataclasses import dataclass
from typing import Any, Callable, List

from interfaces.configuration_interface import (
    IConfigurationValidator, FleetConfig, ChargingConfig, SchedulerConfig,
    RobotConfig, PickerConfig, GridConfig, SimulationConfig, SystemConfig
)


VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


@dataclass
class ValidationRule:
    """A validation rule with condition and error message."""
    condition: Callable[[Any], bool]
    error_message: str
    field_name: str


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ConfigurationValidatorImpl(IConfigurationValidator):
    """
    Configuration validator implementation.

    Responsibilities:
    - Validate all configuration sections
    - Provide detailed "Section.field: message" errors
    - Ensure configuration consistency across sections
    """

    def __init__(self):
        """Initialize validator with validation rules."""
        self._fleet_rules = self._create_fleet_validation_rules()
        self._charging_rules = self._create_charging_validation_rules()
        self._grid_rules = self._create_grid_validation_rules()
        self._simulation_rules = self._create_simulation_validation_rules()
        self._system_rules = self._create_system_validation_rules()

    @staticmethod
    def _apply(rules: List[ValidationRule], config: Any, section: str) -> List[str]:
        errors = []
        for rule in rules:
            try:
                ok = rule.condition(config)
            except TypeError:
                ok = False
            if not ok:
                errors.append(f"{section}.{rule.field_name}: {rule.error_message}")
        return errors

    def validate_fleet_config(self, config: FleetConfig, grid: GridConfig) -> List[str]:
        """
        Validate fleet seeding.

        Args:
            config: Fleet configuration to validate
            grid: Grid the fleet's home bays are laid out on

        Returns:
            List[str]: List of validation errors
        """
        errors = self._apply(self._fleet_rules, config, "Fleet")
        if errors:
            return errors

        # Layouts loaded from CSV define their own size; only generated grids are checked
        if grid.csv_file is None and _is_int(grid.width) and _is_int(grid.height):
            last_column = config.home_start_column + config.robot_count - 1
            if last_column >= grid.width:
                errors.append(
                    f"Fleet.robot_count: {config.robot_count} home bays starting at column "
                    f"{config.home_start_column} do not fit in grid width {grid.width}")
            if config.home_row >= grid.height:
                errors.append(f"Fleet.home_row: Row {config.home_row} is outside grid height {grid.height}")
        return errors

    def validate_charging_config(self, config: ChargingConfig, fleet: FleetConfig) -> List[str]:
        """
        Validate charge levels.

        Args:
            config: Charging configuration to validate
            fleet: Fleet configuration holding the initial charge

        Returns:
            List[str]: List of validation errors
        """
        errors = self._apply(self._charging_rules, config, "Charging")
        if errors:
            return errors

        if config.recharge_threshold > config.max_level:
            errors.append("Charging.recharge_threshold: Threshold cannot exceed max level")
        if _is_int(fleet.initial_charge) and not 0 <= fleet.initial_charge <= config.max_level:
            errors.append(f"Fleet.initial_charge: Must be between 0 and {config.max_level}")
        return errors

    def validate_timing_config(self, scheduler: SchedulerConfig, robot: RobotConfig,
                               picker: PickerConfig) -> List[str]:
        """
        Validate tick durations.

        A blocked event must be deferred by at least one tick, otherwise it
        would be re-dispatched within the same tick forever.
        """
        errors = []
        durations = [
            ("Scheduler.retry_delay_ticks", scheduler.retry_delay_ticks),
            ("Robot.move_duration_ticks", robot.move_duration_ticks),
            ("Robot.shelf_action_ticks", robot.shelf_action_ticks),
            ("Picker.pick_duration_ticks", picker.pick_duration_ticks),
        ]
        for name, value in durations:
            if not _is_int(value) or value < 1:
                errors.append(f"{name}: Must be a positive whole number of ticks")
        return errors

    def validate_grid_config(self, config: GridConfig) -> List[str]:
        """Validate layout dimensions."""
        return self._apply(self._grid_rules, config, "Grid")

    def validate_simulation_config(self, config: SimulationConfig) -> List[str]:
        """Validate run parameters."""
        return self._apply(self._simulation_rules, config, "Simulation")

    def validate_system_config(self, config: SystemConfig) -> List[str]:
        """
        Validate system configuration.

        Args:
            config: System configuration to validate

        Returns:
            List[str]: List of validation errors
        """
        errors = self._apply(self._system_rules, config, "System")
        if not errors and config.log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(f"System.log_level: Must be one of {VALID_LOG_LEVELS}")
        return errors

    def _create_fleet_validation_rules(self) -> List[ValidationRule]:
        """Create validation rules for fleet configuration."""
        return [
            ValidationRule(
                lambda c: _is_int(c.robot_count) and c.robot_count > 0,
                "Robot count must be a positive integer",
                "robot_count"
            ),
            ValidationRule(
                lambda c: _is_int(c.home_row) and c.home_row >= 0,
                "Home row must be a non-negative integer",
                "home_row"
            ),
            ValidationRule(
                lambda c: _is_int(c.home_start_column) and c.home_start_column >= 0,
                "Home start column must be a non-negative integer",
                "home_start_column"
            ),
            ValidationRule(
                lambda c: _is_int(c.initial_charge),
                "Initial charge must be an integer",
                "initial_charge"
            ),
        ]

    def _create_charging_validation_rules(self) -> List[ValidationRule]:
        """Create validation rules for charging configuration."""
        return [
            ValidationRule(
                lambda c: _is_int(c.max_level) and c.max_level > 0,
                "Max level must be a positive integer",
                "max_level"
            ),
            ValidationRule(
                lambda c: _is_int(c.recharge_threshold) and c.recharge_threshold > 0,
                "Recharge threshold must be a positive integer",
                "recharge_threshold"
            ),
            ValidationRule(
                lambda c: _is_int(c.drain_per_move) and c.drain_per_move >= 0,
                "Drain per move must be a non-negative integer",
                "drain_per_move"
            ),
        ]

    def _create_grid_validation_rules(self) -> List[ValidationRule]:
        """Create validation rules for grid configuration."""
        return [
            ValidationRule(
                lambda c: _is_int(c.width) and c.width >= 2,
                "Width must be an integer of at least 2",
                "width"
            ),
            ValidationRule(
                lambda c: _is_int(c.height) and c.height >= 2,
                "Height must be an integer of at least 2",
                "height"
            ),
            ValidationRule(
                lambda c: c.csv_file is None or isinstance(c.csv_file, str),
                "CSV file must be a path string",
                "csv_file"
            ),
        ]

    def _create_simulation_validation_rules(self) -> List[ValidationRule]:
        """Create validation rules for simulation configuration."""
        return [
            ValidationRule(
                lambda c: _is_int(c.max_ticks) and c.max_ticks > 0,
                "Max ticks must be a positive integer",
                "max_ticks"
            ),
            ValidationRule(
                lambda c: _is_int(c.order_count) and c.order_count >= 0,
                "Order count must be a non-negative integer",
                "order_count"
            ),
            ValidationRule(
                lambda c: _is_int(c.item_count) and c.item_count >= 0,
                "Item count must be a non-negative integer",
                "item_count"
            ),
            ValidationRule(
                lambda c: _is_int(c.seed),
                "Seed must be an integer",
                "seed"
            ),
        ]

    def _create_system_validation_rules(self) -> List[ValidationRule]:
        """Create validation rules for system configuration."""
        return [
            ValidationRule(
                lambda c: isinstance(c.log_level, str) and len(c.log_level.strip()) > 0,
                "Log level cannot be empty",
                "log_level"
            ),
            ValidationRule(
                lambda c: isinstance(c.log_format, str) and len(c.log_format.strip()) > 0,
                "Log format cannot be empty",
                "log_format"
            ),
        ]
