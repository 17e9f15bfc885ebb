"""
Configuration Provider Implementation - Centralized configuration composition root.

This provider loads, merges, and validates configuration from all sources (env, file, defaults),
providing typed access and supporting runtime overrides and reloads.
"""
import logging
from typing import Any, Dict, List, Optional

from interfaces.configuration_interface import (
    IBusinessConfigurationProvider, IConfigurationSource, IConfigurationValidator,
    FleetConfig, ChargingConfig, SchedulerConfig, RobotConfig, PickerConfig,
    GridConfig, SimulationConfig, SystemConfig,
    ConfigurationSource, ConfigurationValue, ConfigurationError
)
from config.configuration_sources import (
    EnvironmentConfigurationSource, FileConfigurationSource, DefaultConfigurationSource
)
from config.configuration_validator import ConfigurationValidatorImpl


logger = logging.getLogger(__name__)


class ConfigurationProvider(IBusinessConfigurationProvider):
    """
    Centralized configuration provider that merges all sources and validates configuration.
    Supports runtime overrides and reloads.
    """
    def __init__(self,
                 config_file: Optional[str] = None,
                 config_file_format: str = "auto",
                 env_prefix: str = "WAREHOUSE_",
                 validator: Optional[IConfigurationValidator] = None):
        self._sources: List[IConfigurationSource] = []
        self._config: Dict[str, Any] = {}
        self._key_sources: Dict[str, ConfigurationSource] = {}
        self._overrides: Dict[str, Any] = {}
        self._validator = validator or ConfigurationValidatorImpl()
        self._errors: List[str] = []
        self._init_sources(config_file, config_file_format, env_prefix)
        self.reload()

    def _init_sources(self, config_file, config_file_format, env_prefix):
        # Order: env > file > defaults
        self._sources = [
            EnvironmentConfigurationSource(prefix=env_prefix)
        ]
        if config_file:
            self._sources.append(FileConfigurationSource(config_file, config_file_format))
        self._sources.append(DefaultConfigurationSource())

    def reload(self) -> None:
        """Reload configuration from all sources and validate."""
        merged: Dict[str, Any] = {}
        key_sources: Dict[str, ConfigurationSource] = {}
        for source in reversed(self._sources):  # Defaults first, env last
            if not source.is_available():
                logger.debug("%s configuration source unavailable", source.get_source_type().value)
                continue
            try:
                conf = source.load_configuration()
            except ConfigurationError as e:
                logger.warning("Skipping %s configuration source: %s", source.get_source_type().value, e)
                continue
            merged.update(conf)
            for key in conf:
                key_sources[key] = source.get_source_type()
        self._config = merged
        self._key_sources = key_sources
        self._errors = self.validate()
        if self._errors:
            logger.warning("Configuration has %d validation error(s): %s", len(self._errors), self._errors)

    def validate(self) -> List[str]:
        """Validate all configuration sections and return errors."""
        errors = []
        try:
            grid = self.get_grid_config()
            fleet = self.get_fleet_config()
            errors.extend(self._validator.validate_grid_config(grid))
            errors.extend(self._validator.validate_fleet_config(fleet, grid))
            errors.extend(self._validator.validate_charging_config(self.get_charging_config(), fleet))
            errors.extend(self._validator.validate_timing_config(
                self.get_scheduler_config(), self.get_robot_config(), self.get_picker_config()))
            errors.extend(self._validator.validate_simulation_config(self.get_simulation_config()))
            errors.extend(self._validator.validate_system_config(self.get_system_config()))
        except (TypeError, ValueError, AttributeError) as e:
            errors.append(f"Validation error: {e}")
        return errors

    def _merged(self) -> Dict[str, Any]:
        return {**self._config, **self._overrides}

    def get_fleet_config(self) -> FleetConfig:
        c = self._merged()
        return FleetConfig(
            robot_count=c.get("fleet.robot_count", 10),
            home_row=c.get("fleet.home_row", 0),
            home_start_column=c.get("fleet.home_start_column", 2),
            initial_charge=c.get("fleet.initial_charge", 100),
        )

    def get_charging_config(self) -> ChargingConfig:
        c = self._merged()
        return ChargingConfig(
            recharge_threshold=c.get("charging.recharge_threshold", 100),
            drain_per_move=c.get("charging.drain_per_move", 1),
            max_level=c.get("charging.max_level", 100),
        )

    def get_scheduler_config(self) -> SchedulerConfig:
        c = self._merged()
        return SchedulerConfig(
            retry_delay_ticks=c.get("scheduler.retry_delay_ticks", 1),
        )

    def get_robot_config(self) -> RobotConfig:
        c = self._merged()
        return RobotConfig(
            move_duration_ticks=c.get("robot.move_duration_ticks", 1),
            shelf_action_ticks=c.get("robot.shelf_action_ticks", 1),
        )

    def get_picker_config(self) -> PickerConfig:
        c = self._merged()
        return PickerConfig(
            pick_duration_ticks=c.get("picker.pick_duration_ticks", 1),
        )

    def get_grid_config(self) -> GridConfig:
        c = self._merged()
        return GridConfig(
            width=c.get("grid.width", 24),
            height=c.get("grid.height", 16),
            csv_file=c.get("grid.csv_file", None),
        )

    def get_simulation_config(self) -> SimulationConfig:
        c = self._merged()
        return SimulationConfig(
            max_ticks=c.get("simulation.max_ticks", 10000),
            order_count=c.get("simulation.order_count", 5),
            item_count=c.get("simulation.item_count", 20),
            seed=c.get("simulation.seed", 42),
        )

    def get_system_config(self) -> SystemConfig:
        c = self._merged()
        return SystemConfig(
            log_level=c.get("system.log_level", "INFO"),
            log_file=c.get("system.log_file", None),
            log_format=c.get("system.log_format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
        )

    def get_value(self, key: str, default: Any = None) -> ConfigurationValue:
        if key in self._overrides:
            value, source = self._overrides[key], ConfigurationSource.OVERRIDE
        else:
            value = self._config.get(key, default)
            source = self._key_sources.get(key, ConfigurationSource.DEFAULT)
        return ConfigurationValue(
            value=value,
            source=source,
            key=key,
            description=f"Config value for {key}",
            validation_errors=[e for e in self._errors if key.split('.')[-1] in e]
        )

    def set_value(self, key: str, value: Any) -> None:
        self._overrides[key] = value
        self._errors = self.validate()

    @property
    def errors(self) -> List[str]:
        return list(self._errors)
