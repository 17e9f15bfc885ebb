"""
Configuration sources for the simulation.

Each source yields a flat {"section.key": value} dictionary. The provider
layers them as environment > file > defaults.
"""
import json
import os
from pathlib import Path
from typing import Any, Dict

import yaml

from interfaces.configuration_interface import (
    IConfigurationSource, ConfigurationSource, ConfigurationError
)


def _flatten(data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Flatten nested sections ({"fleet": {"robot_count": 3}}) into dotted keys."""
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            flat.update(_flatten(value, full_key))
        else:
            flat[full_key] = value
    return flat


class EnvironmentConfigurationSource(IConfigurationSource):
    """
    Reads WAREHOUSE_<SECTION>_<KEY> variables, e.g. WAREHOUSE_FLEET_ROBOT_COUNT=4
    becomes fleet.robot_count = 4. Values are parsed as JSON when possible.
    """

    def __init__(self, prefix: str = "WAREHOUSE_"):
        self.prefix = prefix

    def load_configuration(self) -> Dict[str, Any]:
        return {
            self._config_key(key): self._parse_value(value)
            for key, value in os.environ.items()
            if key.startswith(self.prefix)
        }

    def get_source_type(self) -> ConfigurationSource:
        return ConfigurationSource.ENVIRONMENT

    def is_available(self) -> bool:
        return any(key.startswith(self.prefix) for key in os.environ)

    def _config_key(self, env_key: str) -> str:
        section, _, field = env_key[len(self.prefix):].lower().partition('_')
        return f"{section}.{field}" if field else section

    @staticmethod
    def _parse_value(value: str) -> Any:
        try:
            return json.loads(value)
        except ValueError:
            pass
        if value.lower() in ('true', 'false'):
            return value.lower() == 'true'
        return value


class FileConfigurationSource(IConfigurationSource):
    """JSON or YAML file, flat ("fleet.robot_count: 3") or nested by section."""

    def __init__(self, file_path: str, file_format: str = "auto"):
        self.file_path = Path(file_path)
        self.file_format = file_format

    def load_configuration(self) -> Dict[str, Any]:
        if not self.file_path.exists():
            raise ConfigurationError(f"Configuration file not found: {self.file_path}")

        format_type = self._determine_format()
        if format_type not in ("json", "yaml"):
            raise ConfigurationError(f"Unsupported file format: {format_type}")
        try:
            with open(self.file_path, 'r') as f:
                data = json.load(f) if format_type == "json" else yaml.safe_load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load file configuration: {e}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {self.file_path} must contain a mapping")
        return _flatten(data)

    def get_source_type(self) -> ConfigurationSource:
        return ConfigurationSource.FILE

    def is_available(self) -> bool:
        return self.file_path.is_file()

    def _determine_format(self) -> str:
        if self.file_format != "auto":
            return self.file_format
        # YAML also reads JSON, so anything not .json goes through yaml
        return "json" if self.file_path.suffix.lower() == ".json" else "yaml"


class DefaultConfigurationSource(IConfigurationSource):
    """Built-in values for every key."""

    DEFAULTS: Dict[str, Any] = {
        # Fleet seeding
        "fleet.robot_count": 10,
        "fleet.home_row": 0,
        "fleet.home_start_column": 2,
        "fleet.initial_charge": 100,

        # Charging
        "charging.recharge_threshold": 100,  # charge back to full after every retrieval
        "charging.drain_per_move": 1,
        "charging.max_level": 100,

        "scheduler.retry_delay_ticks": 1,

        # Robot task durations
        "robot.move_duration_ticks": 1,
        "robot.shelf_action_ticks": 1,

        "picker.pick_duration_ticks": 1,

        # Generated layout, unless a CSV is given
        "grid.width": 24,
        "grid.height": 16,
        "grid.csv_file": None,

        # Simulation run
        "simulation.max_ticks": 10000,
        "simulation.order_count": 5,
        "simulation.item_count": 20,
        "simulation.seed": 42,

        "system.log_level": "INFO",
        "system.log_file": None,
        "system.log_format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    }

    def load_configuration(self) -> Dict[str, Any]:
        return dict(self.DEFAULTS)

    def get_source_type(self) -> ConfigurationSource:
        return ConfigurationSource.DEFAULT

    def is_available(self) -> bool:
        return True
