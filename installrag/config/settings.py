"""
Loader Configuration
====================

Settings for the installation loader: where the configuration document
lives, which category codes identify sensors, actuators and controllers,
and how synthetic names are derived.

Defaults come from config/loader.yaml; the document location can be
overridden through environment variables.

Usage:
    from installrag.config import get_loader_config

    config = get_loader_config()
    print(config.file_path)          # data/installation-config.json
    print(config.category_codes())   # CategoryCodes(sensor=18, ...)
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

_CONFIG_PATH = Path(__file__).parent / "loader.yaml"

# Packaged defaults, loaded once
_YAML_DEFAULTS: Optional[Dict[str, Any]] = None


def load_yaml_defaults(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load loader defaults from YAML.

    The packaged file is read once and cached; an explicit path is always
    read fresh.
    """
    global _YAML_DEFAULTS

    if path is not None:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    if _YAML_DEFAULTS is None:
        if _CONFIG_PATH.exists():
            with open(_CONFIG_PATH, "r", encoding="utf-8") as f:
                _YAML_DEFAULTS = yaml.safe_load(f) or {}
        else:
            logger.warning(f"Config file not found: {_CONFIG_PATH}")
            _YAML_DEFAULTS = {}

    return _YAML_DEFAULTS


def _section(name: str) -> Dict[str, Any]:
    return load_yaml_defaults().get(name, {}) or {}


def _get_env_or_default(key: str, default: str) -> str:
    """Read a value from the environment, falling back to default."""
    value = os.environ.get(key, default)
    # Resolve ${VAR} references
    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        return os.environ.get(var_name, default)
    return value


@dataclass(frozen=True)
class CategoryCodes:
    """
    Endpoint category codes used by the statistics aggregator.

    Attributes:
        sensor: Code identifying sensors
        actuators: Codes identifying actuators
        controllers: Codes identifying controllers
        non_device: Code reserved for records that are not devices
    """
    sensor: int = 18
    actuators: Tuple[int, ...] = (11, 12, 15)
    controllers: Tuple[int, ...] = (0, 1, 2)
    non_device: int = -1

    # bool is an int subclass: True == 1 must not count as a category
    def is_sensor(self, category: Any) -> bool:
        return not isinstance(category, bool) and category == self.sensor

    def is_actuator(self, category: Any) -> bool:
        return not isinstance(category, bool) and category in self.actuators

    def is_controller(self, category: Any) -> bool:
        return not isinstance(category, bool) and category in self.controllers


@dataclass
class LoaderConfig:
    """
    Configuration for InstallationLoader.

    Attributes:
        document_dir: Directory holding the installation document
        target_file: File name of the installation document
        default_installation_name: Name used when metadata.name is unset
        partition_prefix: Prefix for synthetic partition names
        device_prefix: Prefix for synthetic endpoint names
        prefix_length: Identifier characters kept in synthetic names
        sensor_code: Sensor category code
        actuator_codes: Actuator category codes
        controller_codes: Controller category codes
        non_device_code: Category code for non-device records

    Example:
        >>> config = LoaderConfig(target_file="villa.json")
        >>> config.file_path
        PosixPath('data/villa.json')
    """

    document_dir: Path = field(default_factory=lambda: Path(_get_env_or_default(
        "INSTALLRAG_DOCUMENT_DIR",
        str(_section("source").get("document_dir", "data")),
    )))
    target_file: str = field(default_factory=lambda: _get_env_or_default(
        "INSTALLRAG_TARGET_FILE",
        str(_section("source").get("target_file", "installation-config.json")),
    ))

    default_installation_name: str = field(default_factory=lambda: _get_env_or_default(
        "INSTALLRAG_DEFAULT_INSTALLATION_NAME",
        str(_section("naming").get("default_installation_name", "installation-config")),
    ))
    partition_prefix: str = field(
        default_factory=lambda: _section("naming").get("partition_prefix", "Partition_")
    )
    device_prefix: str = field(
        default_factory=lambda: _section("naming").get("device_prefix", "Device_")
    )
    prefix_length: int = field(
        default_factory=lambda: int(_section("naming").get("prefix_length", 8))
    )

    sensor_code: int = field(
        default_factory=lambda: int(_section("categories").get("sensor", 18))
    )
    actuator_codes: Tuple[int, ...] = field(
        default_factory=lambda: tuple(_section("categories").get("actuators", [11, 12, 15]))
    )
    controller_codes: Tuple[int, ...] = field(
        default_factory=lambda: tuple(_section("categories").get("controllers", [0, 1, 2]))
    )
    non_device_code: int = field(
        default_factory=lambda: int(_section("categories").get("non_device", -1))
    )

    def __post_init__(self):
        """Normalize types and validate values."""
        self.document_dir = Path(self.document_dir)
        self.actuator_codes = tuple(self.actuator_codes)
        self.controller_codes = tuple(self.controller_codes)
        if self.prefix_length < 1:
            raise ValueError(f"prefix_length must be >= 1, got {self.prefix_length}")
        if not self.target_file:
            raise ValueError("target_file must not be empty")

    @property
    def file_path(self) -> Path:
        """Full path of the installation document."""
        return self.document_dir / self.target_file

    def category_codes(self) -> CategoryCodes:
        return CategoryCodes(
            sensor=self.sensor_code,
            actuators=self.actuator_codes,
            controllers=self.controller_codes,
            non_device=self.non_device_code,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize config for logging."""
        return {
            "document_dir": str(self.document_dir),
            "target_file": self.target_file,
            "default_installation_name": self.default_installation_name,
            "partition_prefix": self.partition_prefix,
            "device_prefix": self.device_prefix,
            "prefix_length": self.prefix_length,
            "sensor_code": self.sensor_code,
            "actuator_codes": list(self.actuator_codes),
            "controller_codes": list(self.controller_codes),
            "non_device_code": self.non_device_code,
        }

    @classmethod
    def for_test(cls, **kwargs) -> "LoaderConfig":
        """
        Factory for tests: fixed location, ignores the environment.
        """
        defaults = {
            "document_dir": Path("tests/data"),
            "target_file": "installation-config.json",
            "default_installation_name": "installation-config",
        }
        defaults.update(kwargs)
        return cls(**defaults)


# Global default config
_current_config: Optional[LoaderConfig] = None


def get_loader_config() -> LoaderConfig:
    """Return the process-wide default LoaderConfig, creating it on first use."""
    global _current_config
    if _current_config is None:
        _current_config = LoaderConfig()
    return _current_config


def set_loader_config(config: Optional[LoaderConfig]) -> None:
    """Replace (or reset with None) the process-wide default LoaderConfig."""
    global _current_config
    _current_config = config
