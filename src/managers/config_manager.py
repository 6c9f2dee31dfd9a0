"""
Config Manager

Main configuration manager with include system support.
Loads modular YAML files and exposes typed views of each section.
"""

import copy
from dataclasses import fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar

import yaml

from models.config import DialConfig, HandStyle, RuntimeConfig, SchedulerConfig, ShadowStyle
from models.enums import LogCategory, LogLevel, RendererType
from models.physics import PhysicsConfig
from utils.logger import get_logger
from utils.serialization import Serializer

log = get_logger().for_category(LogCategory.CONFIG)

T = TypeVar("T")

SRC_DIR = Path(__file__).resolve().parent.parent


def deep_merge(target: Dict, source: Dict) -> Dict:
    """
    Recursively merge source into a copy of target.

    Nested dicts merge key by key; every other value (scalars, lists)
    from source replaces the target value. Neither input is modified.
    """
    output = copy.deepcopy(target)
    for key, value in source.items():
        if isinstance(value, dict) and isinstance(output.get(key), dict):
            output[key] = deep_merge(output[key], value)
        else:
            output[key] = copy.deepcopy(value)
    return output


class ConfigManager:
    """
    Main configuration manager with include system support

    Loads config.yaml and processes the include: directive to load modular
    YAML files. Falls back to factory defaults if anything goes wrong.

    Example:
        config = ConfigManager()
        config.load(overrides={"clock": {"physics": {"overshoot_degrees": 3}}})

        physics = config.get_physics_config()
        runtime = config.get_runtime_config()
    """

    def __init__(
        self,
        config_path: str = "config/config.yaml",
        defaults_path: str = "config/factory_defaults.yaml",
        base_dir: Optional[Path] = None,
    ):
        """
        Initialize ConfigManager

        Args:
            config_path: Path to main config.yaml (relative to base_dir)
            defaults_path: Path to factory defaults fallback (relative to base_dir)
            base_dir: Directory paths are resolved against (default: src/)
        """
        self.base_dir = Path(base_dir) if base_dir else SRC_DIR
        self.config_path = Path(config_path)
        self.factory_defaults_path = Path(defaults_path)
        self.data: Dict[str, Any] = {}
        self.using_factory_defaults = False

    def load(self, overrides: Optional[Dict] = None) -> Dict:
        """
        Load YAML configuration with include system support

        Process:
        1. Load main config.yaml
        2. If it has 'include:' list, load and merge those files
        3. Otherwise treat as monolithic config
        4. Fallback to factory_defaults.yaml on failure
        5. Deep-merge programmatic overrides on top

        Returns:
            Merged config data dict
        """
        self.using_factory_defaults = False
        try:
            full_path = self.base_dir / self.config_path

            with open(full_path, "r", encoding="utf-8") as f:
                main_config = yaml.safe_load(f) or {}

            if 'include' in main_config:
                log.info("Using include-based configuration")
                includes = main_config.pop('include')
                self.data = deep_merge(
                    self._load_with_includes(includes, full_path.parent),
                    main_config,
                )
            else:
                log.info("Using monolithic configuration")
                self.data = main_config

        except Exception as ex:
            log.error("Failed to load config.yaml", error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")

            defaults_path = self.base_dir / self.factory_defaults_path
            with open(defaults_path, "r", encoding="utf-8") as f:
                self.data = yaml.safe_load(f) or {}
            self.using_factory_defaults = True

        if overrides:
            self.data = deep_merge(self.data, overrides)
            log.debug("Applied config overrides", keys=str(list(overrides.keys())))

        return self.data

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict:
        """
        Load and merge multiple YAML files from include list

        Args:
            include_list: List of filenames to load (e.g., ["clock.yaml", "dial.yaml"])
            config_dir: Directory containing config files

        Returns:
            Merged config dict
        """
        merged: Dict[str, Any] = {}

        for filename in include_list:
            filepath = config_dir / filename
            try:
                with open(filepath, 'r', encoding='utf-8') as f:
                    file_data = yaml.safe_load(f)
                    if file_data:
                        merged = deep_merge(merged, file_data)
                        log.info(f"Loaded {filename}", keys=str(list(file_data.keys())))
            except FileNotFoundError:
                log.error(f"File not found: {filename}")
                raise
            except Exception as ex:
                log.error(f"Error loading {filename}", error=str(ex))
                raise

        log.info("Config merge complete", total_keys=len(merged), keys=str(list(merged.keys())[:10]))
        return merged

    # ===== Typed views =====

    def _section(self, *path: str) -> Dict[str, Any]:
        node: Any = self.data
        for key in path:
            node = node.get(key) if isinstance(node, dict) else None
            if node is None:
                return {}
        if not isinstance(node, dict):
            log.warn(f"Config section '{'.'.join(path)}' is not a mapping, ignoring")
            return {}
        return node

    def _build(self, cls: Type[T], values: Dict[str, Any], section: str) -> T:
        """Build a dataclass from known keys, warning about the rest"""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            log.warn(f"Unknown keys in '{section}' ignored", keys=", ".join(unknown))
        return cls(**{k: v for k, v in values.items() if k in known})

    def get_physics_config(self) -> PhysicsConfig:
        """Raw physics values; ClockEngine sanitizes them"""
        return self._build(PhysicsConfig, self._section("clock", "physics"), "clock.physics")

    def get_scheduler_config(self) -> SchedulerConfig:
        return self._build(SchedulerConfig, self._section("clock", "scheduler"), "clock.scheduler")

    def get_dial_config(self) -> DialConfig:
        dial = dict(self._section("dial"))
        nested: Dict[str, Any] = {}

        for hand in ("hour_hand", "minute_hand", "second_hand"):
            if hand in dial:
                base = getattr(DialConfig(), hand)
                values = {**_dataclass_values(base), **(dial.pop(hand) or {})}
                nested[hand] = self._build(HandStyle, values, f"dial.{hand}")

        if "hand_shadow" in dial:
            nested["hand_shadow"] = self._build(ShadowStyle, dial.pop("hand_shadow") or {}, "dial.hand_shadow")

        dial_config = self._build(DialConfig, dial, "dial")
        return replace(dial_config, **nested) if nested else dial_config

    def get_runtime_config(self) -> RuntimeConfig:
        runtime = self._section("runtime")
        api = self._section("runtime", "api")
        logging = self._section("runtime", "logging")
        defaults = RuntimeConfig()

        values: Dict[str, Any] = {
            "time_zone_offset_minutes": runtime.get(
                "time_zone_offset_minutes",
                self._section("clock").get("time_zone_offset_minutes", defaults.time_zone_offset_minutes),
            ),
            "renderer": self._enum(runtime.get("renderer"), RendererType, defaults.renderer, "runtime.renderer"),
            "console_size": tuple(runtime.get("console_size", defaults.console_size)),
            "api_enabled": api.get("enabled", defaults.api_enabled),
            "api_host": api.get("host", defaults.api_host),
            "api_port": api.get("port", defaults.api_port),
            "log_level": self._enum(logging.get("level"), LogLevel, defaults.log_level, "runtime.logging.level"),
            "log_colors": logging.get("colors", defaults.log_colors),
        }
        return RuntimeConfig(**values)

    @staticmethod
    def _enum(value, enum_type, default, section: str):
        if value is None:
            return default
        try:
            return Serializer.str_to_enum(value, enum_type)
        except ValueError:
            log.warn(f"Invalid value for '{section}', using {default.name}", value=value)
            return default


def _dataclass_values(obj) -> Dict[str, Any]:
    return {f.name: getattr(obj, f.name) for f in fields(obj)}

