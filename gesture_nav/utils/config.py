"""
Configuration loading.

Reads a YAML file, deep-merges it over the built-in defaults, warns about
fields with the wrong type, and builds the typed per-component configs.
"""

import copy
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

import yaml

from ..control.selection_controller import SelectionConfig
from ..control.status_display import StatusConfig
from ..recognition.gesture_engine import GestureEngineConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "swipe": {
        "capacity": 10,
        "time_window": 0.8,
        "min_samples": 3,
        "displacement_threshold": 50.0,
        "speed_threshold": 30.0,
        "noise_floor": 3.0,
        "dominance_ratio": 0.7,
        "cooldown": 1.0,
    },
    "depth": {
        "capacity": 15,
        "time_window": 1.0,
        "min_samples": 5,
        "displacement_threshold": 0.02,
        "speed_threshold": 0.05,
        "noise_floor": 0.005,
        "cooldown": 1.5,
        "activity_frames": 5,
        "activity_threshold": 0.01,
    },
    "motion": {"stationary_tolerance": 30.0},
    "selection": {
        "activation_delay": 0.8,
        "pulse_duration": 0.8,
        "inactivity_timeout": 2.0,
    },
    "status": {"reset_delay": 2.0},
    "camera": {"device_id": 0, "width": 640, "height": 480, "fps": 30, "flip_horizontal": False},
    "mediapipe": {
        "model_path": "",
        "max_num_hands": 1,
        "min_detection_confidence": 0.7,
        "min_tracking_confidence": 0.5,
    },
    "logging": {"level": "INFO", "file": None},
}

# Schema: section -> field -> expected type
_CONFIG_SCHEMA = {
    "swipe": {"capacity": int, "time_window": float, "min_samples": int,
              "displacement_threshold": float, "speed_threshold": float,
              "noise_floor": float, "dominance_ratio": float, "cooldown": float},
    "depth": {"capacity": int, "time_window": float, "min_samples": int,
              "displacement_threshold": float, "speed_threshold": float,
              "noise_floor": float, "cooldown": float,
              "activity_frames": int, "activity_threshold": float},
    "selection": {"activation_delay": float, "pulse_duration": float,
                  "inactivity_timeout": float},
    "camera": {"device_id": int, "width": int, "height": int, "fps": int},
    "logging": {"level": str},
}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base dict."""
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def validate_config(data: dict) -> list:
    """Check field types against the schema. Returns the list of warnings."""
    warnings = []
    for section_name, fields in _CONFIG_SCHEMA.items():
        section = data.get(section_name)
        if section is None:
            continue
        if not isinstance(section, dict):
            warnings.append(f"Section '{section_name}' should be a dict, got {type(section).__name__}")
            continue
        for field_name, expected_type in fields.items():
            if field_name not in section:
                continue
            value = section[field_name]
            # Allow int where float is expected
            if expected_type is float and isinstance(value, (int, float)) and not isinstance(value, bool):
                continue
            if not isinstance(value, expected_type):
                warnings.append(
                    f"{section_name}.{field_name}: expected {expected_type.__name__}, "
                    f"got {type(value).__name__} ({value!r})"
                )

    for w in warnings:
        logger.warning("Config validation: %s", w)
    return warnings


def load_config(config_path: Optional[Union[str, Path]] = None) -> dict:
    """Load YAML configuration merged over the defaults.

    A missing file is not an error: the defaults are returned.
    """
    data = copy.deepcopy(DEFAULT_CONFIG)
    if config_path is None:
        return data

    try:
        with open(config_path, "r") as f:
            loaded = yaml.safe_load(f) or {}
        logger.info("Loaded config from %s", config_path)
    except FileNotFoundError:
        logger.warning("Config file not found: %s, using defaults", config_path)
        return data

    if not isinstance(loaded, dict):
        raise ValueError(f"{config_path}: top level must be a mapping, got {type(loaded).__name__}")

    data = _deep_merge(data, loaded)
    validate_config(data)
    return data


@dataclass
class AppConfig:
    """Application configuration container."""
    engine: GestureEngineConfig = field(default_factory=GestureEngineConfig)
    selection: SelectionConfig = field(default_factory=SelectionConfig)
    status: StatusConfig = field(default_factory=StatusConfig)
    camera: dict = field(default_factory=dict)
    mediapipe: dict = field(default_factory=dict)
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_dict(cls, config: dict) -> "AppConfig":
        logging_cfg = config.get("logging", {}) or {}
        return cls(
            engine=GestureEngineConfig.from_dict(config),
            selection=SelectionConfig.from_dict(config.get("selection", {})),
            status=StatusConfig.from_dict(config.get("status", {})),
            camera=dict(config.get("camera", {})),
            mediapipe=dict(config.get("mediapipe", {})),
            log_level=logging_cfg.get("level", "INFO"),
            log_file=logging_cfg.get("file"),
        )


def load_app_config(config_path: Optional[Union[str, Path]] = None) -> AppConfig:
    """Load and type the full application configuration."""
    return AppConfig.from_dict(load_config(config_path))
