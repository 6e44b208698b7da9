"""
Configuration loading.

Reads the YAML config, merges it over built-in defaults, warns about
mistyped fields and builds the per-component config dataclasses.
"""

import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from ..capture.camera import CameraConfig
from ..detection.config import HandDetectorConfig
from ..effects.bubbles import BubbleConfig
from ..recognition.cooldown import RecognitionConfig
from ..rendering.skeleton import SkeletonStyle
from .visualization import VisualizerConfig

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent.parent.parent
CONFIG_DIR = BASE_DIR / "config"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.yaml"
DEFAULT_QUOTES_PATH = CONFIG_DIR / "quotes.yaml"

# Schema: sections and the expected types of their fields
_CONFIG_SCHEMA = {
    "camera": {
        "device_id": int,
        "width": int,
        "height": int,
        "fps": int,
        "flip_horizontal": bool,
    },
    "mediapipe": {
        "max_num_hands": int,
        "min_detection_confidence": float,
        "min_tracking_confidence": float,
    },
    "recognition": {
        "cooldown": float,
        "num_slots": int,
        "slot_by_handedness": bool,
    },
    "bubbles": {
        "ttl": float,
        "drift_range": float,
        "rotation_range": float,
    },
    "visualization": {
        "float_duration": float,
        "panel_width": int,
    },
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
    """Return human-readable warnings for mistyped fields (never raises)."""
    warnings = []
    for section_name, fields in _CONFIG_SCHEMA.items():
        section = data.get(section_name)
        if section is None:
            continue
        if not isinstance(section, dict):
            warnings.append(f"Section '{section_name}' should be a mapping, got {type(section).__name__}")
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


def load_config(config_path=None, defaults: Optional[dict] = None) -> dict:
    """Load a YAML config file merged over `defaults`. Missing files yield the defaults."""
    config_path = Path(config_path or DEFAULT_CONFIG_PATH)
    data = {}
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        logger.info("Loaded config from %s", config_path)
    except FileNotFoundError:
        logger.warning("Config file not found: %s, using defaults", config_path)

    if not isinstance(data, dict):
        logger.warning("Config root should be a mapping, ignoring %s", config_path)
        data = {}

    merged = _deep_merge(defaults or {}, data)
    validate_config(merged)
    return merged


@dataclass
class AppConfig:
    """Application configuration container."""
    camera: CameraConfig
    mediapipe: HandDetectorConfig
    recognition: RecognitionConfig
    bubbles: BubbleConfig
    skeleton: SkeletonStyle
    visualization: VisualizerConfig
    quotes_path: str = str(DEFAULT_QUOTES_PATH)
    window_title: str = "Inertia Scanner"

    @classmethod
    def from_dict(cls, config: dict) -> "AppConfig":
        """Create AppConfig from a configuration dictionary."""
        quotes_path = config.get("quotes_path") or str(DEFAULT_QUOTES_PATH)
        if not os.path.isabs(quotes_path):
            quotes_path = str(BASE_DIR / quotes_path)

        return cls(
            camera=CameraConfig.from_dict(config.get("camera", {})),
            mediapipe=HandDetectorConfig.from_dict(config.get("mediapipe", {})),
            recognition=RecognitionConfig.from_dict(config.get("recognition", {})),
            bubbles=BubbleConfig.from_dict(config.get("bubbles", {})),
            skeleton=SkeletonStyle.from_dict(config.get("skeleton", {})),
            visualization=VisualizerConfig.from_dict(config.get("visualization", {})),
            quotes_path=quotes_path,
            window_title=config.get("window_title", "Inertia Scanner"),
        )
