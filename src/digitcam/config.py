"""Configuration loading and validation."""

import copy
import logging
import sys
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)

THRESHOLD_MIN = 0
THRESHOLD_MAX = 255

DEFAULTS: dict[str, Any] = {
    "capture": {
        "device_index": 0,
        "output_path": "~/.digitcam/tmp_ocr.jpg",
        "warmup_frames": 5,
    },
    "ocr": {
        "language": "jpn",
        "char_whitelist": "0123456789",
        "learn_data_dir": "~/.digitcam/learn",
        "asset_path": "",
        "tesseract_cmd": "",
        "page_seg_mode": 0,
    },
    "binarize": {
        "threshold": 150,
    },
}


def _deep_merge(base: dict, override: dict) -> dict:
    """Merge override into base, returning a new dict."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def clamp_threshold(value: int) -> int:
    """Clamp a threshold into the slider bounds."""
    return max(THRESHOLD_MIN, min(THRESHOLD_MAX, int(value)))


def _validate(config: dict[str, Any]) -> dict[str, Any]:
    threshold = config["binarize"]["threshold"]
    clamped = clamp_threshold(threshold)
    if clamped != threshold:
        logger.warning(
            "binarize.threshold=%s out of range [%d, %d], using %d",
            threshold,
            THRESHOLD_MIN,
            THRESHOLD_MAX,
            clamped,
        )
        config["binarize"]["threshold"] = clamped
    return config


def resolve_path(value: str | Path) -> Path:
    """Expand ``~`` in a configured path."""
    return Path(value).expanduser()


def load_config(path: str | Path = "config.toml") -> dict[str, Any]:
    """Load config from a TOML file, falling back to defaults for missing values."""
    config_path = Path(path)
    if config_path.exists():
        with open(config_path, "rb") as f:
            user_config = tomllib.load(f)
        return _validate(_deep_merge(DEFAULTS, user_config))
    return copy.deepcopy(DEFAULTS)
