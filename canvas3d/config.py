"""Configuration management."""

import copy
import logging
import os
import yaml
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "llm": {
        "api_key": "",
        "model": "gemini-2.5-flash",
    },
    "engine": {
        "fps": 60,
    },
    "api": {
        "host": "127.0.0.1",
        "port": 8000,
        "api_key": None,
        "timeout": 30,
    },
    "logging": {
        "level": "INFO",
        "file": None,
    },
    "prompts": {
        "module": None,
    },
}

_config: Dict[str, Any] = {}
_base_path: Path = None


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: str = None) -> Dict[str, Any]:
    """Load configuration from YAML file."""
    global _config, _base_path

    if config_path is None:
        # Try to find config in common locations
        possible_paths = [
            Path("config/config.yaml"),
            Path("config.yaml"),
            Path.home() / ".config" / "canvas3d" / "config.yaml",
        ]
        for path in possible_paths:
            if path.exists():
                config_path = str(path)
                break
        else:
            raise FileNotFoundError(
                "No config.yaml found. Copy config/config.example.yaml to config/config.yaml "
                "and fill in your values."
            )

    config_path = Path(config_path)
    _base_path = config_path.parent.parent  # Project root

    with open(config_path) as f:
        _config = _merge(DEFAULTS, yaml.safe_load(f) or {})

    _apply_environment()
    _resolve_paths()

    return _config


def use_defaults() -> Dict[str, Any]:
    """Reset configuration to the built-in defaults (plus environment)."""
    global _config, _base_path
    _config = copy.deepcopy(DEFAULTS)
    _base_path = Path.cwd()
    _apply_environment()
    return _config


def _apply_environment():
    """Fill secrets left empty in the file from the environment."""
    if not _config["llm"].get("api_key"):
        _config["llm"]["api_key"] = os.environ.get("GEMINI_API_KEY", "")


def _resolve_paths():
    """Resolve relative paths in config to absolute paths."""
    log_file = _config["logging"].get("file")
    if log_file:
        path = Path(log_file)
        if not path.is_absolute():
            _config["logging"]["file"] = str(_base_path / path)


def get_config() -> Dict[str, Any]:
    """Get the loaded configuration."""
    if not _config:
        try:
            load_config()
        except FileNotFoundError:
            logger.warning("No config.yaml found, using built-in defaults")
            use_defaults()
    return _config


def get(key: str, default: Any = None) -> Any:
    """Get a config value by dot-notation key (e.g., 'llm.model')."""
    keys = key.split(".")
    value = get_config()
    for k in keys:
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default
    return default if value is None else value
