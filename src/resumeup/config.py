"""
Settings management for resumeup.

Handles loading of the optional resumeup.yaml settings file. Secrets
(tokens, client identity, Telegram keys) live in the .env file instead,
see resumeup.auth.credentials.
"""

import copy
import yaml
from pathlib import Path
from typing import Dict, Any


DEFAULT_SETTINGS_PATH = "config/resumeup.yaml"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "api_url": "https://api.hh.ru",
    "user_agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64)",
    "request_timeout": 30,
    "success_template": "Успешно поднято {title}",
    "log": {
        "file": "resume_up.log",
        "max_bytes": 1024 * 1024,
        "backup_count": 3,
        "compress": True,
        "level": "INFO",
        "max_age_days": 30,
    },
}

_STRING_KEYS = ["api_url", "user_agent", "success_template"]
_LOG_TYPES = {
    "file": str,
    "max_bytes": int,
    "backup_count": int,
    "compress": bool,
    "level": str,
    "max_age_days": int,
}


def load_settings(path: str = DEFAULT_SETTINGS_PATH) -> Dict[str, Any]:
    """
    Load settings from YAML file, merged over the defaults.

    A missing file is not an error: the defaults are returned as-is.

    Args:
        path: Path to resumeup.yaml

    Returns:
        Settings dictionary with every key of DEFAULT_SETTINGS present

    Raises:
        yaml.YAMLError: If YAML parsing fails
        ValueError: If a known key has the wrong type
    """
    settings = copy.deepcopy(DEFAULT_SETTINGS)
    config_path = Path(path)

    if not config_path.exists():
        return settings

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    # Empty file means "use defaults"
    if data is None:
        return settings

    if not isinstance(data, dict):
        raise ValueError(f"Settings file must contain a mapping: {path}")

    for key in _STRING_KEYS:
        if key in data:
            if not isinstance(data[key], str) or not data[key]:
                raise ValueError(f"'{key}' must be a non-empty string")
            settings[key] = data[key]

    if "request_timeout" in data:
        timeout = data["request_timeout"]
        # bool is an int subclass, reject it explicitly
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ValueError("'request_timeout' must be a positive number")
        settings["request_timeout"] = timeout

    if "log" in data:
        log_section = data["log"]
        if not isinstance(log_section, dict):
            raise ValueError("'log' must be a mapping")

        for field, expected in _LOG_TYPES.items():
            if field not in log_section:
                continue
            value = log_section[field]
            if expected is int and isinstance(value, bool):
                raise ValueError(f"'log.{field}' must be an integer")
            if not isinstance(value, expected):
                raise ValueError(
                    f"'log.{field}' must be of type {expected.__name__}"
                )
            if field == "max_age_days" and value < 0:
                raise ValueError("'log.max_age_days' must not be negative")
            settings["log"][field] = value

    return settings
