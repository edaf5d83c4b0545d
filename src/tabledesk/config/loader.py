from copy import deepcopy
from pathlib import Path
from typing import Any, Dict

import yaml

from tabledesk.retrieval.seed_fetcher import DEFAULT_SEED_URL

DEFAULT_CONFIG_PATH = Path("tabledesk.config.yaml")

BASE_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "storage": {
        "sqlite_path": "tabledesk.db",
    },
    "seed": {
        "enabled": True,
        "url": DEFAULT_SEED_URL,
        "timeout_seconds": 20,
        "user_agent": "tabledesk/0.1",
    },
    "view": {
        "page_size": 5,
    },
    "export": {
        "filename": "export.csv",
    },
}


def _merge_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay user sections on the built-in defaults, one section at a time."""
    merged = deepcopy(BASE_DEFAULTS)
    for section, values in config.items():
        if section in merged:
            if values is None:
                continue
            if not isinstance(values, dict):
                raise ValueError(f"Config section '{section}' must be a dictionary")
            merged[section].update(values)
        else:
            merged[section] = values
    return merged


def _validate(config: Dict[str, Any]) -> None:
    page_size = config["view"].get("page_size")
    if not isinstance(page_size, int) or isinstance(page_size, bool) or page_size < 1:
        raise ValueError("Config 'view.page_size' must be a positive integer")

    timeout = config["seed"].get("timeout_seconds")
    if not isinstance(timeout, (int, float)) or isinstance(timeout, bool) or timeout <= 0:
        raise ValueError("Config 'seed.timeout_seconds' must be a positive number")

    if not config["storage"].get("sqlite_path"):
        raise ValueError("Config 'storage.sqlite_path' is required")


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """
    Load configuration from YAML with built-in defaults applied.

    Args:
        path: Optional config file. When omitted, tabledesk.config.yaml is
            used if it exists, otherwise the defaults alone.

    Returns:
        Complete configuration dictionary

    Raises:
        FileNotFoundError: If an explicit path doesn't exist
        ValueError: If the file's structure is invalid
    """
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        if path is not None:
            raise FileNotFoundError(f"Config file not found: {cfg_path}")
        return deepcopy(BASE_DEFAULTS)

    with cfg_path.open("r", encoding="utf-8") as f:
        try:
            config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Config file {cfg_path} is not valid YAML: {e}") from e

    if not isinstance(config, dict):
        raise ValueError("Config must be a dictionary")

    merged = _merge_defaults(config)
    _validate(merged)
    return merged
