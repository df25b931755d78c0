"""
callstats/config.py
Run configuration. Persists to callstats_config.json in the project root.
CLI flags override whatever is loaded here.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "callstats_config.json"

DEFAULT_CONFIG = {
    "dataset_path": "telecom_data.txt",
    "num_customers": 500,
    "num_calls": 200_000,
    "duration_mean": 300.0,
    "duration_std_dev": 60.0,
    "seed": None,
    "top_n": 3,
    "customer_id": 42,
    "report_path": None,
}

# Accepted JSON types per key. bool is rejected even though it subclasses int.
_KEY_TYPES = {
    "dataset_path":     (str,),
    "num_customers":    (int,),
    "num_calls":        (int,),
    "duration_mean":    (int, float),
    "duration_std_dev": (int, float),
    "seed":             (int, type(None)),
    "top_n":            (int,),
    "customer_id":      (int,),
    "report_path":      (str, type(None)),
}


def _config_path(project_root: Optional[Path] = None) -> Path:
    root = project_root or Path.cwd()
    return root / CONFIG_FILENAME


def load_config(project_root: Optional[Path] = None) -> Dict[str, Any]:
    """Load config from callstats_config.json. Returns defaults if missing or unreadable."""
    path = _config_path(project_root)
    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError("top-level JSON value is not an object")
            unknown = set(data) - set(DEFAULT_CONFIG)
            if unknown:
                logger.warning(f"Ignoring unknown config keys: {sorted(unknown)}")
            config = dict(DEFAULT_CONFIG)
            for key, value in data.items():
                if key in DEFAULT_CONFIG:
                    config[key] = _checked(key, value)
            return config
        except (json.JSONDecodeError, ValueError, OSError) as e:
            logger.warning(f"Config load failed: {e}")
    return dict(DEFAULT_CONFIG)


def _checked(key: str, value: Any) -> Any:
    """Return value if its JSON type fits key, else warn and return the default."""
    if isinstance(value, bool) or not isinstance(value, _KEY_TYPES[key]):
        logger.warning(
            f"Config key {key!r} has invalid value {value!r}; "
            f"using default {DEFAULT_CONFIG[key]!r}"
        )
        return DEFAULT_CONFIG[key]
    return value


def save_config(config: Dict[str, Any], project_root: Optional[Path] = None) -> Path:
    """Persist config to callstats_config.json."""
    path = _config_path(project_root)
    path.write_text(json.dumps(config, indent=2), encoding="utf-8")
    return path
