"""
User configuration — a small JSON file merged over built-in defaults.

Lives at ~/.worktime/config.json unless WORKTIME_CONFIG points elsewhere.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_DIR = Path.home() / ".worktime"
CONFIG_PATH = Path(os.environ.get("WORKTIME_CONFIG", DEFAULT_STORAGE_DIR / "config.json"))

DEFAULT_CONFIG: Dict[str, Any] = {
    "storage_dir": str(DEFAULT_STORAGE_DIR),
    "project_name": None,          # None → name of the current directory
    "table_format": "xlsx",        # xlsx | csv | json
    "refresh_interval_ms": 1000,
    "date_format": "%d/%m/%Y",
    "time_format": "%H:%M:%S",
    "open_folder_after_save": True,
    "commit_on_exit": True,
}


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    path = Path(path) if path else CONFIG_PATH
    if path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                cfg = json.load(f)
            if not isinstance(cfg, dict):
                raise ValueError("config root must be an object")
            merged = DEFAULT_CONFIG.copy()
            merged.update({k: v for k, v in cfg.items() if k in DEFAULT_CONFIG})
            return merged
        except (OSError, ValueError):
            logger.warning("Bad config at %s, using defaults.", path)
    return DEFAULT_CONFIG.copy()


def save_config(config: Dict[str, Any], path: Optional[Path] = None) -> None:
    path = Path(path) if path else CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=2)


def resolve_project_name(config: Dict[str, Any], cwd: Optional[Path] = None) -> str:
    """Configured name, else the working directory's name, else 'unknown-project'."""
    name = config.get("project_name")
    if name:
        return str(name)
    folder = (cwd or Path.cwd()).name
    return folder or "unknown-project"
