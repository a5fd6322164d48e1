"""JSON file persistence for the stored (partial) settings record."""

from __future__ import annotations

import json
import os
import stat
from pathlib import Path
from typing import Dict, Mapping, Optional

from tabvacuum.tab_policy.settings import DEFAULT_SETTINGS

CONFIG_DIR = Path("~/.config/tabvacuum")


def default_settings_path() -> Path:
    return Path(
        os.environ.get("TABVACUUM_SETTINGS_PATH", str(CONFIG_DIR / "settings.json"))
    ).expanduser()


class SettingsError(ValueError):
    pass


def load_settings(path: Optional[Path] = None) -> Dict:
    """Read the stored record; a missing file is an empty record."""
    path = path or default_settings_path()
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SettingsError(f"Settings file is not valid JSON: {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SettingsError(f"Settings file must hold a JSON object: {path}")
    return data


def save_settings(path: Optional[Path], updates: Mapping) -> Dict:
    """Merge known keys from ``updates`` into the stored record and write it."""
    path = path or default_settings_path()
    stored = load_settings(path)
    for key, value in updates.items():
        if key in DEFAULT_SETTINGS:
            stored[key] = value

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(stored, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    os.chmod(path, stat.S_IRUSR | stat.S_IWUSR)
    return {"message": "Settings saved"}
