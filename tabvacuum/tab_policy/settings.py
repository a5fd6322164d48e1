"""Settings record, default table and defaulting of stored partial records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional

DAY_MS = 24 * 60 * 60 * 1000
DEFAULT_STALE_THRESHOLD_MS = 7 * DAY_MS

SORT_CRITERIA = ("url", "title", "lastAccessed", "visitCount", "frecency")
SORT_DIRECTIONS = ("asc", "desc")

CRITERIA_LABELS = {
    "url": "URL",
    "title": "title",
    "lastAccessed": "last accessed",
    "visitCount": "visit count",
    "frecency": "frecency",
}

DEFAULT_SETTINGS: Dict = {
    "staleThresholdMs": DEFAULT_STALE_THRESHOLD_MS,
    "ignoreFragments": False,
    "ignoreQueryParams": False,
    "skipPinned": True,
    "skipAudible": True,
    "lastSortCriteria": "url",
    "lastSortDirection": "asc",
}


@dataclass(frozen=True)
class Settings:
    stale_threshold_ms: int = DEFAULT_STALE_THRESHOLD_MS
    ignore_fragments: bool = False
    ignore_query_params: bool = False
    skip_pinned: bool = True
    skip_audible: bool = True
    last_sort_criteria: str = "url"
    last_sort_direction: str = "asc"

    def to_dict(self) -> Dict:
        return {
            "staleThresholdMs": self.stale_threshold_ms,
            "ignoreFragments": self.ignore_fragments,
            "ignoreQueryParams": self.ignore_query_params,
            "skipPinned": self.skip_pinned,
            "skipAudible": self.skip_audible,
            "lastSortCriteria": self.last_sort_criteria,
            "lastSortDirection": self.last_sort_direction,
        }


def _cfg_bool(value: object, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    v = str(value).strip().lower()
    if v in {"1", "true", "yes", "y", "on"}:
        return True
    if v in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _cfg_threshold(value: object, default: int = DEFAULT_STALE_THRESHOLD_MS) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        threshold = int(value)
    except (TypeError, ValueError):
        return default
    if threshold < 0:
        return default
    return threshold


def _cfg_choice(value: object, allowed, default: str) -> str:
    if isinstance(value, str) and value.strip() in allowed:
        return value.strip()
    return default


def merge_settings(stored: Optional[Mapping], updates: Optional[Mapping]) -> Dict:
    """Overlay ``updates`` on a stored partial record, defaults underneath."""
    merged = dict(DEFAULT_SETTINGS)
    if stored:
        merged.update(stored)
    if updates:
        merged.update(updates)
    return merged


def apply_defaults(partial: Optional[Mapping]) -> Settings:
    """Build a complete ``Settings`` from a partial stored record.

    Missing keys take their value from ``DEFAULT_SETTINGS``; values of the
    wrong shape are coerced, falling back to the default when that fails.
    Unknown keys are ignored.
    """
    cfg = merge_settings(partial, None)
    return Settings(
        stale_threshold_ms=_cfg_threshold(cfg.get("staleThresholdMs")),
        ignore_fragments=_cfg_bool(cfg.get("ignoreFragments"), default=False),
        ignore_query_params=_cfg_bool(cfg.get("ignoreQueryParams"), default=False),
        skip_pinned=_cfg_bool(cfg.get("skipPinned"), default=True),
        skip_audible=_cfg_bool(cfg.get("skipAudible"), default=True),
        last_sort_criteria=_cfg_choice(cfg.get("lastSortCriteria"), SORT_CRITERIA, "url"),
        last_sort_direction=_cfg_choice(cfg.get("lastSortDirection"), SORT_DIRECTIONS, "asc"),
    )


def setting(settings: object, attr: str, key: str, default=None):
    """Read one field from a ``Settings`` or a camelCase mapping."""
    if isinstance(settings, Mapping):
        return settings.get(key, default)
    return getattr(settings, attr, default)
