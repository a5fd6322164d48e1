"""Shared tab policy semantics used by every planner."""

from .frecency import compute_frecency
from .protection import is_protected
from .settings import (
    CRITERIA_LABELS,
    DEFAULT_SETTINGS,
    DEFAULT_STALE_THRESHOLD_MS,
    SORT_CRITERIA,
    SORT_DIRECTIONS,
    Settings,
    apply_defaults,
    merge_settings,
)
from .text import plural
from .urls import normalize_url

__all__ = [
    "compute_frecency",
    "is_protected",
    "normalize_url",
    "plural",
    "apply_defaults",
    "merge_settings",
    "Settings",
    "CRITERIA_LABELS",
    "DEFAULT_SETTINGS",
    "DEFAULT_STALE_THRESHOLD_MS",
    "SORT_CRITERIA",
    "SORT_DIRECTIONS",
]
