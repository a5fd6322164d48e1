"""Stale-tab eviction that never empties a window."""

from __future__ import annotations

import time
from typing import Dict, Iterable, List, Optional

from tabvacuum.tab_policy.protection import is_protected
from tabvacuum.tab_policy.settings import DAY_MS, DEFAULT_STALE_THRESHOLD_MS, setting
from tabvacuum.tab_policy.text import plural, round_half_up

from .models import ClosePlan, TabRecord


def _now_ms() -> float:
    return time.time() * 1000


def is_stale(tab: TabRecord, now: float, threshold: float) -> bool:
    return now - (tab.last_accessed or 0) >= threshold


def find_stale_tabs(
    tabs: Iterable[TabRecord],
    settings: object,
    now: Optional[float] = None,
) -> ClosePlan:
    """Select unprotected tabs idle for at least the threshold.

    Tabs are visited in snapshot order; a candidate whose closing would leave
    its window without tabs is spared.
    """
    tabs = list(tabs)
    if now is None:
        now = _now_ms()
    threshold = setting(settings, "stale_threshold_ms", "staleThresholdMs", None) or DEFAULT_STALE_THRESHOLD_MS

    open_per_window: Dict[object, int] = {}
    for tab in tabs:
        open_per_window[tab.window_id] = open_per_window.get(tab.window_id, 0) + 1

    to_close: List[int] = []
    for tab in tabs:
        if is_protected(tab, settings):
            continue
        if not is_stale(tab, now, threshold):
            continue
        if open_per_window[tab.window_id] - 1 <= 0:
            continue
        open_per_window[tab.window_id] -= 1
        to_close.append(tab.id)

    count = len(to_close)
    if not count:
        return ClosePlan(to_close=[], message="No stale tabs found")

    days = round_half_up(threshold / DAY_MS)
    message = f"Closed {plural(count, 'tab')} not accessed in {plural(days, 'day')}"
    return ClosePlan(to_close=to_close, message=message)
