"""Execute commands: gather a snapshot, plan, and apply the plan to the host.

Plan moves are applied strictly in plan order. A failing move or window
removal is logged and skipped; whatever part of the plan succeeded stays.
"""

from __future__ import annotations

import sys
from dataclasses import replace
from datetime import datetime
from typing import Dict, List, Optional

from tabvacuum.planner.duplicates import find_duplicates
from tabvacuum.planner.merge import plan_merge
from tabvacuum.planner.models import SortPlan, TabRecord
from tabvacuum.planner.sort import plan_sort
from tabvacuum.planner.stale import find_stale_tabs
from tabvacuum.tab_policy.frecency import compute_frecency
from tabvacuum.tab_policy.settings import apply_defaults

from .commands import (
    CloseDuplicates,
    CloseStale,
    Command,
    GetSettings,
    MergeWindows,
    SaveSettings,
    SortTabs,
    command_for_menu_item,
    command_for_shortcut,
    command_from_message,
)
from .snapshot import Host, HostError

VERBOSE = False
HISTORY_CRITERIA = {"visitCount", "frecency"}


def log(msg: str) -> None:
    if not VERBOSE:
        return
    ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    print(f"[tabvacuum] {ts} {msg}", file=sys.stderr)


def enrich_with_history(host: Host, tabs: List[TabRecord], criteria: str, now: float) -> List[TabRecord]:
    """Return copies of ``tabs`` carrying visit counts (and frecency)."""
    enriched = []
    for tab in tabs:
        try:
            visits, last_visit = host.lookup_history(tab.url)
        except Exception as exc:
            log(f"history lookup failed for tab {tab.id}: {exc}")
            visits, last_visit = 0, 0
        frecency = tab.frecency
        if criteria == "frecency":
            frecency = compute_frecency(visits, last_visit, now)
        enriched.append(replace(tab, visit_count=visits, frecency=frecency))
    return enriched


def close_duplicates(host: Host) -> Dict:
    settings = apply_defaults(host.load_settings())
    plan = find_duplicates(host.query_tabs(), settings)
    if plan.to_close:
        host.remove_tabs(plan.to_close)
    log(plan.message)
    return {"message": plan.message, "plan": plan.to_dict()}


def close_stale(host: Host) -> Dict:
    settings = apply_defaults(host.load_settings())
    plan = find_stale_tabs(host.query_tabs(), settings, now=host.now())
    if plan.to_close:
        host.remove_tabs(plan.to_close)
    log(plan.message)
    return {"message": plan.message, "plan": plan.to_dict()}


def merge_windows(host: Host, target_window_id: Optional[int] = None) -> Dict:
    windows = host.get_windows()
    if target_window_id is None:
        try:
            target_window_id = host.current_window_id()
        except HostError as exc:
            log(f"current window unavailable: {exc}")
    plan = plan_merge(windows, target_window_id)

    for move in plan.moves:
        try:
            host.move_tabs(move.tab_ids, move.window_id, move.index)
        except Exception as exc:
            log(f"move of tabs {move.tab_ids} into window {move.window_id} failed: {exc}")

    for window_id in plan.empty_window_ids:
        # The browser usually closes a window once its last tab leaves.
        try:
            host.remove_window(window_id)
        except Exception as exc:
            log(f"window {window_id} already gone: {exc}")

    log(plan.message)
    return {"message": plan.message, "plan": plan.to_dict()}


def sort_tabs(host: Host, criteria: Optional[str] = None, direction: Optional[str] = None) -> Dict:
    settings = apply_defaults(host.load_settings())
    criteria = criteria or settings.last_sort_criteria
    direction = direction or settings.last_sort_direction
    host.save_settings({"lastSortCriteria": criteria, "lastSortDirection": direction})

    try:
        window_id = host.current_window_id()
        tabs = host.query_tabs(window_id)
    except HostError as exc:
        log(f"current window unavailable: {exc}")
        plan = SortPlan(moves=[], message="Window not found")
        return {"message": plan.message, "plan": plan.to_dict()}
    if criteria in HISTORY_CRITERIA:
        tabs = enrich_with_history(host, tabs, criteria, host.now())

    plan = plan_sort(tabs, criteria, direction)
    for move in plan.moves:
        try:
            host.move_tabs([move.tab_id], window_id, move.index)
        except Exception as exc:
            log(f"move of tab {move.tab_id} to index {move.index} failed: {exc}")

    log(plan.message)
    return {"message": plan.message, "plan": plan.to_dict()}


def run_command(host: Host, command: Command) -> Dict:
    if isinstance(command, CloseDuplicates):
        return close_duplicates(host)
    if isinstance(command, MergeWindows):
        return merge_windows(host, command.target_window_id)
    if isinstance(command, SortTabs):
        return sort_tabs(host, command.criteria, command.direction)
    if isinstance(command, CloseStale):
        return close_stale(host)
    if isinstance(command, GetSettings):
        return apply_defaults(host.load_settings()).to_dict()
    if isinstance(command, SaveSettings):
        return host.save_settings(command.settings)
    raise TypeError(f"Unsupported command: {command!r}")


def handle_message(host: Host, message: Dict) -> Optional[Dict]:
    command = command_from_message(message)
    if command is None:
        return None
    return run_command(host, command)


def _run_and_notify(host: Host, command: Optional[Command]) -> Optional[Dict]:
    if command is None:
        return None
    result = run_command(host, command)
    host.notify(result["message"])
    return result


def handle_menu_click(host: Host, menu_id: str) -> Optional[Dict]:
    return _run_and_notify(host, command_for_menu_item(menu_id))


def handle_shortcut(host: Host, name: str) -> Optional[Dict]:
    return _run_and_notify(host, command_for_shortcut(name))
