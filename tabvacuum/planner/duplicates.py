"""Duplicate elimination: group tabs by normalized URL and pick survivors."""

from __future__ import annotations

from typing import Dict, Iterable, List

from tabvacuum.tab_policy.protection import is_protected
from tabvacuum.tab_policy.text import plural
from tabvacuum.tab_policy.urls import normalize_url

from .models import ClosePlan, TabRecord


def group_by_url(tabs: Iterable[TabRecord], settings: object) -> Dict[str, List[TabRecord]]:
    groups: Dict[str, List[TabRecord]] = {}
    for tab in tabs:
        groups.setdefault(normalize_url(tab.url, settings), []).append(tab)
    return groups


def find_duplicates(tabs: Iterable[TabRecord], settings: object) -> ClosePlan:
    to_close: List[int] = []

    for group in group_by_url(tabs, settings).values():
        if len(group) < 2:
            continue

        protected = [tab for tab in group if is_protected(tab, settings)]
        unprotected = [tab for tab in group if not is_protected(tab, settings)]
        if not unprotected:
            continue

        if protected:
            # A protected copy already survives; every unprotected copy goes.
            to_close.extend(tab.id for tab in unprotected)
        else:
            to_close.extend(tab.id for tab in unprotected[1:])

    count = len(to_close)
    if count:
        message = f"Closed {plural(count, 'duplicate tab')}"
    else:
        message = "No duplicate tabs found"
    return ClosePlan(to_close=to_close, message=message)
