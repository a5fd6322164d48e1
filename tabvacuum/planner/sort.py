"""Tab sorting within one window by a chosen criterion."""

from __future__ import annotations

import unicodedata
from typing import Callable, Dict, Iterable, List, Tuple

from tabvacuum.tab_policy.settings import CRITERIA_LABELS
from tabvacuum.tab_policy.text import plural

from .models import SortMove, SortPlan, TabRecord


def _char_class(ch: str) -> int:
    if ch.isalpha():
        return 2
    if ch.isdigit():
        return 1
    return 0


def collation_key(text: str) -> Tuple[List[Tuple[int, str]], str]:
    """Locale-style ordering: accents and case only break ties.

    Punctuation and symbols sort before digits, digits before letters, and on a
    tie lowercase comes before uppercase.
    """
    text = text or ""
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return [(_char_class(ch), ch) for ch in base.casefold()], text.swapcase()


def _number(value: object) -> float:
    return float(value or 0)


# criterion -> (key, highest-first when ascending)
SORT_KEYS: Dict[str, Tuple[Callable[[TabRecord], object], bool]] = {
    "url": (lambda tab: collation_key(tab.url), False),
    "title": (lambda tab: collation_key(tab.title), False),
    "lastAccessed": (lambda tab: _number(tab.last_accessed), True),
    "visitCount": (lambda tab: _number(tab.visit_count), True),
    "frecency": (lambda tab: _number(tab.frecency), True),
}


def sort_tabs(tabs: Iterable[TabRecord], criteria: str, direction: str) -> List[TabRecord]:
    ordered = list(tabs)
    entry = SORT_KEYS.get(criteria)
    if entry is None:
        return ordered
    key, highest_first = entry
    # sorted() keeps equal keys in input order even with reverse=True.
    reverse = highest_first != (direction == "desc")
    return sorted(ordered, key=key, reverse=reverse)


def plan_sort(tabs: Iterable[TabRecord], criteria: str, direction: str) -> SortPlan:
    tabs = list(tabs)
    pinned = [tab for tab in tabs if tab.pinned]
    unpinned = [tab for tab in tabs if not tab.pinned]

    start = len(pinned)
    moves = [
        SortMove(tab_id=tab.id, index=start + offset)
        for offset, tab in enumerate(sort_tabs(unpinned, criteria, direction))
    ]

    label = CRITERIA_LABELS.get(criteria, criteria)
    message = f"Sorted {plural(len(unpinned), 'tab')} by {label}"
    return SortPlan(moves=moves, message=message)
