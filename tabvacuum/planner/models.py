"""Snapshot records consumed by the planners and the plans they return."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class TabRecord:
    id: int
    url: str = ""
    title: str = ""
    pinned: bool = False
    active: bool = False
    audible: bool = False
    last_accessed: Optional[float] = None
    window_id: Optional[int] = None
    visit_count: Optional[int] = None
    frecency: Optional[float] = None

    def to_dict(self) -> Dict:
        out = {
            "id": self.id,
            "url": self.url,
            "title": self.title,
            "pinned": self.pinned,
            "active": self.active,
            "audible": self.audible,
            "windowId": self.window_id,
        }
        if self.last_accessed is not None:
            out["lastAccessed"] = self.last_accessed
        if self.visit_count is not None:
            out["visitCount"] = self.visit_count
        if self.frecency is not None:
            out["frecency"] = self.frecency
        return out


@dataclass
class WindowRecord:
    id: int
    tabs: List[TabRecord] = field(default_factory=list)
    focused: bool = False

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "focused": self.focused,
            "tabs": [tab.to_dict() for tab in self.tabs],
        }


@dataclass
class ClosePlan:
    to_close: List[int]
    message: str

    def to_dict(self) -> Dict:
        return {"toClose": list(self.to_close), "message": self.message}


@dataclass
class MergeMove:
    tab_ids: List[int]
    window_id: int
    index: int

    def to_dict(self) -> Dict:
        return {"tabIds": list(self.tab_ids), "windowId": self.window_id, "index": self.index}


@dataclass
class MergePlan:
    moves: List[MergeMove]
    empty_window_ids: List[int]
    message: str

    def to_dict(self) -> Dict:
        return {
            "moves": [move.to_dict() for move in self.moves],
            "emptyWindowIds": list(self.empty_window_ids),
            "message": self.message,
        }


@dataclass
class SortMove:
    tab_id: int
    index: int

    def to_dict(self) -> Dict:
        return {"tabId": self.tab_id, "index": self.index}


@dataclass
class SortPlan:
    moves: List[SortMove]
    message: str

    def to_dict(self) -> Dict:
        return {"moves": [move.to_dict() for move in self.moves], "message": self.message}


def _safe_number(value: object) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _safe_count(value: object) -> Optional[int]:
    number = _safe_number(value)
    if number is None:
        return None
    return int(number)


def tab_from_dict(raw: Dict, window_id: Optional[int] = None) -> TabRecord:
    """Build a ``TabRecord`` from the host's camelCase tab mapping."""
    raw_window = raw.get("windowId")
    return TabRecord(
        id=raw["id"],
        url=str(raw.get("url") or ""),
        title=str(raw.get("title") or ""),
        pinned=bool(raw.get("pinned")),
        active=bool(raw.get("active")),
        audible=bool(raw.get("audible")),
        last_accessed=_safe_number(raw.get("lastAccessed")),
        window_id=raw_window if raw_window is not None else window_id,
        visit_count=_safe_count(raw.get("visitCount")),
        frecency=_safe_number(raw.get("frecency")),
    )


def window_from_dict(raw: Dict) -> WindowRecord:
    window_id = raw["id"]
    tabs = [tab_from_dict(tab, window_id=window_id) for tab in raw.get("tabs") or []]
    return WindowRecord(id=window_id, tabs=tabs, focused=bool(raw.get("focused")))
