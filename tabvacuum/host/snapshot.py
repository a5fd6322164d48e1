"""Host collaborator interface and an in-memory host over a JSON snapshot."""

from __future__ import annotations

import time
from dataclasses import replace
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from tabvacuum.planner.models import TabRecord, WindowRecord, window_from_dict
from tabvacuum.tab_policy.settings import DEFAULT_SETTINGS

from . import store


NOTIFICATION_TITLE = "TabVacuum"
NOTIFICATION_ICON = "icons/icon-96.png"


class HostError(RuntimeError):
    pass


def notification_payload(message: str) -> Dict:
    return {
        "type": "basic",
        "title": NOTIFICATION_TITLE,
        "message": message,
        "iconUrl": NOTIFICATION_ICON,
    }


class Host:
    """Operations the runner needs from a browser.

    Planners never see this object; only ``tabvacuum.host.runner`` calls it.
    """

    def query_tabs(self, window_id: Optional[int] = None) -> List[TabRecord]:
        raise NotImplementedError

    def get_windows(self) -> List[WindowRecord]:
        raise NotImplementedError

    def current_window_id(self) -> int:
        raise NotImplementedError

    def lookup_history(self, url: str) -> Tuple[int, float]:
        """Return ``(visit_count, last_visit_time)`` for ``url``."""
        raise NotImplementedError

    def remove_tabs(self, tab_ids: Sequence[int]) -> None:
        raise NotImplementedError

    def move_tabs(self, tab_ids: Sequence[int], window_id: int, index: int) -> None:
        raise NotImplementedError

    def remove_window(self, window_id: int) -> None:
        raise NotImplementedError

    def notify(self, message: str) -> None:
        raise NotImplementedError

    def load_settings(self) -> Dict:
        raise NotImplementedError

    def save_settings(self, updates: Dict) -> Dict:
        raise NotImplementedError

    def now(self) -> float:
        return time.time() * 1000


class SnapshotHost(Host):
    """Applies plans to an in-memory copy of a browser snapshot.

    Mirrors browser behavior where it matters to plan execution: a window
    whose last tab is closed or moved away disappears, so a later
    ``remove_window`` for it fails.
    """

    def __init__(
        self,
        windows: Sequence[WindowRecord],
        *,
        history: Optional[Dict[str, Dict]] = None,
        now_ms: Optional[float] = None,
        settings: Optional[Dict] = None,
        settings_path: Optional[Path] = None,
        current_window: Optional[int] = None,
    ) -> None:
        self.windows: List[WindowRecord] = [
            WindowRecord(id=w.id, tabs=[replace(t, window_id=w.id) for t in w.tabs], focused=w.focused)
            for w in windows
        ]
        self.history = dict(history or {})
        self.now_ms = now_ms
        self.settings = dict(settings or {})
        self.settings_path = settings_path
        self.current_window = current_window
        self.notifications: List[Dict] = []

    @classmethod
    def from_dict(cls, data: Dict, settings_path: Optional[Path] = None) -> "SnapshotHost":
        windows = [window_from_dict(raw) for raw in data.get("windows") or []]
        history = data.get("history") if isinstance(data.get("history"), dict) else {}
        settings = data.get("settings") if isinstance(data.get("settings"), dict) else {}
        return cls(
            windows,
            history=history,
            now_ms=data.get("now"),
            settings=settings,
            settings_path=settings_path,
            current_window=data.get("currentWindowId"),
        )

    def to_dict(self) -> Dict:
        out: Dict = {"windows": [w.to_dict() for w in self.windows]}
        if self.history:
            out["history"] = self.history
        if self.now_ms is not None:
            out["now"] = self.now_ms
        if self.settings and self.settings_path is None:
            out["settings"] = self.settings
        if self.current_window is not None:
            out["currentWindowId"] = self.current_window
        return out

    def _window(self, window_id: int) -> WindowRecord:
        for window in self.windows:
            if window.id == window_id:
                return window
        raise HostError(f"No window with id {window_id}")

    def _pop_tab(self, tab_id: int) -> TabRecord:
        for window in self.windows:
            for pos, tab in enumerate(window.tabs):
                if tab.id == tab_id:
                    return window.tabs.pop(pos)
        raise HostError(f"No tab with id {tab_id}")

    def _check_tabs(self, tab_ids: Sequence[int]) -> None:
        known = {tab.id for window in self.windows for tab in window.tabs}
        missing = [tab_id for tab_id in tab_ids if tab_id not in known]
        if missing:
            raise HostError(f"No tab with id {', '.join(str(m) for m in missing)}")

    def _drop_emptied(self, touched: Sequence[int]) -> None:
        self.windows = [w for w in self.windows if w.tabs or w.id not in touched]

    def query_tabs(self, window_id: Optional[int] = None) -> List[TabRecord]:
        windows = self.windows if window_id is None else [self._window(window_id)]
        return [replace(tab) for window in windows for tab in window.tabs]

    def get_windows(self) -> List[WindowRecord]:
        return [
            WindowRecord(id=w.id, tabs=[replace(t) for t in w.tabs], focused=w.focused)
            for w in self.windows
        ]

    def current_window_id(self) -> int:
        if self.current_window is not None:
            return self.current_window
        for window in self.windows:
            if window.focused:
                return window.id
        if not self.windows:
            raise HostError("No windows open")
        return self.windows[0].id

    def lookup_history(self, url: str) -> Tuple[int, float]:
        entry = self.history.get(url) or {}
        return int(entry.get("visitCount") or 0), float(entry.get("lastVisitTime") or 0)

    def remove_tabs(self, tab_ids: Sequence[int]) -> None:
        self._check_tabs(tab_ids)
        touched = []
        for tab_id in tab_ids:
            window_id = self._pop_tab(tab_id).window_id
            touched.append(window_id)
        self._drop_emptied(touched)

    def move_tabs(self, tab_ids: Sequence[int], window_id: int, index: int) -> None:
        target = self._window(window_id)
        self._check_tabs(tab_ids)
        moving = [self._pop_tab(tab_id) for tab_id in tab_ids]
        touched = [tab.window_id for tab in moving if tab.window_id != window_id]

        if index < 0 or index > len(target.tabs):
            index = len(target.tabs)
        for offset, tab in enumerate(moving):
            target.tabs.insert(index + offset, replace(tab, window_id=window_id))
        self._drop_emptied(touched)

    def remove_window(self, window_id: int) -> None:
        window = self._window(window_id)
        self.windows.remove(window)

    def notify(self, message: str) -> None:
        self.notifications.append(notification_payload(message))

    def load_settings(self) -> Dict:
        if self.settings_path is not None:
            return store.load_settings(self.settings_path)
        return dict(self.settings)

    def save_settings(self, updates: Dict) -> Dict:
        if self.settings_path is not None:
            return store.save_settings(self.settings_path, updates)
        self.settings.update({k: v for k, v in updates.items() if k in DEFAULT_SETTINGS})
        return {"message": "Settings saved"}

    def now(self) -> float:
        if self.now_ms is not None:
            return float(self.now_ms)
        return super().now()
