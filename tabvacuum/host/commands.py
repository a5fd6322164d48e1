"""Command variants and the menu/shortcut/message tables that produce them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union


@dataclass(frozen=True)
class CloseDuplicates:
    pass


@dataclass(frozen=True)
class MergeWindows:
    target_window_id: Optional[int] = None


@dataclass(frozen=True)
class SortTabs:
    criteria: Optional[str] = None
    direction: Optional[str] = None


@dataclass(frozen=True)
class CloseStale:
    pass


@dataclass(frozen=True)
class GetSettings:
    pass


@dataclass(frozen=True)
class SaveSettings:
    settings: Dict = field(default_factory=dict)


Command = Union[CloseDuplicates, MergeWindows, SortTabs, CloseStale, GetSettings, SaveSettings]


@dataclass(frozen=True)
class MenuItem:
    id: str
    title: str
    parent_id: Optional[str] = None
    command: Optional[Command] = None


MENU_ITEMS: List[MenuItem] = [
    MenuItem("tv-dupes", "Close Duplicate Tabs", command=CloseDuplicates()),
    MenuItem("tv-merge", "Merge All Windows", command=MergeWindows()),
    MenuItem("tv-sort", "Sort Tabs"),
    MenuItem("tv-sort-url", "by URL", "tv-sort", SortTabs("url", "asc")),
    MenuItem("tv-sort-title", "by Title", "tv-sort", SortTabs("title", "asc")),
    MenuItem("tv-sort-last", "by Last Accessed", "tv-sort", SortTabs("lastAccessed", "asc")),
    MenuItem("tv-sort-visit", "by Visit Count", "tv-sort", SortTabs("visitCount", "asc")),
    MenuItem("tv-sort-frecency", "by Frecency", "tv-sort", SortTabs("frecency", "asc")),
    MenuItem("tv-stale", "Close Stale Tabs", command=CloseStale()),
]

SHORTCUT_COMMANDS: Dict[str, Command] = {
    "close-duplicates": CloseDuplicates(),
    "merge-windows": MergeWindows(),
    # No criteria: the runner falls back to the last sort the user picked.
    "sort-tabs": SortTabs(),
    "close-stale": CloseStale(),
}


def command_for_menu_item(menu_id: str) -> Optional[Command]:
    for item in MENU_ITEMS:
        if item.id == menu_id:
            return item.command
    return None


def command_for_shortcut(name: str) -> Optional[Command]:
    return SHORTCUT_COMMANDS.get(name)


def command_from_message(message: Dict) -> Optional[Command]:
    """Translate a popup/options runtime message into a command."""
    if not isinstance(message, dict):
        return None
    name = message.get("command")
    if name == "closeDuplicates":
        return CloseDuplicates()
    if name == "mergeWindows":
        return MergeWindows(target_window_id=message.get("targetWindowId"))
    if name == "sortTabs":
        return SortTabs(criteria=message.get("criteria"), direction=message.get("direction"))
    if name == "closeStaleTabs":
        return CloseStale()
    if name == "getSettings":
        return GetSettings()
    if name == "saveSettings":
        settings = message.get("settings")
        return SaveSettings(settings=dict(settings) if isinstance(settings, dict) else {})
    return None
