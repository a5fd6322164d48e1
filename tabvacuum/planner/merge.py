"""Window merging: relocate every other window's tabs into a target window."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .models import MergeMove, MergePlan, WindowRecord


def plan_merge(windows: Sequence[WindowRecord], target_window_id: Optional[int]) -> MergePlan:
    """Plan one batched move per non-empty source window.

    Moves must be applied in order: each ``index`` assumes the previous moves
    have already landed in the target window.
    """
    target = next((w for w in windows if w.id == target_window_id), None)
    if target is None:
        return MergePlan(moves=[], empty_window_ids=[], message="Target window not found")

    sources = [w for w in windows if w.id != target_window_id]
    if not sources:
        return MergePlan(moves=[], empty_window_ids=[], message="Only one window open")

    index = len(target.tabs)
    moves: List[MergeMove] = []
    empty_window_ids: List[int] = []
    moved = 0

    for source in sources:
        tab_ids = [tab.id for tab in source.tabs]
        if tab_ids:
            moves.append(MergeMove(tab_ids=tab_ids, window_id=target_window_id, index=index))
            moved += len(tab_ids)
            index += len(tab_ids)
        empty_window_ids.append(source.id)

    total_windows = len(sources) + 1
    total_tabs = len(target.tabs) + moved
    message = f"Merged {total_windows} windows ({total_tabs} tabs)"
    return MergePlan(moves=moves, empty_window_ids=empty_window_ids, message=message)
