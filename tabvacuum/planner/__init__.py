"""Pure planners: snapshot + settings in, plan + message out."""

from .duplicates import find_duplicates
from .merge import plan_merge
from .models import (
    ClosePlan,
    MergeMove,
    MergePlan,
    SortMove,
    SortPlan,
    TabRecord,
    WindowRecord,
    tab_from_dict,
    window_from_dict,
)
from .sort import plan_sort
from .stale import find_stale_tabs

__all__ = [
    "find_duplicates",
    "find_stale_tabs",
    "plan_merge",
    "plan_sort",
    "ClosePlan",
    "MergeMove",
    "MergePlan",
    "SortMove",
    "SortPlan",
    "TabRecord",
    "WindowRecord",
    "tab_from_dict",
    "window_from_dict",
]
