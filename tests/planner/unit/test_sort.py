import pytest

from tabvacuum.planner.models import TabRecord
from tabvacuum.planner.sort import collation_key, plan_sort


def _tab(tab_id, **overrides):
    base = {"id": tab_id, "window_id": 1}
    base.update(overrides)
    return TabRecord(**base)


def _order(plan):
    return [move.tab_id for move in plan.moves]


def test_plan_sort_by_url_ascending():
    tabs = [
        _tab(1, url="https://c.test/"),
        _tab(2, url="https://a.test/"),
        _tab(3, url="https://b.test/"),
    ]

    plan = plan_sort(tabs, "url", "asc")

    assert _order(plan) == [2, 3, 1]
    assert [move.index for move in plan.moves] == [0, 1, 2]
    assert plan.message == "Sorted 3 tabs by URL"


def test_plan_sort_by_url_descending():
    tabs = [_tab(1, url="c"), _tab(2, url="a"), _tab(3, url="b")]

    assert _order(plan_sort(tabs, "url", "desc")) == [1, 3, 2]


def test_plan_sort_leaves_pinned_prefix_untouched():
    tabs = [
        _tab(1, title="zeta", pinned=True),
        _tab(2, title="beta"),
        _tab(3, title="alpha"),
    ]

    plan = plan_sort(tabs, "title", "asc")

    assert _order(plan) == [3, 2]
    assert [move.index for move in plan.moves] == [1, 2]
    assert plan.message == "Sorted 2 tabs by title"


def test_plan_sort_titles_ignore_case_and_accents():
    tabs = [_tab(1, title="Zebra"), _tab(2, title="école"), _tab(3, title="apple"), _tab(4)]

    assert _order(plan_sort(tabs, "title", "asc")) == [4, 3, 2, 1]


def test_plan_sort_last_accessed_ascending_puts_most_recent_first():
    tabs = [_tab(1, last_accessed=100), _tab(2, last_accessed=300), _tab(3), _tab(4, last_accessed=200)]

    assert _order(plan_sort(tabs, "lastAccessed", "asc")) == [2, 4, 1, 3]
    assert _order(plan_sort(tabs, "lastAccessed", "desc")) == [3, 1, 4, 2]


@pytest.mark.parametrize("criteria,field", [("visitCount", "visit_count"), ("frecency", "frecency")])
def test_plan_sort_history_criteria_rank_highest_first(criteria, field):
    tabs = [_tab(1, **{field: 2}), _tab(2, **{field: 9}), _tab(3), _tab(4, **{field: 5})]

    assert _order(plan_sort(tabs, criteria, "asc")) == [2, 4, 1, 3]
    assert _order(plan_sort(tabs, criteria, "desc")) == [3, 1, 4, 2]


@pytest.mark.parametrize("direction", ["asc", "desc"])
def test_plan_sort_is_stable_for_equal_keys(direction):
    tabs = [_tab(1, last_accessed=5), _tab(2, last_accessed=9), _tab(3, last_accessed=5), _tab(4, last_accessed=5)]

    order = _order(plan_sort(tabs, "lastAccessed", direction))

    equal = [tab_id for tab_id in order if tab_id != 2]
    assert equal == [1, 3, 4]


@pytest.mark.parametrize(
    "criteria,label",
    [
        ("url", "URL"),
        ("title", "title"),
        ("lastAccessed", "last accessed"),
        ("visitCount", "visit count"),
        ("frecency", "frecency"),
    ],
)
def test_plan_sort_message_uses_human_label(criteria, label):
    plan = plan_sort([_tab(1, url="a", title="a")], criteria, "asc")

    assert plan.message == f"Sorted 1 tab by {label}"


def test_plan_sort_unknown_criterion_keeps_order():
    tabs = [_tab(1, url="b"), _tab(2, url="a")]

    plan = plan_sort(tabs, "color", "asc")

    assert _order(plan) == [1, 2]
    assert plan.message == "Sorted 2 tabs by color"


def test_plan_sort_never_moves_pinned_tabs():
    tabs = [_tab(i, url=str(10 - i), pinned=(i % 3 == 0)) for i in range(1, 10)]

    plan = plan_sort(tabs, "url", "asc")

    pinned_ids = {tab.id for tab in tabs if tab.pinned}
    assert not pinned_ids & set(_order(plan))
    assert len(plan.moves) == len(tabs) - len(pinned_ids)


def test_collation_key_breaks_case_ties_deterministically():
    assert collation_key("Apple") != collation_key("apple")
    assert collation_key("Apple")[0] == collation_key("apple")[0]


def test_plan_sort_titles_put_symbols_then_digits_then_lowercase_first():
    tabs = [_tab(1, title="Apple"), _tab(2, title="apple"), _tab(3, title="1x"), _tab(4, title="_x")]

    assert _order(plan_sort(tabs, "title", "asc")) == [4, 3, 2, 1]
    assert _order(plan_sort(tabs, "title", "desc")) == [1, 2, 3, 4]
