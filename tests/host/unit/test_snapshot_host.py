import pytest

from tabvacuum.host.snapshot import HostError, SnapshotHost


def _host(**extra):
    data = {
        "windows": [
            {"id": 1, "tabs": [{"id": 1, "url": "https://a.test/"}, {"id": 2, "url": "https://b.test/"}]},
            {"id": 2, "focused": True, "tabs": [{"id": 3, "url": "https://c.test/"}]},
        ],
        "history": {"https://a.test/": {"visitCount": 4, "lastVisitTime": 50}},
    }
    data.update(extra)
    return SnapshotHost.from_dict(data)


def test_query_tabs_returns_copies_in_window_order():
    host = _host()

    tabs = host.query_tabs()
    tabs[0].title = "changed"

    assert [tab.id for tab in tabs] == [1, 2, 3]
    assert [tab.id for tab in host.query_tabs(2)] == [3]
    assert host.query_tabs()[0].title == ""


def test_current_window_prefers_explicit_then_focused():
    assert _host().current_window_id() == 2
    assert _host(currentWindowId=1).current_window_id() == 1
    with pytest.raises(HostError):
        SnapshotHost([]).current_window_id()


def test_lookup_history_defaults_to_zero():
    host = _host()
    assert host.lookup_history("https://a.test/") == (4, 50.0)
    assert host.lookup_history("https://zzz.test/") == (0, 0.0)


def test_move_tabs_inserts_at_index_and_closes_emptied_window():
    host = _host()

    host.move_tabs([3], 1, 1)

    assert [w.id for w in host.windows] == [1]
    assert [tab.id for tab in host.windows[0].tabs] == [1, 3, 2]
    assert host.windows[0].tabs[1].window_id == 1
    with pytest.raises(HostError):
        host.remove_window(2)


def test_move_tabs_within_window_and_out_of_range_index():
    host = _host()

    host.move_tabs([1], 1, 1)
    assert [tab.id for tab in host.windows[0].tabs] == [2, 1]

    host.move_tabs([2], 1, -1)
    assert [tab.id for tab in host.windows[0].tabs] == [1, 2]


def test_remove_tabs_validates_ids_before_removing():
    host = _host()

    with pytest.raises(HostError):
        host.remove_tabs([1, 42])
    assert len(host.query_tabs()) == 3

    host.remove_tabs([3])
    assert [w.id for w in host.windows] == [1]


def test_save_settings_keeps_known_keys_in_memory():
    host = _host(settings={"skipPinned": False})

    host.save_settings({"lastSortCriteria": "title", "bogus": 1})

    assert host.load_settings() == {"skipPinned": False, "lastSortCriteria": "title"}
    assert host.to_dict()["settings"] == {"skipPinned": False, "lastSortCriteria": "title"}


def test_notify_records_notification_payload():
    host = _host()

    host.notify("Closed 1 duplicate tab")

    assert host.notifications == [
        {
            "type": "basic",
            "title": "TabVacuum",
            "message": "Closed 1 duplicate tab",
            "iconUrl": "icons/icon-96.png",
        }
    ]


def test_now_prefers_snapshot_time():
    assert _host(now=1234).now() == 1234.0
    assert _host().now() > 0
