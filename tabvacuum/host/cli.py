#!/usr/bin/env python3
"""Plan (and optionally apply) a TabVacuum cleanup against a JSON snapshot.

Snapshot format:
    {"windows": [{"id": 1, "focused": true, "tabs": [{"id": 10, "url": ...}]}],
     "history": {"<url>": {"visitCount": 3, "lastVisitTime": <ms>}},
     "now": <ms>, "settings": {...}}

Settings come from --settings, else from the snapshot's "settings" object, else
from the stored settings file (TABVACUUM_SETTINGS_PATH or
~/.config/tabvacuum/settings.json).

Without --apply the snapshot file is left as it was; with --apply the state
after executing the plan is written back to it.
"""

import json
import sys
from pathlib import Path
from typing import Dict, List, Optional

from tabvacuum.tab_policy.settings import SORT_CRITERIA, SORT_DIRECTIONS

from . import runner, store
from .commands import CloseDuplicates, CloseStale, Command, GetSettings, MergeWindows, SortTabs
from .snapshot import SnapshotHost

COMMANDS = {"duplicates", "merge", "sort", "stale", "settings"}
VALUE_OPTIONS = {"--snapshot", "--settings", "--target", "--criteria", "--direction", "--now"}
USAGE = (
    "usage: tabvacuum {duplicates|merge|sort|stale|settings} --snapshot FILE "
    "[--settings FILE] [--target ID] [--criteria C] [--direction asc|desc] [--now MS] "
    "[--apply] [--json] [--verbose]"
)


def _int_arg(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise SystemExit(f"{name} expects an integer, got: {value}")


def parse_args(argv: List[str]) -> Dict:
    opts: Dict = {
        "command": "",
        "verbose": False,
        "json": False,
        "apply": False,
    }
    rest = []
    args = list(argv[1:])
    idx = 0
    while idx < len(args):
        arg = args[idx]
        name, eq, inline = arg.partition("=")
        if arg in ("-v", "--verbose"):
            opts["verbose"] = True
        elif arg == "--json":
            opts["json"] = True
        elif arg == "--apply":
            opts["apply"] = True
        elif arg in ("-h", "--help"):
            print(USAGE, file=sys.stderr)
            raise SystemExit(0)
        elif name in VALUE_OPTIONS:
            if eq:
                value = inline
            else:
                if idx + 1 >= len(args):
                    raise SystemExit(f"{name} requires a value")
                idx += 1
                value = args[idx]
            opts[name[2:]] = value
        elif not opts["command"] and arg in COMMANDS:
            opts["command"] = arg
        else:
            rest.append(arg)
        idx += 1

    if rest:
        raise SystemExit(f"unknown args: {' '.join(rest)}")
    if not opts["command"]:
        raise SystemExit(USAGE)
    if not opts.get("snapshot"):
        raise SystemExit("--snapshot is required")
    if "target" in opts:
        opts["target"] = _int_arg("--target", opts["target"])
    if "now" in opts:
        opts["now"] = _int_arg("--now", opts["now"])
    if "criteria" in opts and opts["criteria"] not in SORT_CRITERIA:
        raise SystemExit(f"invalid --criteria value: {opts['criteria']}")
    if "direction" in opts and opts["direction"] not in SORT_DIRECTIONS:
        raise SystemExit(f"invalid --direction value: {opts['direction']}")
    return opts


def build_command(opts: Dict) -> Command:
    name = opts["command"]
    if name == "duplicates":
        return CloseDuplicates()
    if name == "merge":
        return MergeWindows(target_window_id=opts.get("target"))
    if name == "sort":
        return SortTabs(criteria=opts.get("criteria"), direction=opts.get("direction"))
    if name == "stale":
        return CloseStale()
    return GetSettings()


def load_snapshot(path: Path) -> Dict:
    if not path.exists():
        raise SystemExit(f"Snapshot not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Snapshot is not valid JSON: {path}: {exc}")
    if not isinstance(data, dict):
        raise SystemExit(f"Snapshot must hold a JSON object: {path}")
    return data


def resolve_settings_path(opts: Dict, snapshot: Dict) -> Optional[Path]:
    """--settings wins; settings embedded in the snapshot come next; else the stored file."""
    if opts.get("settings"):
        return Path(opts["settings"]).expanduser()
    if isinstance(snapshot.get("settings"), dict):
        return None
    return store.default_settings_path()


def main(argv: List[str]) -> int:
    opts = parse_args(argv)
    runner.VERBOSE = opts["verbose"]

    snapshot_path = Path(opts["snapshot"]).expanduser()
    snapshot = load_snapshot(snapshot_path)
    host = SnapshotHost.from_dict(snapshot, settings_path=resolve_settings_path(opts, snapshot))
    if opts.get("now") is not None:
        host.now_ms = opts["now"]

    command = build_command(opts)
    runner.log(f"running {opts['command']} on {snapshot_path}")
    result = runner.run_command(host, command)

    if opts["apply"] and not isinstance(command, GetSettings):
        snapshot_path.write_text(json.dumps(host.to_dict(), indent=2) + "\n", encoding="utf-8")
        runner.log(f"wrote {snapshot_path}")

    if isinstance(command, GetSettings):
        print(json.dumps(result, indent=2, sort_keys=True))
    elif opts["json"]:
        payload = {"command": opts["command"], "message": result["message"], "plan": result["plan"]}
        print(json.dumps(payload, sort_keys=True))
    else:
        print(result["message"])
    return 0


def run() -> None:
    raise SystemExit(main(sys.argv))


if __name__ == "__main__":
    run()
