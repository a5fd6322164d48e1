"""Which tabs are exempt from automatic closing."""

from __future__ import annotations

from .settings import setting


def is_protected(tab, settings: object) -> bool:
    return bool(
        tab.active
        or (tab.pinned and setting(settings, "skip_pinned", "skipPinned", True))
        or (tab.audible and setting(settings, "skip_audible", "skipAudible", True))
    )
