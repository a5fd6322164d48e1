"""Shared text helpers for user-facing plan messages."""

from __future__ import annotations

import math


def plural(count: int, noun: str) -> str:
    """Render ``"<count> <noun>"`` with an ``s`` suffix unless count is 1."""
    return f"{count} {noun}{'' if count == 1 else 's'}"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
