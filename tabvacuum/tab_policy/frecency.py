"""Frecency: one ranking value from visit frequency and recency."""

from __future__ import annotations

from .settings import DAY_MS

VISIT_WEIGHT = 100.0
RECENCY_HALF_LIFE_DAYS = 7.0


def compute_frecency(visit_count: object, last_visit_time: object, now: float) -> float:
    """Score a history entry; higher means more relevant.

    Each visit is worth ``VISIT_WEIGHT`` scaled by ``1 / (1 + days / 7)``,
    so a week-old page counts half as much as one visited just now.
    """
    try:
        visits = max(0.0, float(visit_count or 0))
    except (TypeError, ValueError):
        visits = 0.0
    try:
        last_visit = float(last_visit_time or 0)
    except (TypeError, ValueError):
        last_visit = 0.0

    elapsed_days = max(0.0, float(now) - last_visit) / DAY_MS
    return visits * VISIT_WEIGHT / (1.0 + elapsed_days / RECENCY_HALF_LIFE_DAYS)
