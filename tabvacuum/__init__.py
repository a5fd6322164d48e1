"""TabVacuum: plan duplicate, merge, sort and stale-tab cleanups."""

__version__ = "0.1.0"
