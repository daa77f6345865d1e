"""Budgeted path search and its run loop."""

from .engine import PathQuery, PathSearchEngine, QueryState, octile_distance
from .scheduler import SearchScheduler

__all__ = [
    "PathSearchEngine",
    "PathQuery",
    "QueryState",
    "SearchScheduler",
    "octile_distance",
]
