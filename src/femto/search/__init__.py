"""Incremental find: engine state and the prompt observer."""

from .engine import SearchDirection, SearchMatch, SearchState, find_next
from .session import SearchSession

__all__ = [
    "SearchDirection",
    "SearchMatch",
    "SearchSession",
    "SearchState",
    "find_next",
]
