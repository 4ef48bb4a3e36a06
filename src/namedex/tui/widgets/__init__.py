"""TUI widget modules for the namedex interactive browser."""

from .filter_panel import FilterPanel
from .results import NameCard, ResultsList
from .search_bar import SearchBar
from .stats import StatsPanel

__all__ = [
    "FilterPanel",
    "NameCard",
    "ResultsList",
    "SearchBar",
    "StatsPanel",
]
