"""Name catalog browser: filter, sort, page and compare generated names."""

__version__ = "0.1.0"

from namedex.models import (
    CatalogEntry,
    ElementCategory,
    FilterCategory,
    LuckCategory,
    SortKey,
)

__all__ = [
    "CatalogEntry",
    "ElementCategory",
    "FilterCategory",
    "LuckCategory",
    "SortKey",
    "__version__",
]
