"""Catalog editing, filtering and statistics."""

from .editor import (
    CatalogStats,
    FilterType,
    apply_suggestion,
    compute_stats,
    filter_entries,
    update_translation,
)

__all__ = [
    "CatalogStats",
    "FilterType",
    "apply_suggestion",
    "compute_stats",
    "filter_entries",
    "update_translation",
]
