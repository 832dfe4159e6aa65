"""Immutable edits, filtering and statistics over a parsed catalog."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..exceptions import EntryNotFoundError
from ..po.models import EntryStatus, ParsedCatalog, TranslationEntry


class FilterType(Enum):
    """Status filter applied when listing entries."""
    ALL = "all"
    PENDING = "pending"
    TRANSLATED = "translated"


@dataclass
class CatalogStats:
    """Translation progress of a catalog.

    Attributes:
        total: Number of entries.
        translated: Entries that are translated or AI-suggested.
        pending: Entries without a translation.
    """
    total: int
    translated: int
    pending: int

    @property
    def percent_complete(self) -> float:
        """Calculate percentage of entries with a translation."""
        if self.total == 0:
            return 0.0
        return (self.translated / self.total) * 100


def _matches_filter(entry: TranslationEntry, filter_type: FilterType) -> bool:
    if filter_type == FilterType.PENDING:
        return entry.status == EntryStatus.PENDING
    if filter_type == FilterType.TRANSLATED:
        return entry.status in (EntryStatus.TRANSLATED, EntryStatus.AI_SUGGESTED)
    return True


def filter_entries(
    catalog: ParsedCatalog,
    filter_type: FilterType = FilterType.ALL,
    query: str = ""
) -> list[TranslationEntry]:
    """Select entries by status and search text.

    Args:
        catalog: The catalog to search.
        filter_type: Status filter.
        query: Case-insensitive text matched against msgid and msgstr.

    Returns:
        Matching entries in catalog order.
    """
    needle = query.lower()
    return [
        entry for entry in catalog.entries
        if _matches_filter(entry, filter_type)
        and (
            not needle
            or needle in entry.msgid.lower()
            or needle in entry.msgstr.lower()
        )
    ]


def _replace_translation(
    catalog: ParsedCatalog,
    entry_id: str,
    msgstr: str,
    status: Optional[EntryStatus] = None
) -> ParsedCatalog:
    found = False
    entries = []
    for entry in catalog.entries:
        if entry.id == entry_id:
            entry = entry.with_translation(msgstr, status)
            found = True
        entries.append(entry)

    if not found:
        raise EntryNotFoundError(entry_id)

    return catalog.replace_entries(entries)


def update_translation(
    catalog: ParsedCatalog,
    entry_id: str,
    msgstr: str
) -> ParsedCatalog:
    """Set the translation of an entry.

    Every entry sharing ``entry_id`` is updated. Status is re-derived
    from the new text.

    Args:
        catalog: The current catalog.
        entry_id: Id of the entry to edit.
        msgstr: The new translation.

    Returns:
        A new catalog; the input is left untouched.

    Raises:
        EntryNotFoundError: If no entry has that id.
    """
    return _replace_translation(catalog, entry_id, msgstr)


def apply_suggestion(
    catalog: ParsedCatalog,
    entry_id: str,
    suggestion: str
) -> ParsedCatalog:
    """Use an AI suggestion as the translation of an entry.

    Raises:
        EntryNotFoundError: If no entry has that id.
    """
    status = EntryStatus.AI_SUGGESTED if suggestion else None
    return _replace_translation(catalog, entry_id, suggestion, status)


def compute_stats(catalog: ParsedCatalog) -> CatalogStats:
    """Count translated and pending entries."""
    pending = sum(1 for e in catalog.entries if e.status == EntryStatus.PENDING)
    total = len(catalog.entries)
    return CatalogStats(total=total, translated=total - pending, pending=pending)
