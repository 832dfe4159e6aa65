"""PO catalog parsing, generation and models."""

from .models import EntryStatus, ParsedCatalog, TranslationEntry
from .parser import POParser, generate_po, parse_po

__all__ = [
    "EntryStatus",
    "ParsedCatalog",
    "TranslationEntry",
    "POParser",
    "generate_po",
    "parse_po",
]
