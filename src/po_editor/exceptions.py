"""Exception hierarchy for the PO editor."""


class POEditorError(Exception):
    """Base class for all editor errors."""


class CatalogDecodeError(POEditorError):
    """Raised when catalog bytes cannot be decoded as text."""


class CatalogLoadError(POEditorError):
    """Raised when a catalog file cannot be loaded into a session."""


class NoCatalogLoadedError(POEditorError):
    """Raised when an operation needs a catalog but none is loaded."""


class EntryNotFoundError(POEditorError):
    """Raised when no entry matches the requested id."""

    def __init__(self, entry_id: str):
        super().__init__(f"No entry with id {entry_id!r}")
        self.entry_id = entry_id


class SuggestionError(POEditorError):
    """Raised when AI suggestions cannot be obtained."""
