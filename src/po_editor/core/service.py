"""Editing session orchestration."""

import logging
import re
from pathlib import Path
from typing import Optional

from ..config import AISettings, SuggestionConfig, get_language_name
from ..editing import (
    CatalogStats,
    FilterType,
    apply_suggestion,
    compute_stats,
    filter_entries,
    update_translation,
)
from ..exceptions import (
    CatalogDecodeError,
    CatalogLoadError,
    EntryNotFoundError,
    NoCatalogLoadedError,
)
from ..po import POParser, ParsedCatalog, TranslationEntry
from ..suggestions import SuggestionEngine

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_NAME = "translations.po"
LOAD_ERROR_MESSAGE = "Error parsing PO file. Please check the file format."


def export_filename(name: str) -> str:
    """Choose the download name for an exported catalog.

    Args:
        name: Name of the file the catalog was loaded from.

    Returns:
        ``name`` if it already ends in ``.po``, otherwise ``name`` with its
        extension replaced by ``.po``.
    """
    if not name:
        return DEFAULT_EXPORT_NAME
    if name.lower().endswith(".po"):
        return name
    return re.sub(r'\.[^/.]+$', '', name) + ".po"


class EditorSession:
    """Holds the catalog being edited and routes edits through the codec."""

    def __init__(
        self,
        config: Optional[SuggestionConfig] = None,
        settings: Optional[AISettings] = None
    ):
        """Initialize the session.

        Args:
            config: Suggestion configuration.
            settings: Provider selection and API keys.
        """
        self.config = config or SuggestionConfig()
        self.parser = POParser()
        self.engine = SuggestionEngine(self.config, settings)
        self.catalog: Optional[ParsedCatalog] = None
        self.file_name = ""
        self.source_path: Optional[Path] = None

    def load_file(self, path: Path) -> ParsedCatalog:
        """Load a catalog from disk.

        Raises:
            CatalogLoadError: If the file cannot be read or decoded.
        """
        try:
            content = self.parser.decode(path.read_bytes())
        except (OSError, CatalogDecodeError) as e:
            logger.error("Error parsing PO file %s: %s", path, e)
            raise CatalogLoadError(LOAD_ERROR_MESSAGE) from e

        catalog = self.load_text(content, file_name=path.name)
        self.source_path = path
        return catalog

    def load_text(self, content: str, file_name: str = "") -> ParsedCatalog:
        """Load a catalog from already decoded text."""
        self.catalog = self.parser.parse(content)
        self.file_name = file_name
        self.source_path = None
        logger.info(
            "Loaded %s with %d entries",
            file_name or "catalog",
            len(self.catalog.entries)
        )
        return self.catalog

    def _require_catalog(self) -> ParsedCatalog:
        if self.catalog is None:
            raise NoCatalogLoadedError("No PO file loaded")
        return self.catalog

    def get_entry(self, entry_id: str) -> TranslationEntry:
        """Return the entry with the given id.

        Raises:
            EntryNotFoundError: If no entry has that id.
        """
        entry = self._require_catalog().get_entry(entry_id)
        if entry is None:
            raise EntryNotFoundError(entry_id)
        return entry

    def entries(
        self,
        filter_type: FilterType = FilterType.ALL,
        query: str = ""
    ) -> list[TranslationEntry]:
        return filter_entries(self._require_catalog(), filter_type, query)

    def stats(self) -> CatalogStats:
        return compute_stats(self._require_catalog())

    def update_translation(self, entry_id: str, msgstr: str) -> TranslationEntry:
        """Replace the translation of an entry.

        Returns:
            The updated entry.
        """
        self.catalog = update_translation(self._require_catalog(), entry_id, msgstr)
        return self.get_entry(entry_id)

    def target_language(self) -> str:
        """Display name of the catalog's target language."""
        code = self._require_catalog().language
        return get_language_name(code) if code else self.config.default_language

    def suggest(self, entry_id: str) -> list[str]:
        """Request AI suggestions for an entry.

        The entry's comments are sent as context.

        Raises:
            EntryNotFoundError: If no entry has that id.
            SuggestionError: If the provider cannot be reached or has no key.
        """
        entry = self.get_entry(entry_id)
        return self.engine.suggest(entry.msgid, self.target_language(), entry.comments)

    def apply_suggestion(self, entry_id: str, suggestion: str) -> TranslationEntry:
        """Use a suggestion as the entry's translation.

        Returns:
            The updated entry.
        """
        self.catalog = apply_suggestion(self._require_catalog(), entry_id, suggestion)
        return self.get_entry(entry_id)

    def export_text(self) -> str:
        """Generate PO content for the current catalog."""
        return self.parser.format(self._require_catalog())

    def export_file(self, path: Optional[Path] = None) -> Path:
        """Write the current catalog to disk.

        Args:
            path: Output path. Defaults to the export name of the loaded file,
                next to it when the catalog came from disk.

        Returns:
            The path written.
        """
        if path is None:
            directory = self.source_path.parent if self.source_path else Path.cwd()
            path = directory / export_filename(self.file_name)

        self.parser.write(self._require_catalog(), path)
        return path
