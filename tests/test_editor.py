"""Tests for catalog edits, filtering and statistics."""

import pytest

from po_editor.editing import (
    CatalogStats,
    FilterType,
    apply_suggestion,
    compute_stats,
    filter_entries,
    update_translation,
)
from po_editor.exceptions import EntryNotFoundError
from po_editor.po import EntryStatus, ParsedCatalog, TranslationEntry


@pytest.fixture
def catalog():
    """Create a catalog with pending, translated and contextual entries."""
    return ParsedCatalog(
        headers={"Language": "es"},
        entries=(
            TranslationEntry("Welcome", comments="Login screen"),
            TranslationEntry("Open", "Abrir", context="menu"),
            TranslationEntry("Open", "Abierto", context="status"),
            TranslationEntry("Save file"),
        )
    )


class TestFilterEntries:
    """Tests for filter_entries."""

    def test_all(self, catalog):
        """Test the default filter returns everything."""
        assert filter_entries(catalog) == list(catalog.entries)

    def test_pending(self, catalog):
        """Test pending filter."""
        result = filter_entries(catalog, FilterType.PENDING)
        assert [e.msgid for e in result] == ["Welcome", "Save file"]

    def test_translated_includes_ai_suggested(self, catalog):
        """Test AI-suggested entries count as translated."""
        edited = apply_suggestion(catalog, "_Welcome", "Bienvenido")
        result = filter_entries(edited, FilterType.TRANSLATED)
        assert [e.id for e in result] == ["_Welcome", "menu_Open", "status_Open"]

    def test_search_is_case_insensitive(self, catalog):
        """Test search over msgid."""
        result = filter_entries(catalog, query="SAVE")
        assert [e.msgid for e in result] == ["Save file"]

    def test_search_matches_msgstr(self, catalog):
        """Test search over msgstr."""
        result = filter_entries(catalog, query="abier")
        assert [e.id for e in result] == ["status_Open"]

    def test_search_combined_with_status(self, catalog):
        """Test search and status filter together."""
        assert filter_entries(catalog, FilterType.PENDING, "open") == []


class TestUpdateTranslation:
    """Tests for update_translation and apply_suggestion."""

    def test_update_returns_new_catalog(self, catalog):
        """Test the input catalog is not modified."""
        edited = update_translation(catalog, "_Welcome", "Bienvenido")

        assert edited is not catalog
        assert catalog.entries[0].msgstr == ""
        assert edited.entries[0].msgstr == "Bienvenido"
        assert edited.entries[0].status == EntryStatus.TRANSLATED
        assert edited.entries[0].comments == "Login screen"
        assert edited.headers == catalog.headers
        assert edited.entries[1:] == catalog.entries[1:]

    def test_update_uses_context_in_id(self, catalog):
        """Test entries with the same msgid but different context stay apart."""
        edited = update_translation(catalog, "status_Open", "Abierta")
        assert edited.entries[1].msgstr == "Abrir"
        assert edited.entries[2].msgstr == "Abierta"

    def test_clearing_translation_makes_pending(self, catalog):
        """Test status is re-derived from the new text."""
        edited = update_translation(catalog, "menu_Open", "")
        assert edited.entries[1].status == EntryStatus.PENDING

    def test_update_unknown_id(self, catalog):
        """Test unknown ids raise EntryNotFoundError."""
        with pytest.raises(EntryNotFoundError):
            update_translation(catalog, "_Missing", "x")

    def test_update_duplicate_ids(self):
        """Test every entry sharing an id is updated."""
        catalog = ParsedCatalog(entries=(TranslationEntry("Hi"), TranslationEntry("Hi")))
        edited = update_translation(catalog, "_Hi", "Hola")
        assert [e.msgstr for e in edited.entries] == ["Hola", "Hola"]

    def test_apply_suggestion_marks_ai(self, catalog):
        """Test suggestions are tagged as AI-suggested."""
        edited = apply_suggestion(catalog, "_Save file", "Guardar archivo")
        entry = edited.entries[3]
        assert entry.msgstr == "Guardar archivo"
        assert entry.status == EntryStatus.AI_SUGGESTED

    def test_apply_empty_suggestion_is_pending(self, catalog):
        """Test an empty suggestion leaves the entry pending."""
        edited = apply_suggestion(catalog, "_Save file", "")
        assert edited.entries[3].status == EntryStatus.PENDING


class TestCatalogStats:
    """Tests for compute_stats."""

    def test_counts(self, catalog):
        """Test counting translated and pending entries."""
        stats = compute_stats(catalog)
        assert stats == CatalogStats(total=4, translated=2, pending=2)
        assert stats.percent_complete == 50.0

    def test_ai_suggested_counts_as_translated(self, catalog):
        """Test AI-suggested entries are not pending."""
        edited = apply_suggestion(catalog, "_Welcome", "Bienvenido")
        assert compute_stats(edited).translated == 3

    def test_empty_catalog(self):
        """Test empty catalogs report no progress."""
        stats = compute_stats(ParsedCatalog())
        assert stats.total == 0
        assert stats.percent_complete == 0.0
