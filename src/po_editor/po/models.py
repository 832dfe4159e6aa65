"""Data models for PO catalog entries."""

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class EntryStatus(str, Enum):
    """Translation state of a catalog entry."""
    PENDING = "pending"
    TRANSLATED = "translated"
    AI_SUGGESTED = "ai-suggested"


@dataclass(frozen=True)
class TranslationEntry:
    """Represents a single translatable unit in a PO catalog.

    Attributes:
        msgid: The source text.
        msgstr: The translated text (empty when untranslated).
        context: Optional disambiguation string from ``msgctxt``.
        comments: Optional extracted and reference comments, joined by spaces.
        status: Translation state. Derived from ``msgstr`` when not given.
    """
    msgid: str
    msgstr: str = ""
    context: Optional[str] = None
    comments: Optional[str] = None
    status: Optional[EntryStatus] = None

    def __post_init__(self):
        if self.status is None:
            object.__setattr__(self, "status", self.derive_status(self.msgstr))

    @property
    def id(self) -> str:
        """Identifier built from context and msgid."""
        return f"{self.context or ''}_{self.msgid}"

    @staticmethod
    def derive_status(msgstr: str) -> EntryStatus:
        return EntryStatus.TRANSLATED if msgstr else EntryStatus.PENDING

    def with_translation(
        self,
        msgstr: str,
        status: Optional[EntryStatus] = None
    ) -> "TranslationEntry":
        """Return a copy of this entry with a new translation.

        Args:
            msgstr: The new translated text.
            status: Explicit status. Derived from ``msgstr`` if omitted.

        Returns:
            A new TranslationEntry; this entry is left untouched.
        """
        return replace(
            self,
            msgstr=msgstr,
            status=status or self.derive_status(msgstr)
        )

    def to_po_format(self) -> str:
        """Convert entry to PO file format.

        Returns:
            The entry's lines, without the trailing blank separator.
        """
        lines = []
        if self.comments:
            lines.append(f"#. {self.comments}")
        if self.context is not None:
            lines.append(f"msgctxt {self.quote(self.context)}")
        lines.append(f"msgid {self.quote(self.msgid)}")
        lines.append(f"msgstr {self.quote(self.msgstr)}")

        return "\n".join(lines)

    @staticmethod
    def escape(s: str) -> str:
        """Escape special characters for PO quoted strings."""
        return (s
                .replace("\\", "\\\\")
                .replace('"', '\\"')
                .replace("\n", "\\n")
                .replace("\t", "\\t")
                .replace("\r", "\\r"))

    @classmethod
    def quote(cls, s: str) -> str:
        """Escape a string and wrap it in double quotes."""
        return f'"{cls.escape(s)}"'

    @staticmethod
    def unescape(s: str) -> str:
        """Unescape special characters from PO quoted strings."""
        result = []
        i = 0
        while i < len(s):
            if s[i] == '\\' and i + 1 < len(s):
                next_char = s[i + 1]
                if next_char == 'n':
                    result.append('\n')
                elif next_char == 't':
                    result.append('\t')
                elif next_char == 'r':
                    result.append('\r')
                elif next_char == '"':
                    result.append('"')
                elif next_char == '\\':
                    result.append('\\')
                else:
                    result.append(s[i])
                    result.append(next_char)
                i += 2
            else:
                result.append(s[i])
                i += 1
        return ''.join(result)


@dataclass(frozen=True)
class ParsedCatalog:
    """A whole PO catalog: header mapping plus entries in file order.

    Headers are stored as a read-only mapping and are left out of the hash,
    so catalogs are hashable and cannot be changed in place.

    Attributes:
        headers: Header key to value, in order of appearance.
        entries: Translation entries in order of appearance.
    """
    headers: Mapping[str, str] = field(default_factory=dict, hash=False)
    entries: tuple[TranslationEntry, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))
        if not isinstance(self.entries, tuple):
            object.__setattr__(self, "entries", tuple(self.entries))

    @property
    def language(self) -> Optional[str]:
        """Language code from the catalog headers, if any."""
        return self.headers.get("Language") or self.headers.get("language") or None

    def get_entry(self, entry_id: str) -> Optional[TranslationEntry]:
        """Return the first entry with the given id, or None."""
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None

    def replace_entries(self, entries) -> "ParsedCatalog":
        """Return a new catalog with the same headers and the given entries."""
        return ParsedCatalog(headers=dict(self.headers), entries=tuple(entries))
