"""Parser and generator for Gettext PO files."""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..exceptions import CatalogDecodeError
from .models import ParsedCatalog, TranslationEntry

logger = logging.getLogger(__name__)

# Leading comment written at the top of every generated catalog
FILE_COMMENT = "# Translation File"


@dataclass
class _RawRecord:
    """Fields extracted from one blank-line delimited block."""
    msgid: str = ""
    msgstr: str = ""
    context: Optional[str] = None
    comments: Optional[str] = None


class POParser:
    """Parser for Gettext PO files.

    Supports the single-form subset of the format: ``msgctxt``, ``msgid``,
    ``msgstr``, continuation lines and extracted/reference comments. Parsing
    is best effort and never raises; unknown lines are skipped.
    """

    # Blocks are separated by one or more blank lines
    BLOCK_SEPARATOR = re.compile(r'\n\n+')

    # A complete quoted string: "..."
    QUOTED_PATTERN = re.compile(r'"(.*)"')

    # Field keyword -> record attribute
    FIELD_PREFIXES = (
        ("msgctxt ", "context"),
        ("msgid ", "msgid"),
        ("msgstr ", "msgstr"),
    )

    # Comment prefixes whose payload is kept
    KEPT_COMMENT_PREFIXES = ("#.", "#:")

    def parse(self, content: str) -> ParsedCatalog:
        """Parse PO content into a ParsedCatalog.

        Args:
            content: The content of a PO file.

        Returns:
            ParsedCatalog with headers and entries in file order.
        """
        normalized = content.replace('\r\n', '\n').replace('\r', '\n')

        headers: dict[str, str] = {}
        entries = []

        for block in self.BLOCK_SEPARATOR.split(normalized):
            if not block.strip():
                continue

            record = self._parse_block(block)

            # Header block has an empty msgid
            if record.msgid == "":
                headers = {**headers, **self.parse_headers(record.msgstr)}
                continue

            entries.append(TranslationEntry(
                msgid=record.msgid,
                msgstr=record.msgstr,
                context=record.context,
                comments=record.comments
            ))

        logger.debug("Parsed %d entries and %d headers", len(entries), len(headers))
        return ParsedCatalog(headers=headers, entries=tuple(entries))

    def _parse_block(self, block: str) -> _RawRecord:
        """Extract the fields of a single block.

        Args:
            block: Block text without surrounding blank lines.

        Returns:
            The raw record. Missing fields are left at their defaults.
        """
        record = _RawRecord()
        comments = []
        current_field: Optional[str] = None

        for line in block.split('\n'):
            line = line.strip()

            if not line:
                continue

            # Comment lines; only extracted and reference comments are kept
            if line.startswith('#'):
                if line.startswith(self.KEPT_COMMENT_PREFIXES):
                    payload = line[2:].strip()
                    if payload:
                        comments.append(payload)
                continue

            for prefix, attr in self.FIELD_PREFIXES:
                if line.startswith(prefix):
                    setattr(record, attr, self.extract_string(line[len(prefix):]))
                    current_field = attr
                    break
            else:
                # Continuation line
                if line.startswith('"') and line.endswith('"') and current_field:
                    previous = getattr(record, current_field) or ""
                    setattr(record, current_field, previous + self.extract_string(line))

        record.comments = " ".join(comments) or None
        return record

    def extract_string(self, quoted: str) -> str:
        """Remove surrounding quotes and unescape.

        Values that are not quoted are returned unchanged.
        """
        match = self.QUOTED_PATTERN.fullmatch(quoted.strip())
        if not match:
            return quoted
        return TranslationEntry.unescape(match.group(1))

    def parse_headers(self, header_str: str) -> dict[str, str]:
        """Parse the header msgstr into a key/value mapping.

        Args:
            header_str: Unescaped msgstr of the header block.

        Returns:
            Dictionary of header values in order of appearance.
        """
        headers = {}
        for line in header_str.split('\n'):
            key, sep, value = line.partition(':')
            # Lines without a colon, or with a blank key, carry no header
            if not sep or not key.strip():
                continue
            headers[key.strip()] = value.strip()
        return headers

    def parse_file(self, path: Path) -> ParsedCatalog:
        """Parse a PO file.

        Args:
            path: Path to the PO file.

        Returns:
            ParsedCatalog for the file.

        Raises:
            CatalogDecodeError: If the file is not valid UTF-8.
        """
        return self.parse(self.decode(path.read_bytes()))

    @staticmethod
    def decode(raw: bytes) -> str:
        """Decode catalog bytes as UTF-8, dropping a leading BOM.

        Raises:
            CatalogDecodeError: If the bytes are not valid UTF-8.
        """
        try:
            return raw.decode('utf-8-sig')
        except UnicodeDecodeError as e:
            raise CatalogDecodeError(f"Catalog is not valid UTF-8: {e}") from e

    def format(self, catalog: ParsedCatalog) -> str:
        """Format a catalog as PO content.

        Args:
            catalog: The catalog to serialize.

        Returns:
            PO file content using ``\\n`` line endings.
        """
        lines = [FILE_COMMENT, 'msgid ""', 'msgstr ""']

        for key, value in catalog.headers.items():
            lines.append(TranslationEntry.quote(f"{key}: {value}\n"))
        lines.append('')  # Close the header block

        for entry in catalog.entries:
            lines.append(entry.to_po_format())
            lines.append('')  # Empty line between entries

        return '\n'.join(lines)

    def write(self, catalog: ParsedCatalog, path: Path) -> None:
        """Write a catalog to a PO file.

        Args:
            catalog: The catalog to write.
            path: Path to the output file.
        """
        content = self.format(catalog)

        # Ensure parent directory exists
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode('utf-8'))
        logger.info("Wrote %d entries to %s", len(catalog.entries), path)


_parser = POParser()


def parse_po(content: str) -> ParsedCatalog:
    """Parse PO content. See POParser.parse."""
    return _parser.parse(content)


def generate_po(catalog: ParsedCatalog) -> str:
    """Generate PO content. See POParser.format."""
    return _parser.format(catalog)
