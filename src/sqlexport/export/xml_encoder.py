"""
XML encoder.
"""

from __future__ import annotations

import re
from xml.sax.saxutils import escape

from sqlexport.core.rows import EncodeResult, ResultSet, to_display_string
from sqlexport.export.base import Encoder
from sqlexport.export.settings import XmlSettings

XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'

_ENTITIES = {'"': "&quot;", "'": "&apos;"}

# Characters outside the XML 1.0 Char production
_ILLEGAL_XML_CHARS = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")

_INVALID_NAME_CHARS = re.compile(r"[^\w.\-]")


def escape_text(text: str) -> str:
    """Escape the five XML special characters."""
    return escape(text, _ENTITIES)


def element_name(name: str) -> str:
    """Turn an arbitrary column name into a valid XML element name."""
    cleaned = _INVALID_NAME_CHARS.sub("_", str(name).strip())
    if not cleaned:
        return "_"
    if not (cleaned[0].isalpha() or cleaned[0] == "_"):
        cleaned = "_" + cleaned
    return cleaned


class XMLEncoder(Encoder):
    """
    Render rows as an XML document::

        <?xml version="1.0" encoding="utf-8"?>
        <Root>
          <Row>
            <column>value</column>
          </Row>
        </Root>

    The declaration is emitted only when ``append_header`` is set. A cell
    that cannot be rendered becomes an empty element.
    """

    @property
    def format_name(self) -> str:
        return "XML"

    def encode(self, rows: ResultSet, settings: XmlSettings | None = None) -> EncodeResult:
        settings = settings or XmlSettings()
        warnings: list[str] = []
        root = element_name(settings.root_node or "Root")
        row_node = element_name(settings.row_node or "Row")

        lines = []
        if settings.append_header:
            lines.append(XML_DECLARATION)
        lines.append(f"<{root}>")

        for index, row in enumerate(rows):
            lines.append(f"  <{row_node}>")
            for name, value in row.items():
                tag = element_name(name)
                try:
                    text = to_display_string(value)
                    if _ILLEGAL_XML_CHARS.search(text):
                        self._warn(warnings, f"Row {index + 1}, column '{name}': removed characters not allowed in XML")
                        text = _ILLEGAL_XML_CHARS.sub("", text)
                    lines.append(f"    <{tag}>{escape_text(text)}</{tag}>")
                except Exception as e:
                    self._warn(warnings, f"Error formatting XML value for {name}: {e}")
                    lines.append(f"    <{tag}></{tag}>")
            lines.append(f"  </{row_node}>")

        lines.append(f"</{root}>")
        return EncodeResult("\n".join(lines) + "\n", tuple(warnings))
