"""
Delimited text encoders (CSV and tab-separated).
"""

from __future__ import annotations

from sqlexport.core.rows import EncodeResult, ResultSet, to_display_string
from sqlexport.export.base import Encoder
from sqlexport.export.settings import CsvSettings

TAB = "\t"


def format_field(value: str, separator: str) -> str:
    """
    Quote a field when it contains the separator, a quote or a line break.

    Embedded quotes are doubled inside a quoted field.
    """
    if separator in value or '"' in value or "\r" in value or "\n" in value:
        return '"' + value.replace('"', '""') + '"'
    return value


class DelimitedEncoder(Encoder):
    """
    Render rows as delimited text.

    The header line and the column order come from the first row and are
    applied to every row; a key missing from a later row renders as an
    empty field. Lines end with ``\\n``.
    """

    def __init__(self, format_name: str = "CSV") -> None:
        format_name = format_name.upper()
        if format_name not in ("CSV", "TAB"):
            raise ValueError(f"Delimited format must be CSV or TAB, got '{format_name}'")
        self._format_name = format_name

    @property
    def format_name(self) -> str:
        return self._format_name

    @property
    def extension(self) -> str:
        return "csv" if self._format_name == "CSV" else "tab"

    def separator_for(self, settings: CsvSettings) -> str:
        return settings.field_separator if self._format_name == "CSV" else TAB

    def encode(self, rows: ResultSet, settings: CsvSettings | None = None) -> EncodeResult:
        settings = settings or CsvSettings()
        separator = self.separator_for(settings)
        warnings: list[str] = []

        if not rows:
            return EncodeResult("")

        columns = rows.columns
        lines = []
        if settings.header:
            lines.append(separator.join(format_field(name, separator) for name in columns))

        for index, row in enumerate(rows):
            fields = []
            for name in columns:
                try:
                    text = to_display_string(row.get(name), settings.decimal)
                except Exception as e:
                    self._warn(warnings, f"Row {index + 1}, column '{name}': cannot render value ({e}); left empty")
                    text = ""
                fields.append(format_field(text, separator))
            lines.append(separator.join(fields))

        return EncodeResult("\n".join(lines) + "\n", tuple(warnings))


class CsvEncoder(DelimitedEncoder):
    """Comma (or profile-configured separator) delimited output."""

    def __init__(self) -> None:
        super().__init__("CSV")


class TabEncoder(DelimitedEncoder):
    """Tab-separated output."""

    def __init__(self) -> None:
        super().__init__("TAB")
