"""
In-memory representation of a query result.

A ResultSet is an ordered, immutable sequence of rows; each row maps column
names to loosely-typed scalars (str, int, float, Decimal, bool, None,
date/time). Every encoder renders cells through to_display_string() so null
handling and number/date formatting live in one place.
"""

from __future__ import annotations

import base64
import math
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from types import MappingProxyType
from typing import Any

Row = Mapping[str, Any]


def to_display_string(value: Any, decimal: str = ".") -> str:
    """
    Render a cell value as text.

    Args:
        value: Cell value
        decimal: Decimal marker used for float and Decimal values

    Returns:
        String form of the value; None renders as an empty string
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return str(value)
        text = repr(value)
        if text.endswith(".0"):
            text = text[:-2]
        return text.replace(".", decimal) if decimal != "." else text
    if isinstance(value, Decimal):
        text = format(value, "f")
        return text.replace(".", decimal) if decimal != "." else text
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray, memoryview)):
        return "0x" + bytes(value).hex().upper()
    return str(value)


def to_json_safe(value: Any) -> Any:
    """
    Convert a scalar for the json module.

    str, int, float, bool, Decimal and None pass through unchanged. Dates and
    times become ISO-8601 text, binary becomes base64, and any other scalar
    (UUID, timedelta, ...) becomes its display string.

    Raises:
        Exception: Whatever the value's own ``str()`` raises
    """
    if value is None or isinstance(value, (str, int, float, bool, Decimal)):
        return value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    return to_display_string(value)


class ResultSet:
    """
    Ordered, immutable sequence of rows produced by one query execution.

    Rows are copied on construction and exposed as read-only mappings.
    Column order is taken from the first row; callers guarantee that all
    rows share the same columns.
    """

    __slots__ = ("_rows",)

    def __init__(self, rows: Iterable[Mapping[str, Any]] = ()) -> None:
        self._rows: tuple[Row, ...] = tuple(MappingProxyType(dict(row)) for row in rows)

    @classmethod
    def from_columns(cls, columns: Iterable[str], records: Iterable[Iterable[Any]]) -> ResultSet:
        """Build a ResultSet from a column list and positional records."""
        names = list(columns)
        return cls(dict(zip(names, record)) for record in records)

    @property
    def columns(self) -> list[str]:
        """Column names in first-row order (empty when there are no rows)."""
        if not self._rows:
            return []
        return list(self._rows[0].keys())

    @property
    def is_single_column(self) -> bool:
        """Whether every row has exactly one column."""
        return bool(self._rows) and all(len(row) == 1 for row in self._rows)

    def column_values(self, name: str) -> list[Any]:
        """Values of one column across all rows (None where a row lacks it)."""
        return [row.get(name) for row in self._rows]

    def concat_column(self, name: str) -> str:
        """Concatenate a column's values across rows, null as empty string."""
        return "".join(to_display_string(value) for value in self.column_values(name))

    def to_records(self) -> list[dict[str, Any]]:
        """Plain dict copies of the rows."""
        return [dict(row) for row in self._rows]

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self._rows)

    def __getitem__(self, index: int) -> Row:
        return self._rows[index]

    def __bool__(self) -> bool:
        return bool(self._rows)

    def __repr__(self) -> str:
        return f"ResultSet(rows={len(self._rows)}, columns={self.columns})"


@dataclass(frozen=True)
class EncodeResult:
    """Rendered text plus non-fatal warnings collected while encoding."""

    text: str
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class DetectionOutcome:
    """
    Result of rendering a ResultSet in a requested or detected format.

    Attributes:
        kind: Outcome class: "xml", "json", "yaml" or "delimited"
        format: Resolved format token (XML, JSON, CSV, TAB, YAML)
        text: Rendered document
        warnings: Non-fatal problems recovered from while rendering
    """

    kind: str
    format: str
    text: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def extension(self) -> str:
        """File extension of the resolved format."""
        return self.format.lower()
