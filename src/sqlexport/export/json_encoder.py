"""
JSON encoder.
"""

from __future__ import annotations

import json
import math
from decimal import Decimal
from typing import Any

from sqlexport.core.rows import EncodeResult, ResultSet, to_display_string, to_json_safe
from sqlexport.export.base import Encoder, logger
from sqlexport.export.settings import JsonSettings


def looks_like_json(text: str) -> bool:
    """Whether text, ignoring leading whitespace, opens a JSON array or object."""
    stripped = text.lstrip()
    return stripped.startswith("[") or stripped.startswith("{")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def reformat_json(text: str, indent: int | None = 2) -> str:
    """
    Parse a JSON document and serialize it again.

    ``NaN`` and ``Infinity`` literals are rejected.

    Raises:
        ValueError: If text is not valid JSON (json.JSONDecodeError included)
    """
    document = json.loads(text, parse_constant=_reject_constant)
    return json.dumps(document, indent=indent, ensure_ascii=False)


def json_value(value: Any) -> str:
    """
    Serialize one cell as a JSON fragment.

    Decimal values keep their exact digits.

    Raises:
        ValueError: For NaN and infinite numbers
    """
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"{value} is not valid JSON")
        return format(value, "f")
    if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
        raise ValueError(f"{value} is not valid JSON")
    return json.dumps(to_json_safe(value), ensure_ascii=False)


def _dump_records(records: list[dict[str, str]], indent: int | None) -> str:
    """Lay out rows of pre-serialized values the way json.dumps would."""
    if not records:
        return "[]"

    def _key(name: str) -> str:
        return json.dumps(str(name), ensure_ascii=False)

    if indent is None:
        objects = ("{" + ", ".join(f"{_key(k)}: {v}" for k, v in record.items()) + "}" for record in records)
        return "[" + ", ".join(objects) + "]"

    pad = " " * indent
    objects = []
    for record in records:
        if not record:
            objects.append(f"{pad}{{}}")
            continue
        members = ",\n".join(f"{pad}{pad}{_key(k)}: {v}" for k, v in record.items())
        objects.append(f"{pad}{{\n{members}\n{pad}}}")
    return "[\n" + ",\n".join(objects) + "\n]"


class JSONEncoder(Encoder):
    """
    Render rows as a JSON array of objects.

    When the result is a single column whose first value opens a JSON
    array or object, the column is treated as a document split across rows
    (``FOR JSON`` style output): the values are concatenated, parsed and
    re-emitted indented. If that document does not parse, the rows are
    serialized as usual.
    """

    @property
    def format_name(self) -> str:
        return "JSON"

    def encode(self, rows: ResultSet, settings: JsonSettings | None = None) -> EncodeResult:
        settings = settings or JsonSettings()
        warnings: list[str] = []

        if rows.is_single_column:
            column = rows.columns[0]
            first = to_display_string(rows[0].get(column))
            if looks_like_json(first):
                try:
                    text = reformat_json(rows.concat_column(column), indent=2)
                    logger.debug(f"Re-emitted JSON document from column '{column}' ({len(rows)} rows)")
                    return EncodeResult(text + "\n")
                except ValueError as e:
                    self._warn(warnings, f"Failed to parse JSON from column data: {e}")

        records = [self._clean_row(index, row, warnings) for index, row in enumerate(rows)]
        return EncodeResult(_dump_records(records, settings.indent) + "\n", tuple(warnings))

    def _clean_row(self, index: int, row: Any, warnings: list[str]) -> dict[str, str]:
        """Serialize a row's cells, null where a value cannot be written."""
        cleaned = {}
        for name, value in row.items():
            try:
                cleaned[name] = json_value(value)
            except Exception as e:
                self._warn(warnings, f"Row {index + 1}, column '{name}': {e}; emitted null")
                cleaned[name] = "null"
        return cleaned
