"""
YAML encoder.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal
from typing import Any

import yaml

from sqlexport.core.rows import EncodeResult, ResultSet, to_display_string
from sqlexport.export.base import Encoder
from sqlexport.export.settings import YamlSettings

_WORD_SPLIT = re.compile(r"[\W_]+")

_SAFE_TYPES = (str, int, float, bool, datetime, date, type(None))


def to_camel_case(name: str) -> str:
    """
    Normalize a column name to lower camel case.

    ``cmp_code`` -> ``cmpCode``, ``CustomerName`` -> ``customerName``,
    ``ORDER ID`` -> ``orderId``.
    """
    words = [w for w in _WORD_SPLIT.split(str(name)) if w]
    if not words:
        return str(name)

    def _word(word: str, first: bool) -> str:
        if word.isupper():
            word = word.lower()
        if first:
            return word[0].lower() + word[1:]
        return word[0].upper() + word[1:]

    return "".join(_word(word, index == 0) for index, word in enumerate(words))


def _represent_decimal(dumper: yaml.SafeDumper, value: Decimal) -> yaml.ScalarNode:
    """Write a Decimal as a YAML float with its exact digits."""
    return dumper.represent_scalar("tag:yaml.org,2002:float", format(value, "f"))


class ExportDumper(yaml.SafeDumper):
    """SafeDumper that writes Decimal values without going through float."""


ExportDumper.add_representer(Decimal, _represent_decimal)


class IndentedSequenceDumper(ExportDumper):
    """SafeDumper that indents block sequences nested under a mapping key."""

    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:
        return super().increase_indent(flow, False)


class YAMLEncoder(Encoder):
    """
    Render rows as a YAML sequence of block mappings.

    Keys are normalized to lower camel case. Null-valued fields are omitted
    unless ``emit_defaults`` is set.
    """

    @property
    def format_name(self) -> str:
        return "YAML"

    def encode(self, rows: ResultSet, settings: YamlSettings | None = None) -> EncodeResult:
        settings = settings or YamlSettings()
        warnings: list[str] = []

        documents = [self._convert_row(index, row, settings, warnings) for index, row in enumerate(rows)]

        indent = settings.indentation_level if 2 <= settings.indentation_level <= 9 else 2
        dumper = IndentedSequenceDumper if settings.indentation_level > 0 else ExportDumper
        text = yaml.dump(
            documents,
            Dumper=dumper,
            indent=indent,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
            explicit_start=settings.include_header,
        )
        return EncodeResult(text, tuple(warnings))

    def _convert_row(
        self, index: int, row: Any, settings: YamlSettings, warnings: list[str]
    ) -> dict[str, Any]:
        converted: dict[str, Any] = {}
        for name, value in row.items():
            key = to_camel_case(name)
            if key in converted:
                self._warn(warnings, f"Row {index + 1}: column '{name}' collides with an earlier column as '{key}'")
            value = self._convert_value(index, name, value, warnings)
            if value is None and not settings.emit_defaults:
                continue
            converted[key] = value
        return converted

    def _convert_value(self, index: int, name: str, value: Any, warnings: list[str]) -> Any:
        if isinstance(value, _SAFE_TYPES):
            return value
        if isinstance(value, Decimal):
            if not value.is_finite():
                return float(value)
            return int(value) if value == value.to_integral_value() else value
        try:
            return to_display_string(value)
        except Exception as e:
            self._warn(warnings, f"Row {index + 1}, column '{name}': {e}; emitted null")
            return None
