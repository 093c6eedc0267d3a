"""
Per-format output settings.

Every option has a documented default so a profile may omit any of them.
Settings are frozen: encoders receive them read-only.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from typing import Any

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def normalize_key(key: str) -> str:
    """Convert a profile key to snake_case (``AppendHeader`` -> ``append_header``)."""
    return _CAMEL_BOUNDARY.sub("_", key.strip()).replace("-", "_").replace(" ", "_").lower()


def _known_fields(cls: type, data: dict[str, Any] | None) -> dict[str, Any]:
    """Keep only keys that name a dataclass field, ignoring unknown keys."""
    if not data:
        return {}
    known = {f.name for f in fields(cls)}
    result = {}
    for key, value in data.items():
        name = normalize_key(str(key))
        if name in known:
            result[name] = value
    return result


@dataclass(frozen=True)
class CsvSettings:
    """Delimited output settings (CSV; TAB uses a fixed tab separator)."""

    header: bool = True
    separator: str = ","
    delimiter: str = ","  # legacy alias, used when separator is empty
    decimal: str = "."

    @property
    def field_separator(self) -> str:
        return self.separator or self.delimiter or ","

    @classmethod
    def from_dict(cls, d: dict[str, Any] | None) -> CsvSettings:
        return cls(**_known_fields(cls, d))


@dataclass(frozen=True)
class XmlSettings:
    """XML output settings."""

    append_header: bool = True
    root_node: str = "Root"
    row_node: str = "Row"

    @classmethod
    def from_dict(cls, d: dict[str, Any] | None) -> XmlSettings:
        return cls(**_known_fields(cls, d))


@dataclass(frozen=True)
class JsonSettings:
    """JSON output settings."""

    write_indented: bool = True

    @property
    def indent(self) -> int | None:
        return 2 if self.write_indented else None

    @classmethod
    def from_dict(cls, d: dict[str, Any] | None) -> JsonSettings:
        return cls(**_known_fields(cls, d))


@dataclass(frozen=True)
class YamlSettings:
    """
    YAML output settings.

    Attributes:
        include_header: Emit an explicit ``---`` document start marker
        indentation_level: Mapping indent; values above zero also indent
            nested sequences under their parent key
        emit_defaults: Emit null-valued fields instead of omitting them
    """

    include_header: bool = True
    indentation_level: int = 2
    emit_defaults: bool = False

    @classmethod
    def from_dict(cls, d: dict[str, Any] | None) -> YamlSettings:
        return cls(**_known_fields(cls, d))


@dataclass(frozen=True)
class OutputSettings:
    """Settings bundle covering every output format."""

    csv: CsvSettings = field(default_factory=CsvSettings)
    xml: XmlSettings = field(default_factory=XmlSettings)
    json: JsonSettings = field(default_factory=JsonSettings)
    yaml: YamlSettings = field(default_factory=YamlSettings)

    @classmethod
    def from_dict(cls, d: dict[str, Any] | None) -> OutputSettings:
        """Create OutputSettings from a profile mapping (keys ``csv``/``CSV`` etc.)."""
        sections = {str(k).lower(): v for k, v in (d or {}).items()}
        return cls(
            csv=CsvSettings.from_dict(sections.get("csv")),
            xml=XmlSettings.from_dict(sections.get("xml")),
            json=JsonSettings.from_dict(sections.get("json")),
            yaml=YamlSettings.from_dict(sections.get("yaml")),
        )
