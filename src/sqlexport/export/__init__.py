"""
Export engine: render a ResultSet as JSON, XML, YAML or delimited text.

Encoders are pure functions of (rows, settings). ``AUTO`` inspects the rows
and picks XML or JSON for pre-serialized single-column results, CSV
otherwise.
"""

from sqlexport.core.rows import DetectionOutcome, ResultSet
from sqlexport.exceptions import UnsupportedFormatError
from sqlexport.export.base import Encoder
from sqlexport.export.delimited import CsvEncoder, DelimitedEncoder, TabEncoder
from sqlexport.export.detection import detect_and_encode
from sqlexport.export.json_encoder import JSONEncoder
from sqlexport.export.settings import CsvSettings, JsonSettings, OutputSettings, XmlSettings, YamlSettings
from sqlexport.export.xml_encoder import XMLEncoder
from sqlexport.export.yaml_encoder import YAMLEncoder

__all__ = [
    "Encoder",
    "DelimitedEncoder",
    "CsvEncoder",
    "TabEncoder",
    "JSONEncoder",
    "XMLEncoder",
    "YAMLEncoder",
    "CsvSettings",
    "XmlSettings",
    "JsonSettings",
    "YamlSettings",
    "OutputSettings",
    "SUPPORTED_FORMATS",
    "normalize_format",
    "get_encoder",
    "extension_for",
    "detect_and_encode",
    "export_rows",
]

AUTO = "AUTO"

_ENCODERS: dict[str, type[Encoder]] = {
    "JSON": JSONEncoder,
    "XML": XMLEncoder,
    "CSV": CsvEncoder,
    "TAB": TabEncoder,
    "YAML": YAMLEncoder,
}

_KINDS = {"JSON": "json", "XML": "xml", "CSV": "delimited", "TAB": "delimited", "YAML": "yaml"}

SUPPORTED_FORMATS = (AUTO, "JSON", "XML", "CSV", "TAB", "YAML")


def normalize_format(format: str | None) -> str:
    """
    Validate a format token and return its canonical upper-case form.

    Raises:
        UnsupportedFormatError: If the token is not a supported format
    """
    token = (format or "").strip().upper()
    if token not in SUPPORTED_FORMATS:
        raise UnsupportedFormatError(format or "", SUPPORTED_FORMATS)
    return token


def get_encoder(format: str) -> Encoder:
    """
    Get an encoder instance for a concrete format.

    Args:
        format: Format token (case-insensitive), not AUTO

    Returns:
        Encoder instance

    Raises:
        UnsupportedFormatError: If format is not a concrete supported format
    """
    token = (format or "").strip().upper()
    cls = _ENCODERS.get(token)
    if cls is None:
        raise UnsupportedFormatError(format, tuple(_ENCODERS))
    return cls()


def extension_for(format: str) -> str:
    """File extension for a resolved format token."""
    return get_encoder(format).extension


def _settings_for(token: str, settings: OutputSettings):
    return {
        "JSON": settings.json,
        "XML": settings.xml,
        "CSV": settings.csv,
        "TAB": settings.csv,
        "YAML": settings.yaml,
    }[token]


def export_rows(rows: ResultSet, requested_format: str, settings: OutputSettings | None = None) -> DetectionOutcome:
    """
    Render rows in the requested format.

    This is the main entry point of the export engine. ``AUTO`` delegates to
    detect_and_encode(); the outcome always carries the concrete format so
    callers can derive the file extension from it.

    Args:
        rows: Result set to render
        requested_format: AUTO, JSON, XML, CSV, TAB or YAML (case-insensitive)
        settings: Settings bundle (defaults apply when None)

    Returns:
        DetectionOutcome with resolved format, text and warnings

    Raises:
        UnsupportedFormatError: If the format token is not recognised
    """
    token = normalize_format(requested_format)
    settings = settings or OutputSettings()

    if token == AUTO:
        return detect_and_encode(rows, settings)

    encoder = get_encoder(token)
    result = encoder.encode(rows, _settings_for(token, settings))
    return DetectionOutcome(_KINDS[token], token, result.text, result.warnings)
