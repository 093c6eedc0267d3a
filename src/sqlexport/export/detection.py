"""
Auto-detection of pre-serialized XML/JSON query results.

Database engines return ``FOR XML`` / ``FOR JSON`` results as a single text
column, often split across several physical rows. The dispatcher stitches
such a column back together and re-renders it as a real document instead of
wrapping serialized text inside CSV cells. Anything else falls back to CSV.
"""

from __future__ import annotations

from xml.dom import minidom
from xml.dom.minidom import Node
from xml.parsers.expat import ExpatError

from sqlexport.core.rows import DetectionOutcome, ResultSet
from sqlexport.export.base import logger
from sqlexport.export.delimited import CsvEncoder
from sqlexport.export.json_encoder import looks_like_json, reformat_json
from sqlexport.export.settings import OutputSettings
from sqlexport.export.xml_encoder import XML_DECLARATION


def _has_text_content(element: Node) -> bool:
    """Whether an element carries non-whitespace text or CDATA of its own."""
    for child in element.childNodes:
        if child.nodeType in (Node.TEXT_NODE, Node.CDATA_SECTION_NODE) and child.data.strip():
            return True
    return False


def _indent(element: Node, indent: str, level: int = 0) -> None:
    """
    Re-indent an element's children in place.

    Only whitespace-only text is replaced. Elements holding text (mixed
    content) and elements marked ``xml:space="preserve"`` are left as they
    are, together with everything below them.
    """
    if _has_text_content(element) or element.getAttribute("xml:space") == "preserve":
        return

    children = [child for child in element.childNodes if child.nodeType != Node.TEXT_NODE]
    for child in list(element.childNodes):
        if child.nodeType == Node.TEXT_NODE:
            element.removeChild(child)
    if not children:
        return

    document = element.ownerDocument
    for child in children:
        element.insertBefore(document.createTextNode("\n" + indent * (level + 1)), child)
        if child.nodeType == Node.ELEMENT_NODE:
            _indent(child, indent, level + 1)
    element.appendChild(document.createTextNode("\n" + indent * level))


def pretty_xml(text: str, indent: str = "  ") -> str:
    """
    Parse an XML document and pretty-print it.

    Indentation only touches whitespace between elements, so the text
    content of the document is unchanged. The declaration is kept only when
    the source carried one.

    Raises:
        ExpatError: If text is not a well-formed XML document
    """
    source = text.strip()
    document = minidom.parseString(source)
    try:
        _indent(document.documentElement, indent)
        body = document.documentElement.toxml() + "\n"
    finally:
        document.unlink()
    if source.startswith("<?xml"):
        return f"{XML_DECLARATION}\n{body}"
    return body


def detect_and_encode(rows: ResultSet, settings: OutputSettings | None = None) -> DetectionOutcome:
    """
    Choose a format by inspecting the rows and render them.

    Order, first success wins:

    1. no rows: empty CSV
    2. one column whose concatenated text starts with ``<``: XML document
    3. one column whose concatenated text starts with ``[`` or ``{``: JSON document
    4. otherwise: CSV

    Args:
        rows: Result set to render
        settings: Settings bundle (defaults apply when None)

    Returns:
        DetectionOutcome with the resolved format and text
    """
    settings = settings or OutputSettings()
    warnings: list[str] = []

    if not rows:
        logger.warning("No rows returned from query")
        return DetectionOutcome("delimited", "CSV", "")

    if rows.is_single_column:
        column = rows.columns[0]
        text = rows.concat_column(column)
        stripped = text.strip()

        if stripped.startswith("<"):
            try:
                document = pretty_xml(stripped)
                logger.info("Detected and formatted XML result")
                return DetectionOutcome("xml", "XML", document)
            except ExpatError as e:
                message = f"Data looks like XML but failed to parse: {e}"
                warnings.append(message)
                logger.warning(message)
        elif looks_like_json(stripped):
            try:
                document = reformat_json(stripped, indent=settings.json.indent)
                logger.info("Detected and formatted JSON result")
                return DetectionOutcome("json", "JSON", document + "\n")
            except ValueError as e:
                message = f"Data looks like JSON but failed to parse: {e}"
                warnings.append(message)
                logger.warning(message)

    logger.info("No specific format detected, defaulting to CSV format")
    result = CsvEncoder().encode(rows, settings.csv)
    return DetectionOutcome("delimited", "CSV", result.text, tuple(warnings) + result.warnings)
