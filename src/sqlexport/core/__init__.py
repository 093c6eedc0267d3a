"""
Core row model and export pipeline.
"""

from sqlexport.core.rows import DetectionOutcome, EncodeResult, ResultSet, Row, to_display_string

__all__ = [
    "Row",
    "ResultSet",
    "EncodeResult",
    "DetectionOutcome",
    "to_display_string",
]
