"""
Base encoder class.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from sqlexport.core.rows import EncodeResult, ResultSet
from sqlexport.utils.logging import get_logger

logger = get_logger("sqlexport.export")


class Encoder(ABC):
    """
    Base class for format encoders.

    Encoders are stateless: ``encode`` is a pure function of the rows and
    the settings, performs no I/O and never raises for well-formed input.
    Cells that cannot be represented are substituted and reported through
    ``EncodeResult.warnings``.
    """

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Return the format token (e.g. 'CSV', 'JSON')."""
        ...

    @property
    def extension(self) -> str:
        """Default file extension for this format."""
        return self.format_name.lower()

    @abstractmethod
    def encode(self, rows: ResultSet, settings: Any = None) -> EncodeResult:
        """
        Render rows as text.

        Args:
            rows: Result set to render
            settings: Format settings (defaults apply when None)

        Returns:
            Rendered text and warnings
        """
        ...

    def _warn(self, warnings: list[str], message: str) -> None:
        """Record a recovered problem and log it."""
        warnings.append(message)
        logger.warning(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
