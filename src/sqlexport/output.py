"""
Output sink and default output path naming.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from sqlexport.exceptions import OutputFileError
from sqlexport.utils.logging import get_logger

logger = get_logger("sqlexport.output")


def default_output_path(output_directory: str | Path | None, extension: str, now: datetime | None = None) -> Path:
    """
    Build ``<dir>/output_<YYYYMMDD_HHMMSS>.<ext>``.

    An empty output directory means the current working directory.
    """
    now = now or datetime.now()
    directory = Path(output_directory).expanduser() if output_directory else Path.cwd()
    return directory.resolve() / f"output_{now:%Y%m%d_%H%M%S}.{extension.lower()}"


class FileSink:
    """Writes rendered documents to disk as UTF-8 text."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def write_text(self, path: str | Path, content: str) -> Path:
        """
        Write content, creating parent directories as needed.

        Raises:
            OutputFileError: If the file cannot be written
        """
        target = Path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            # newline="" keeps "\n" line endings on every platform
            with open(target, "w", encoding=self.encoding, newline="") as f:
                f.write(content)
        except OSError as e:
            logger.error(f"Error writing output to file: {e}")
            raise OutputFileError(str(target), str(e)) from e

        logger.info(f"Output successfully written to: {target}")
        return target
