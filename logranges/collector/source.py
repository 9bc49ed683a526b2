import bz2
import gzip
import lzma
import sys
from pathlib import Path
from typing import Iterator, Optional

from ..utils.logging import get_logger

logger = get_logger("line_source")

COMPRESSION_OPENERS = {
    ".gz": gzip.open,
    ".bz2": bz2.open,
    ".xz": lzma.open,
    ".lzma": lzma.open,
}


class LineSource:
    """Reads lines from a log file (plain or compressed) or from stdin."""

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path) if path and path != "-" else None
        self._fd = None

    @property
    def is_stdin(self) -> bool:
        return self.path is None

    @property
    def name(self) -> str:
        return "<stdin>" if self.is_stdin else str(self.path)

    def open(self):
        if self.is_stdin:
            self._fd = sys.stdin
            return

        opener = COMPRESSION_OPENERS.get(self.path.suffix.lower(), open)
        self._fd = opener(self.path, "rt", encoding="utf-8", errors="replace")
        logger.debug(f"Opened {self.path} with {opener.__module__}.{opener.__name__}")

    def lines(self) -> Iterator[str]:
        if self._fd is None:
            self.open()
        for line in self._fd:
            yield line.rstrip("\r\n")

    def close(self):
        # stdin belongs to the process, not to us
        if self._fd is not None and self._fd is not sys.stdin:
            self._fd.close()
        self._fd = None

    def __iter__(self) -> Iterator[str]:
        return self.lines()

    def __enter__(self) -> "LineSource":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
