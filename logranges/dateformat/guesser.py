from typing import Iterable, Optional, Sequence

from .compiler import FormatSpec
from .library import KNOWN_FORMATS, KnownFormat
from ..config.defaults import DEFAULT_GUESS_ATTEMPTS
from ..utils.logging import get_logger

logger = get_logger("format_guesser")


def guess_line(line: str, library: Sequence[KnownFormat] = KNOWN_FORMATS) -> Optional[KnownFormat]:
    """Return the first library entry whose regex occurs anywhere in the line."""
    for entry in library:
        if entry.spec.find(line):
            return entry
    return None


def guess_entry(
    sample_lines: Iterable[str],
    max_attempts: int = DEFAULT_GUESS_ATTEMPTS,
    library: Sequence[KnownFormat] = KNOWN_FORMATS,
) -> Optional[KnownFormat]:
    """
    Find the library entry used by a log.

    Lines are pulled lazily and nothing after the first matching line is read.
    Gives up after `max_attempts` lines without any match.
    """
    misses = 0
    for line in sample_lines:
        entry = guess_line(line, library)
        if entry:
            logger.info(f"Guessed date format '{entry.name}' ({entry.spec.pattern})")
            return entry

        misses += 1
        logger.debug(f"No known date format in line {misses}: {line[:80]!r}")
        if misses >= max_attempts:
            break

    logger.info(f"No known date format found after {misses} lines")
    return None


def guess(
    sample_lines: Iterable[str],
    max_attempts: int = DEFAULT_GUESS_ATTEMPTS,
    library: Sequence[KnownFormat] = KNOWN_FORMATS,
) -> Optional[FormatSpec]:
    entry = guess_entry(sample_lines, max_attempts, library)
    return entry.spec if entry else None
