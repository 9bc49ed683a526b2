import itertools
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from .collector.source import LineSource
from .config.defaults import DEFAULT_GUESS_ATTEMPTS
from .config.schema import LogRangesConfig
from .dateformat.compiler import FormatSpec, compile_format
from .dateformat.guesser import guess_entry
from .dateformat.library import KNOWN_FORMATS, KnownFormat
from .errors import GuessExhausted
from .reporter import Reporter
from .scanner.aggregator import RangeAggregator
from .scanner.patterns import PatternSet
from .utils.logging import get_logger

logger = get_logger("scanner")

EXPLICIT_FORMAT = "explicit"


@dataclass
class ScanSummary:
    source: str
    date_format: str
    format_origin: str
    lines: int = 0
    timestamped_lines: int = 0
    ranges: int = 0


class RangeScanner:
    """
    Ties format selection, aggregation and reporting together for one input.

    Patterns and an explicit format are validated here, before any line is read.
    """

    def __init__(
        self,
        patterns: PatternSet,
        date_format: Optional[str] = None,
        guess_attempts: int = DEFAULT_GUESS_ATTEMPTS,
        library: Sequence[KnownFormat] = KNOWN_FORMATS,
    ):
        self.patterns = patterns
        self.explicit_format = compile_format(date_format) if date_format else None
        self.guess_attempts = guess_attempts
        self.library = library

    @classmethod
    def from_config(cls, config: LogRangesConfig) -> "RangeScanner":
        return cls(
            patterns=PatternSet.from_config(config.patterns),
            date_format=config.scan.format,
            guess_attempts=config.scan.guess_attempts,
        )

    def select_format(self, lines: Iterator[str]) -> Tuple[FormatSpec, str, List[str]]:
        """
        Return the format to use, where it came from, and the lines read to find it.

        The line source cannot be rewound, so the caller must replay the returned
        lines before continuing with `lines`.
        """
        if self.explicit_format is not None:
            return self.explicit_format, EXPLICIT_FORMAT, []

        sample: List[str] = []

        def recording():
            for line in lines:
                sample.append(line)
                yield line

        entry = guess_entry(recording(), self.guess_attempts, self.library)
        if entry is None:
            raise GuessExhausted(self.guess_attempts)
        return entry.spec, entry.name, sample

    def run(self, source: LineSource, reporter: Reporter) -> ScanSummary:
        lines = iter(source)
        date_format, origin, sample = self.select_format(lines)
        logger.info(f"Scanning {source.name} with date format '{date_format.pattern}' ({origin})")

        aggregator = RangeAggregator(date_format, self.patterns)
        summary = ScanSummary(
            source=source.name, date_format=date_format.pattern, format_origin=origin
        )

        for closed in aggregator.run(itertools.chain(sample, lines), on_line=reporter.preview):
            reporter.emit(closed)
            summary.ranges += 1

        summary.lines = aggregator.lines_seen
        summary.timestamped_lines = aggregator.timestamped_lines
        logger.info(
            f"Read {summary.lines} lines ({summary.timestamped_lines} with a timestamp), "
            f"reported {summary.ranges} ranges"
        )
        return summary
