from datetime import datetime, timedelta
from typing import Callable, Iterable, Iterator, Optional, Union

from .models import InRange, NotInRange, Range
from .patterns import PatternSet
from ..config.defaults import GAP_TOLERANCE
from ..dateformat.compiler import FormatSpec
from ..utils.logging import get_logger

logger = get_logger("range_aggregator")

State = Union[NotInRange, InRange]


class RangeAggregator:
    """
    Streaming state machine that merges matching lines into time ranges.

    Feed it one line at a time; `feed` and `finish` return the range that the
    line (or the end of input) closed, if any. Only one range is open at once.
    """

    def __init__(
        self,
        date_format: FormatSpec,
        patterns: PatternSet,
        gap_tolerance: timedelta = GAP_TOLERANCE,
    ):
        self.date_format = date_format
        self.patterns = patterns
        self.gap_tolerance = gap_tolerance
        self.state: State = NotInRange()
        self.last_timestamp: Optional[datetime] = None
        self.lines_seen = 0
        self.timestamped_lines = 0

    @property
    def current(self) -> Optional[Range]:
        if isinstance(self.state, InRange):
            return self.state.open_range
        return None

    def feed(self, line: str) -> Optional[Range]:
        self.lines_seen += 1
        closed = None

        timestamp = self.date_format.extract(line)
        if timestamp is not None:
            self.timestamped_lines += 1
            self.last_timestamp = timestamp
            current = self.current
            if current is not None and timestamp - current.end > self.gap_tolerance:
                closed = self._close()

        # A range cannot start before the first timestamp is known
        if self.last_timestamp is None:
            return closed

        index = self.patterns.match(line)
        if index is None:
            return closed

        current = self.current
        if current is not None:
            if current.pattern_index == index:
                current.end = self.last_timestamp
                current.match_count += 1
                return closed
            closed = self._close()

        self._open(index)
        return closed

    def run(
        self,
        lines: Iterable[str],
        on_line: Optional[Callable[[Optional[Range]], None]] = None,
    ) -> Iterator[Range]:
        """
        Feed every line and yield ranges as they close, then the final one.

        `on_line` is called with the open range (or None) after each line.
        """
        for line in lines:
            closed = self.feed(line)
            if closed is not None:
                yield closed
            if on_line is not None:
                on_line(self.current)

        final = self.finish()
        if final is not None:
            yield final

    def finish(self) -> Optional[Range]:
        """Close the open range at end of input."""
        if self.current is None:
            return None
        return self._close()

    def _open(self, index: int):
        self.state = InRange(Range(
            start=self.last_timestamp,
            end=self.last_timestamp,
            pattern_index=index,
        ))

    def _close(self) -> Range:
        closed = self.state.open_range
        self.state = NotInRange()
        logger.debug(
            f"Closed range for pattern #{closed.pattern_index}: "
            f"{closed.start} -> {closed.end}, {closed.match_count} matches"
        )
        return closed


def aggregate(
    lines: Iterable[str],
    date_format: FormatSpec,
    patterns: PatternSet,
    gap_tolerance: timedelta = GAP_TOLERANCE,
) -> Iterator[Range]:
    """Yield every range found in `lines`, in the order they close."""
    return RangeAggregator(date_format, patterns, gap_tolerance).run(lines)
