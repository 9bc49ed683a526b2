import sys
from typing import Optional, Tuple

from rich.console import Console
from rich.live import Live
from rich.text import Text

from .scanner.models import Range
from .scanner.patterns import PatternSet

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_range(found: Range, patterns: PatternSet) -> str:
    """Render a range as '<start> -> <end>: [<pattern>] <count> matches'."""
    label = patterns[found.pattern_index].label
    return (
        f"{found.start.strftime(TIMESTAMP_FORMAT)} -> {found.end.strftime(TIMESTAMP_FORMAT)}: "
        f"[{label}] {found.match_count} matches"
    )


def should_preview(reading_stdin: bool) -> bool:
    """Live preview makes sense when a pipe feeds us and a person watches the output."""
    return reading_stdin and not sys.stdin.isatty() and sys.stdout.isatty()


class Reporter:
    """
    Writes closed ranges to the console, one line each.

    With `live` set, the currently open range is also shown as a provisional
    line that is redrawn in place and disappears once the range closes.
    """

    def __init__(self, patterns: PatternSet, console: Console = None, live: bool = False):
        self.patterns = patterns
        self.console = console or Console(highlight=False, emoji=False, soft_wrap=True)
        self.live = live
        self._live: Optional[Live] = None
        self._shown: Optional[Tuple] = None

    def start(self):
        if self.live and self._live is None:
            self._live = Live(
                Text(""), console=self.console, transient=True, auto_refresh=False
            )
            self._live.start()

    def emit(self, found: Range):
        self.console.print(
            format_range(found, self.patterns), markup=False, highlight=False, emoji=False
        )

    def preview(self, current: Optional[Range]):
        if self._live is None:
            return
        # The open range is mutated in place, so compare a snapshot of it
        shown = None
        if current is not None:
            shown = (current.pattern_index, current.start, current.end, current.match_count)
        if shown == self._shown:
            return
        self._shown = shown

        if current is None:
            self._live.update(Text(""), refresh=True)
            return
        self._live.update(
            Text(format_range(current, self.patterns) + " ...", style="dim"), refresh=True
        )

    def close(self):
        if self._live is not None:
            self._live.stop()
            self._live = None

    def __enter__(self) -> "Reporter":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
