import io
import pytest
from datetime import datetime, timezone

from rich.console import Console

from logranges.config.schema import PatternConfig
from logranges.reporter import Reporter, format_range
from logranges.scanner.models import Range
from logranges.scanner.patterns import PatternSet


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def patterns():
    return PatternSet.from_config([
        PatternConfig(pattern=r"\[ERROR\]"),
        PatternConfig(pattern="Connection reset", name="resets"),
    ])


@pytest.fixture
def buffer():
    return io.StringIO()


@pytest.fixture
def console(buffer):
    return Console(file=buffer, soft_wrap=True, highlight=False)


def test_format_range_uses_pattern_text(patterns):
    found = Range(utc(2020, 4, 23, 0, 0, 0, 1000), utc(2020, 4, 23, 0, 4, 59), 0, 12)
    assert format_range(found, patterns) == (
        r"2020-04-23 00:00:00 -> 2020-04-23 00:04:59: [\[ERROR\]] 12 matches"
    )


def test_format_range_prefers_the_pattern_name(patterns):
    found = Range(utc(2020, 1, 1, 10), utc(2020, 1, 1, 11), 1, 3)
    assert format_range(found, patterns) == (
        "2020-01-01 10:00:00 -> 2020-01-01 11:00:00: [resets] 3 matches"
    )


def test_emit_prints_one_plain_line_per_range(patterns, console, buffer):
    with Reporter(patterns, console=console) as reporter:
        reporter.emit(Range(utc(2020, 1, 1, 10), utc(2020, 1, 1, 10, 3), 0, 2))
        reporter.emit(Range(utc(2020, 1, 1, 11), utc(2020, 1, 1, 11), 1, 1))

    assert buffer.getvalue().splitlines() == [
        r"2020-01-01 10:00:00 -> 2020-01-01 10:03:00: [\[ERROR\]] 2 matches",
        "2020-01-01 11:00:00 -> 2020-01-01 11:00:00: [resets] 1 matches",
    ]


def test_preview_is_a_no_op_without_live(patterns, console, buffer):
    reporter = Reporter(patterns, console=console)
    reporter.preview(Range(utc(2020, 1, 1, 10), utc(2020, 1, 1, 10), 0, 1))
    reporter.close()
    assert buffer.getvalue() == ""


def test_live_preview_leaves_only_closed_ranges(patterns, console, buffer):
    open_range = Range(utc(2020, 1, 1, 10), utc(2020, 1, 1, 10), 1, 1)
    with Reporter(patterns, console=console, live=True) as reporter:
        reporter.preview(open_range)
        reporter.emit(open_range)
        reporter.preview(None)

    assert "2020-01-01 10:00:00 -> 2020-01-01 10:00:00: [resets] 1 matches" in buffer.getvalue()
    assert "..." not in buffer.getvalue()


def test_emit_keeps_emoji_codes_verbatim(console, buffer):
    patterns = PatternSet.from_strings(["status:100:"])
    Reporter(patterns, console=console).emit(Range(utc(2020, 1, 1, 10), utc(2020, 1, 1, 10), 0, 1))
    assert "[status:100:] 1 matches" in buffer.getvalue()


def test_preview_redraws_only_when_the_open_range_changes(patterns, console, monkeypatch):
    open_range = Range(utc(2020, 1, 1, 10), utc(2020, 1, 1, 10), 0, 1)
    with Reporter(patterns, console=console, live=True) as reporter:
        updates = []
        monkeypatch.setattr(
            reporter._live, "update",
            lambda renderable, refresh=False: updates.append(renderable.plain),
        )

        reporter.preview(open_range)
        reporter.preview(open_range)
        open_range.match_count += 1
        open_range.end = utc(2020, 1, 1, 10, 1)
        reporter.preview(open_range)
        reporter.preview(open_range)
        reporter.preview(None)
        reporter.preview(None)

    assert updates == [
        r"2020-01-01 10:00:00 -> 2020-01-01 10:00:00: [\[ERROR\]] 1 matches ...",
        r"2020-01-01 10:00:00 -> 2020-01-01 10:01:00: [\[ERROR\]] 2 matches ...",
        "",
    ]
