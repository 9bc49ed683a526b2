import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple

from ..errors import InternalParseInconsistency, InvalidFormat


class ParseStrategy(Enum):
    WITH_OFFSET = "with_offset"
    NO_OFFSET = "no_offset"
    NO_OFFSET_NO_YEAR = "no_offset_no_year"


# Directive kinds that influence the parse strategy or need rewriting before strptime
YEAR = "year"
OFFSET = "offset"
COMPACT_OFFSET = "compact_offset"
ZONE_NAME = "zone_name"

# Named groups are only emitted for directives whose text is rewritten before parsing
ZONE_GROUP = "zone"
COMPACT_OFFSET_GROUP = "offset"


def _alternation(*words: str) -> str:
    return "(?i:" + "|".join(words) + ")"


MONTH_ABBREVIATIONS = _alternation(
    "Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"
)
MONTH_NAMES = _alternation(
    "January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December",
)
WEEKDAY_ABBREVIATIONS = _alternation("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
WEEKDAY_NAMES = _alternation(
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"
)

HOUR = r"(?:[01]\d|2[0-3])"
MINUTE = r"[0-5]\d"
SECOND = r"[0-5]\d"
MONTH = r"(?:0[1-9]|1[0-2])"
DAY = r"(?:0[1-9]|[12]\d|3[01])"


@dataclass(frozen=True)
class Directive:
    regex: str
    strptime: str
    kind: Optional[str] = None


# One regex fragment per directive; the strptime column is what the parser receives
DIRECTIVES: Dict[str, Directive] = {
    "Y": Directive(r"\d{4}", "%Y", YEAR),
    "y": Directive(r"\d{2}", "%y", YEAR),
    "F": Directive(rf"\d{{4}}-{MONTH}-{DAY}", "%Y-%m-%d", YEAR),
    "m": Directive(MONTH, "%m"),
    "b": Directive(MONTH_ABBREVIATIONS, "%b"),
    "h": Directive(MONTH_ABBREVIATIONS, "%b"),
    "B": Directive(MONTH_NAMES, "%B"),
    "d": Directive(DAY, "%d"),
    "e": Directive(r"(?: [1-9]|0[1-9]|[12]\d|3[01])", "%d"),
    "a": Directive(WEEKDAY_ABBREVIATIONS, "%a"),
    "A": Directive(WEEKDAY_NAMES, "%A"),
    "H": Directive(HOUR, "%H"),
    "I": Directive(r"(?:0[1-9]|1[0-2])", "%I"),
    "p": Directive(_alternation("AM", "PM"), "%p"),
    "M": Directive(MINUTE, "%M"),
    "S": Directive(SECOND, "%S"),
    "T": Directive(rf"{HOUR}:{MINUTE}:{SECOND}", "%H:%M:%S"),
    "f": Directive(r"\d{1,6}", "%f"),
    ".f": Directive(r"\.\d{1,6}", ".%f"),
    ".3f": Directive(r"\.\d{3}", ".%f"),
    ".6f": Directive(r"\.\d{6}", ".%f"),
    "z": Directive(rf"[+-]{HOUR}{MINUTE}", "%z", OFFSET),
    ":z": Directive(rf"[+-]{HOUR}:{MINUTE}", "%z", OFFSET),
    "#z": Directive(rf"[+-]{HOUR}(?::?{MINUTE})?", "%z", COMPACT_OFFSET),
    "Z": Directive(r"[A-Z]{2,5}", "", ZONE_NAME),
    "%": Directive("%", "%%"),
}

# Longest codes first so "%.3f" is not read as "%." followed by "3f"
_CODES = sorted(DIRECTIVES, key=len, reverse=True)


def _tokenize(fmt: str) -> Iterator[Tuple[str, str]]:
    """Split a format string into ("directive", code) and ("literal", char) tokens."""
    i = 0
    while i < len(fmt):
        char = fmt[i]
        if char != "%":
            yield "literal", char
            i += 1
            continue

        if i + 1 == len(fmt):
            raise InvalidFormat(fmt, "ends with a lone '%'")

        for code in _CODES:
            if fmt.startswith(code, i + 1):
                yield "directive", code
                i += 1 + len(code)
                break
        else:
            raise InvalidFormat(fmt, f"unrecognized directive '%{fmt[i + 1]}' at position {i}")


@dataclass(frozen=True)
class FormatSpec:
    """
    A compiled timestamp format.

    `regex` finds timestamps inside a line; `parse` turns the matched text into
    an aware UTC datetime according to `strategy`.
    """

    pattern: str
    regex: "re.Pattern"
    strategy: ParseStrategy
    strptime_format: str

    def find(self, line: str) -> Optional["re.Match"]:
        return self.regex.search(line)

    def extract(self, line: str) -> Optional[datetime]:
        """Return the first timestamp in the line, or None when it carries none."""
        match = self.regex.search(line)
        if match is None:
            return None
        return self._parse_match(match)

    def parse(self, text: str) -> datetime:
        match = self.regex.fullmatch(text)
        if match is None:
            raise InternalParseInconsistency(self.pattern, text, "text does not match the format")
        return self._parse_match(match)

    def _parse_match(self, match: "re.Match") -> datetime:
        text = self._normalize(match)
        fmt = self.strptime_format

        if self.strategy is ParseStrategy.NO_OFFSET_NO_YEAR:
            # Known limitation: a log crossing New Year is dated in the current year
            text = f"{datetime.now().year}-{text}"
            fmt = f"%Y-{fmt}"

        try:
            parsed = datetime.strptime(text, fmt)
        except ValueError as e:
            raise InternalParseInconsistency(self.pattern, match.group(0), str(e))

        if self.strategy is ParseStrategy.WITH_OFFSET:
            return parsed.astimezone(timezone.utc)
        return parsed.replace(tzinfo=timezone.utc)

    def _normalize(self, match: "re.Match") -> str:
        """Drop zone names and pad compact offsets so strptime accepts the text."""
        text = match.group(0)
        base = match.start()
        # Rightmost group first so earlier spans stay valid
        for name, index in sorted(self.regex.groupindex.items(), key=lambda item: -item[1]):
            start, end = match.span(index)
            value = match.group(index)
            if name.startswith(ZONE_GROUP):
                replacement = ""
            elif len(value) == 3:
                replacement = value + "00"
            else:
                replacement = value
            text = text[: start - base] + replacement + text[end - base:]
        return text


def compile_format(fmt: str) -> FormatSpec:
    """
    Compile a strftime-like format string into a FormatSpec.

    Raises InvalidFormat for unknown directives, a dangling '%', a format
    without any directive, or an offset directive without a year.
    """
    regex_parts = []
    strptime_parts = []
    kinds = set()
    group_count = 0

    for token_type, value in _tokenize(fmt):
        if token_type == "literal":
            regex_parts.append(re.escape(value))
            strptime_parts.append(value)
            continue

        directive = DIRECTIVES[value]
        if value != "%":
            kinds.add(directive.kind or value)
        fragment = directive.regex
        if directive.kind == ZONE_NAME:
            fragment = f"(?P<{ZONE_GROUP}{group_count}>{fragment})"
            group_count += 1
        elif directive.kind == COMPACT_OFFSET:
            fragment = f"(?P<{COMPACT_OFFSET_GROUP}{group_count}>{fragment})"
            group_count += 1
        regex_parts.append(fragment)
        strptime_parts.append(directive.strptime)

    if not kinds:
        raise InvalidFormat(fmt, "contains no date directive")

    has_offset = OFFSET in kinds or COMPACT_OFFSET in kinds
    has_year = YEAR in kinds
    if has_offset and not has_year:
        raise InvalidFormat(fmt, "an offset directive needs a year directive")

    if has_offset:
        strategy = ParseStrategy.WITH_OFFSET
    elif has_year:
        strategy = ParseStrategy.NO_OFFSET
    else:
        strategy = ParseStrategy.NO_OFFSET_NO_YEAR

    return FormatSpec(
        pattern=fmt,
        regex=re.compile("".join(regex_parts)),
        strategy=strategy,
        strptime_format="".join(strptime_parts),
    )
