from dataclasses import dataclass
from datetime import datetime


@dataclass
class Range:
    start: datetime
    end: datetime
    pattern_index: int
    match_count: int = 1


@dataclass(frozen=True)
class NotInRange:
    pass


@dataclass(frozen=True)
class InRange:
    open_range: Range
