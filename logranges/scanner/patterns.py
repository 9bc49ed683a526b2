import re
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence

from ..config.schema import PatternConfig
from ..errors import ConfigurationError, InvalidPattern


@dataclass(frozen=True)
class Pattern:
    index: int
    text: str
    regex: "re.Pattern"
    name: Optional[str] = None

    @property
    def label(self) -> str:
        return self.name or self.text

    @classmethod
    def compile(cls, index: int, text: str, name: Optional[str] = None) -> "Pattern":
        try:
            regex = re.compile(text)
        except re.error as e:
            raise InvalidPattern(index, text, str(e))
        return cls(index=index, text=text, regex=regex, name=name)


class PatternSet:
    """User patterns in priority order; a line belongs to the first one it matches."""

    def __init__(self, patterns: Sequence[Pattern]):
        if not patterns:
            raise ConfigurationError("At least one pattern is required")
        self.patterns: List[Pattern] = list(patterns)

    @classmethod
    def from_strings(cls, texts: Iterable[str]) -> "PatternSet":
        return cls([Pattern.compile(i, text) for i, text in enumerate(texts)])

    @classmethod
    def from_config(cls, entries: Iterable[PatternConfig]) -> "PatternSet":
        return cls([
            Pattern.compile(i, entry.pattern, entry.name)
            for i, entry in enumerate(entries)
        ])

    def match(self, line: str) -> Optional[int]:
        for pattern in self.patterns:
            if pattern.regex.search(line):
                return pattern.index
        return None

    def __getitem__(self, index: int) -> Pattern:
        return self.patterns[index]

    def __iter__(self) -> Iterator[Pattern]:
        return iter(self.patterns)

    def __len__(self) -> int:
        return len(self.patterns)
