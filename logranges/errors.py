class LogRangesError(Exception):
    """Base class for every failure the scanner reports to the user."""


class ConfigurationError(LogRangesError):
    pass


class InvalidPattern(ConfigurationError):
    def __init__(self, index: int, pattern: str, reason: str):
        self.index = index
        self.pattern = pattern
        super().__init__(f"Invalid pattern #{index} '{pattern}': {reason}")


class InvalidFormat(ConfigurationError):
    def __init__(self, fmt: str, reason: str):
        self.format = fmt
        super().__init__(f"Invalid date format '{fmt}': {reason}")


class GuessExhausted(LogRangesError):
    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(
            f"Could not guess the date format from the first {attempts} lines; "
            "pass it explicitly with --format"
        )


class InternalParseInconsistency(LogRangesError):
    """A substring matched by a format's regex was rejected by its parser."""

    def __init__(self, fmt: str, text: str, reason: str = ""):
        self.format = fmt
        self.text = text
        detail = f": {reason}" if reason else ""
        super().__init__(f"Format '{fmt}' matched '{text}' but could not parse it{detail}")
