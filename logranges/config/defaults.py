from datetime import timedelta
from pathlib import Path

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "logranges" / "config.yml"
CONFIG_ENV_VAR = "LOGRANGES_CONFIG"

# Matches of one pattern further apart than this are split into two ranges.
GAP_TOLERANCE = timedelta(minutes=5)

DEFAULT_GUESS_ATTEMPTS = 5
