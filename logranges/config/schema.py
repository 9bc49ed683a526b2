from typing import List, Optional
from pydantic import BaseModel, Field

from .defaults import DEFAULT_GUESS_ATTEMPTS


class LoggingConfig(BaseModel):
    level: str = "WARNING"
    file: Optional[str] = None


class ScanConfig(BaseModel):
    format: Optional[str] = None
    guess_attempts: int = Field(default=DEFAULT_GUESS_ATTEMPTS, ge=1)
    live: Optional[bool] = None


class PatternConfig(BaseModel):
    pattern: str
    name: Optional[str] = None


class LogRangesConfig(BaseModel):
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    scan: ScanConfig = Field(default_factory=ScanConfig)
    patterns: List[PatternConfig] = Field(default_factory=list)
