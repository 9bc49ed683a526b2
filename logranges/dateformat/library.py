from dataclasses import dataclass
from typing import Tuple

from .compiler import FormatSpec, compile_format


@dataclass(frozen=True)
class KnownFormat:
    name: str
    description: str
    example: str
    spec: FormatSpec


# Order matters: when several entries match a line, the first one wins
KNOWN_FORMATS: Tuple[KnownFormat, ...] = (
    # 23-Apr-2020 00:00:00.001 INFO [EjbTimerPool - 57924] ...
    KnownFormat(
        name="tomee",
        description="Tomcat/TomEE application log",
        example="23-Apr-2020 00:00:00.001",
        spec=compile_format("%d-%b-%Y %T%.3f"),
    ),
    # Apr 26 10:05:02 localhost.localdomain kernel: ...
    KnownFormat(
        name="syslog",
        description="syslog, journalctl and moreutils ts (no year)",
        example="Apr 26 10:05:02",
        spec=compile_format("%b %e %T"),
    ),
    # 127.0.0.1 - frank [10/Oct/2000:13:55:36 -0700] "GET /apache_pb.gif HTTP/1.0" 200 2326
    KnownFormat(
        name="apache",
        description="Apache/Nginx access log",
        example="10/Oct/2000:13:55:36 -0700",
        spec=compile_format("%d/%b/%Y:%T %z"),
    ),
    # 2014-11-12 16:28:21.700 MST,,,2993,,5463ed15.bb1,1,,...
    # The zone name is left unmatched, so the time is read as UTC.
    KnownFormat(
        name="postgres",
        description="PostgreSQL server log",
        example="2014-11-12 16:28:21.700",
        spec=compile_format("%Y-%m-%d %T%.3f"),
    ),
)
