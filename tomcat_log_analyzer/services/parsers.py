import re
from datetime import datetime
from typing import Iterable, Iterator, Optional

from tomcat_log_analyzer.schemas.log_entry import LogEntry, LogLevel, MONTH_ABBREVIATIONS


# --- Tomcat / java.util.logging line pattern ---
# Examples:
# 10-Jan-2024 10:00:00.000 INFO [main] org.apache.catalina.startup.Catalina.start Server startup in [1234] milliseconds
# 10-Jan-2024 10:00:05.500 SEVERE [http-nio-8080-exec-3] com.app.Boot: crash
TOMCAT_LOG_REGEX = re.compile(
    r"(?P<ts>[0-9]{2}-[A-Za-z]{3}-[0-9]{4} [0-9]{2}:[0-9]{2}:[0-9]{2}\.[0-9]{3})[ \t]+"
    r"(?P<level>INFO|WARNING|SEVERE|ERROR|DEBUG|TRACE)[ \t]+"
    r"\[(?P<thread>[^\]]+)\][ \t]+"
    r"(?P<logger>[A-Za-z0-9_.]+)[ \t]*[:-]?[ \t]*"
    r"(?P<msg>.*)"
)

TIMESTAMP_REGEX = re.compile(
    r"(?P<day>\d{2})-(?P<mon>[A-Za-z]{3})-(?P<year>\d{4}) "
    r"(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})\.(?P<millis>\d{3})"
)

MONTHS = {abbr: number for number, abbr in enumerate(MONTH_ABBREVIATIONS, start=1)}


def parse_timestamp(ts: str) -> Optional[datetime]:
    """Parse ``DD-Mon-YYYY HH:MM:SS.mmm`` with English month names.

    Returns None for impossible dates such as 31-Feb-2024.
    """
    m = TIMESTAMP_REGEX.fullmatch(ts)
    if not m:
        return None
    month = MONTHS.get(m.group("mon"))
    if not month:
        return None
    try:
        return datetime(
            int(m.group("year")),
            month,
            int(m.group("day")),
            int(m.group("hour")),
            int(m.group("minute")),
            int(m.group("second")),
            int(m.group("millis")) * 1000,
        )
    except ValueError:
        return None


def parse_line(raw_line: Optional[str]) -> Optional[LogEntry]:
    """
    Returns a LogEntry for a line matching the Tomcat grammar, None otherwise.
    Never raises.
    """
    if raw_line is None:
        return None
    line = raw_line.rstrip("\r\n")
    if not line.strip():
        return None

    m = TOMCAT_LOG_REGEX.fullmatch(line)
    if not m:
        return None

    dt = parse_timestamp(m.group("ts"))
    if dt is None:
        return None

    return LogEntry(
        timestamp=dt,
        level=LogLevel(m.group("level")),
        thread=m.group("thread"),
        logger=m.group("logger"),
        message=m.group("msg"),
    )


def iter_entries(lines: Iterable[str]) -> Iterator[LogEntry]:
    """Yield parsed entries, dropping blank lines, stack traces and other noise."""
    for raw_line in lines:
        entry = parse_line(raw_line)
        if entry is not None:
            yield entry
