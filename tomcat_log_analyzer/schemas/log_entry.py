from datetime import datetime
from enum import Enum
from typing import Dict
from pydantic import BaseModel


MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def format_timestamp(dt: datetime) -> str:
    """Render a timestamp the way Tomcat writes it: 10-Jan-2024 10:00:05.500"""
    return (
        f"{dt.day:02d}-{MONTH_ABBREVIATIONS[dt.month - 1]}-{dt.year:04d} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}.{dt.microsecond // 1000:03d}"
    )


class LogLevel(str, Enum):
    INFO = "INFO"
    WARNING = "WARNING"
    SEVERE = "SEVERE"
    ERROR = "ERROR"
    DEBUG = "DEBUG"
    TRACE = "TRACE"


class LogEntry(BaseModel):
    timestamp: datetime
    level: LogLevel
    thread: str
    logger: str
    message: str

    model_config = {"frozen": True}

    def as_match(self) -> Dict[str, str]:
        return {
            "timestamp": format_timestamp(self.timestamp),
            "level": self.level.value,
            "thread": self.thread,
            "logger": self.logger,
            "message": self.message,
        }


class SearchMatch(BaseModel):
    timestamp: str
    level: str
    thread: str
    logger: str
    message: str
