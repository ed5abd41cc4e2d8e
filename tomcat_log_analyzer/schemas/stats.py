from typing import Dict, Optional
from pydantic import BaseModel


class TimeRange(BaseModel):
    start: str
    end: str
    duration_millis: int


class SummaryResult(BaseModel):
    file_name: str
    level_counts: Dict[str, int]
    time_range: Optional[TimeRange] = None


class RankedMessage(BaseModel):
    message: str
    count: int
