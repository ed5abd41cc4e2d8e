import logging
import re
from collections import Counter
from datetime import datetime, timedelta
from typing import Optional

from tomcat_log_analyzer.core.config import settings
from tomcat_log_analyzer.core.exceptions import InvalidQueryError, LogReadError, NoActiveFileError
from tomcat_log_analyzer.schemas.log_entry import SearchMatch, format_timestamp
from tomcat_log_analyzer.schemas.pagination import Page
from tomcat_log_analyzer.schemas.stats import RankedMessage, SummaryResult, TimeRange
from tomcat_log_analyzer.services.file_state import FileState
from tomcat_log_analyzer.services.parsers import iter_entries

logger = logging.getLogger(__name__)

ONE_MILLISECOND = timedelta(milliseconds=1)


def summarize(state: FileState) -> Optional[SummaryResult]:
    """Level histogram and time range of the active file.

    Best effort: returns None when there is no active file or it cannot be read.
    """
    level_counts: Counter[str] = Counter()
    first: Optional[datetime] = None
    last: Optional[datetime] = None

    try:
        with state.open_current() as current:
            if current is None:
                return None
            path, f = current
            for entry in iter_entries(f):
                level_counts[entry.level.value] += 1
                if first is None or entry.timestamp < first:
                    first = entry.timestamp
                if last is None or entry.timestamp > last:
                    last = entry.timestamp
    except OSError as e:
        logger.warning("Summary skipped, log file unreadable: %s", e)
        return None

    time_range = None
    if first is not None and last is not None:
        time_range = TimeRange(
            start=format_timestamp(first),
            end=format_timestamp(last),
            duration_millis=(last - first) // ONE_MILLISECOND,
        )

    return SummaryResult(
        file_name=path.name,
        level_counts=dict(level_counts),
        time_range=time_range,
    )


def top_messages(state: FileState, limit: int = settings.TOP_MESSAGES_DEFAULT_LIMIT) -> list[RankedMessage]:
    """Most frequent non-blank messages, highest count first.

    Equal counts keep the order in which the messages first appear in the file.
    The caller is responsible for rejecting ``limit <= 0``.
    """
    counts: Counter[str] = Counter()

    try:
        with state.open_current() as current:
            if current is None:
                return []
            _, f = current
            for entry in iter_entries(f):
                if entry.message.strip():
                    counts[entry.message] += 1
    except OSError as e:
        logger.warning("Top messages skipped, log file unreadable: %s", e)
        return []

    return [RankedMessage(message=msg, count=n) for msg, n in counts.most_common(limit)]


def compile_query(query: str, case_sensitive: bool = False, use_regex: bool = False) -> re.Pattern:
    flags = 0 if case_sensitive else re.IGNORECASE
    pattern = query if use_regex else re.escape(query)
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise InvalidQueryError(f"Invalid regular expression: {e}") from e


def search_logs(
    state: FileState,
    query: Optional[str],
    case_sensitive: bool = False,
    use_regex: bool = False,
    page: int = 1,
    size: int = settings.SEARCH_DEFAULT_PAGE_SIZE,
) -> Page[SearchMatch]:
    """Entries whose message contains ``query``, one page at a time.

    Blank queries and bad paging fail before the file is touched; a missing
    active file is reported before the pattern is compiled. The whole file is
    scanned before slicing, so ``total`` is exact.
    """
    if query is None or not query.strip():
        raise InvalidQueryError("Query parameter is required.")
    if page <= 0 or size <= 0:
        raise InvalidQueryError("Page and size must be greater than 0.")

    matches: list[SearchMatch] = []
    try:
        with state.open_current() as current:
            if current is None:
                raise NoActiveFileError()
            pattern = compile_query(query, case_sensitive=case_sensitive, use_regex=use_regex)
            _, f = current
            for entry in iter_entries(f):
                if pattern.search(entry.message):
                    matches.append(SearchMatch(**entry.as_match()))
    except OSError as e:
        raise LogReadError() from e

    total = len(matches)
    start = (page - 1) * size
    end = min(start + size, total)
    items = matches[start:end] if start < total else []

    logger.debug("Search for %r matched %d entries", query, total, extra={"matches": total})
    return Page[SearchMatch](items=items, total=total, page=page, size=size)

