"""LogSource output parser.

JSON output (an array, or an object with ``logs``/``entries``) is preferred.
Anything else is read as plain text, one entry per non-blank line.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Any

from workbench.validator.models import LogEntry, LogParseResult, ValidationIssue
from workbench.validator.rules import (
    JSON_ERRORS,
    as_text,
    is_missing,
    load_json,
    to_compact_json,
    warning,
)
from workbench.validator.summary import summarize

logger = logging.getLogger(__name__)

LEADING_TIMESTAMP_RE = re.compile(
    r"(\d{4}-\d{2}-\d{2}[T\s]\d{2}:\d{2}:\d{2}[.\d]*Z?)\s+(.*)", re.ASCII
)

_EXTRA_TIMESTAMP_FORMATS = (
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y",
    "%b %d %Y %H:%M:%S",
    "%b %d %Y",
)


def is_parseable_timestamp(value: str | int | float) -> bool:
    """True if the value looks like a date a log viewer could sort on."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # Epoch seconds or milliseconds
        return True

    text = str(value).strip()
    if not text:
        return False
    try:
        datetime.fromisoformat(text)
        return True
    except ValueError:
        pass
    try:
        parsedate_to_datetime(text)
        return True
    except (TypeError, ValueError, IndexError, OverflowError):
        pass
    for fmt in _EXTRA_TIMESTAMP_FORMATS:
        try:
            datetime.strptime(text, fmt)
            return True
        except (ValueError, OverflowError):
            continue
    return False


def _json_log_array(output: str) -> list[Any] | None:
    try:
        parsed = load_json(output)
    except JSON_ERRORS:
        return None

    if isinstance(parsed, list):
        return parsed
    if isinstance(parsed, dict):
        log_array = parsed.get("logs")
        if is_missing(log_array):
            log_array = parsed.get("entries")
        if is_missing(log_array):
            log_array = []
        if isinstance(log_array, list):
            return log_array
    return None


def _json_entry(raw: Any, line_number: int) -> LogEntry:
    if isinstance(raw, str):
        return LogEntry(message=raw, line_number=line_number, raw_line=raw)

    raw_line = to_compact_json(raw)
    if isinstance(raw, dict):
        raw_timestamp = raw.get("timestamp") or raw.get("time")
        message = as_text(raw.get("message") or raw.get("msg")) or raw_line
    else:
        raw_timestamp = None
        message = raw_line

    issues: list[ValidationIssue] = []
    if raw_timestamp and not is_parseable_timestamp(raw_timestamp):
        issues.append(
            warning(
                f'Timestamp "{as_text(raw_timestamp)}" may not be in a standard format',
                line_number,
            )
        )

    return LogEntry(
        timestamp=as_text(raw_timestamp) if raw_timestamp else None,
        message=message,
        issues=issues,
        line_number=line_number,
        raw_line=raw_line,
    )


def _text_entries(output: str) -> list[LogEntry]:
    entries: list[LogEntry] = []
    for index, line in enumerate(output.split("\n")):
        trimmed = line.strip()
        if not trimmed:
            continue

        timestamp = None
        message = trimmed
        match = LEADING_TIMESTAMP_RE.fullmatch(trimmed)
        if match:
            timestamp, message = match.group(1), match.group(2)

        entries.append(
            LogEntry(
                timestamp=timestamp,
                message=message,
                line_number=index + 1,
                raw_line=line,
            )
        )
    return entries


def parse_log_output(output: str) -> LogParseResult:
    """Parse LogSource output, JSON first and plain text otherwise."""
    log_array = _json_log_array(output)
    if log_array is not None:
        entries = [_json_entry(raw, index + 1) for index, raw in enumerate(log_array)]
    else:
        logger.debug("Log output is not a JSON log array, reading as plain text")
        entries = _text_entries(output)

    return LogParseResult(entries=entries, summary=summarize(entries))
