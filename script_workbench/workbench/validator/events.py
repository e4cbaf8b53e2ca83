"""EventSource output parser."""

from __future__ import annotations

import logging
from typing import Any

from workbench.validator.models import EventEntry, EventParseResult, UnparsedLine, ValidationIssue
from workbench.validator.rules import (
    JSON_ERRORS,
    as_text,
    is_missing,
    load_json,
    to_compact_json,
    truncate,
    warning,
)
from workbench.validator.summary import summarize

logger = logging.getLogger(__name__)

VALID_EVENT_SEVERITIES = ("critical", "error", "warn", "info", "debug")


def _parse_event(raw: Any, line_number: int) -> EventEntry:
    e = raw if isinstance(raw, dict) else {}
    happened_on = as_text(e.get("happenedOn") or e.get("timestamp"))
    severity = as_text(e.get("severity"))
    message = as_text(e.get("message"))

    issues: list[ValidationIssue] = []
    if not message and not happened_on:
        issues.append(warning("Event should have a message or timestamp", line_number))
    if severity and severity.lower() not in VALID_EVENT_SEVERITIES:
        issues.append(
            warning(
                f'Unknown severity "{severity}". Expected: {", ".join(VALID_EVENT_SEVERITIES)}',
                line_number,
            )
        )

    return EventEntry(
        happened_on=happened_on,
        severity=severity,
        message=message,
        source=as_text(e.get("source")),
        properties=e.get("properties") if isinstance(e.get("properties"), dict) else None,
        issues=issues,
        line_number=line_number,
        raw_line=to_compact_json(raw),
    )


def parse_event_output(output: str) -> EventParseResult:
    """Parse a JSON array of events, or an object with an ``events`` array."""
    events: list[EventEntry] = []
    unparsed: list[UnparsedLine] = []

    try:
        parsed = load_json(output)
    except JSON_ERRORS as e:
        logger.debug("Event output is not valid JSON: %s", e)
        unparsed.append(
            UnparsedLine(
                line_number=1,
                content=truncate(output, ellipsis=True),
                reason=f"Invalid JSON: {e}",
            )
        )
        return EventParseResult(unparsed_lines=unparsed)

    if isinstance(parsed, list):
        event_array: Any = parsed
    elif isinstance(parsed, dict):
        event_array = parsed.get("events")
        if is_missing(event_array):
            event_array = []
    else:
        event_array = None

    if not isinstance(event_array, list):
        unparsed.append(
            UnparsedLine(
                line_number=1,
                content=truncate(output),
                reason="Expected an array of events",
            )
        )
    else:
        events = [_parse_event(e, index + 1) for index, e in enumerate(event_array)]

    return EventParseResult(
        events=events,
        unparsed_lines=unparsed,
        summary=summarize(events),
    )
