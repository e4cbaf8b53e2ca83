"""Recognise "the script failed to run" responses from the collector."""

from __future__ import annotations

import re

from workbench.validator.models import ScriptErrorParseResult
from workbench.validator.rules import error, strip_text
from workbench.validator.summary import summarize_document

EXECUTION_ERROR_RE = re.compile(
    r"Error when executing the script\s*[-–—]\s*(.*?)(?:\noutput:\n(.*))?",
    re.IGNORECASE | re.DOTALL,
)
ERROR_PREFIXES = ("Error:", "ERROR:")


def detect_script_error(output: str) -> ScriptErrorParseResult | None:
    """Return a script_error result if the raw output reports a failed run.

    Must see the output before header normalization: the error text itself may
    contain lines that look like harness headers.
    """
    trimmed = strip_text(output)

    match = EXECUTION_ERROR_RE.fullmatch(trimmed)
    if match:
        error_message = (match.group(1) or "").strip() or "Unknown error"
        issues = [error(f"Script execution failed: {error_message}", 1)]
        return ScriptErrorParseResult(
            error_message=error_message,
            output=(match.group(2) or "").strip(),
            issues=issues,
            summary=summarize_document(issues),
        )

    if trimmed.startswith(ERROR_PREFIXES):
        error_message = trimmed[trimmed.index(":") + 1 :].strip().split("\n")[0]
        issues = [error(f"Script error: {error_message}", 1)]
        return ScriptErrorParseResult(
            error_message=error_message,
            output=trimmed,
            issues=issues,
            summary=summarize_document(issues),
        )

    return None
