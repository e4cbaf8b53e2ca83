"""Non-batch ConfigSource output: raw configuration text, passed through."""

from __future__ import annotations

from workbench.validator.models import ConfigParseResult, ValidationIssue
from workbench.validator.rules import warning
from workbench.validator.summary import summarize_document


def parse_config_output(output: str) -> ConfigParseResult:
    """Pass configuration text through untouched, warning when it is empty."""
    issues: list[ValidationIssue] = []
    if not output.strip():
        issues.append(warning("Configuration output is empty", 1))

    return ConfigParseResult(
        content=output,
        issues=issues,
        summary=summarize_document(issues),
    )
