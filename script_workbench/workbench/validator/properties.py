"""PropertySource output parser: ``name=value`` per line."""

from __future__ import annotations

from workbench.validator.models import PropertyEntry, PropertyParseResult, UnparsedLine
from workbench.validator.rules import PROPERTY_NAME_RE, error, find_duplicates, is_comment, warning
from workbench.validator.summary import summarize


def parse_property_output(output: str) -> PropertyParseResult:
    """Parse ``key=value`` property lines, flagging bad names and duplicates."""
    pairs: list[tuple[int, str, str, str]] = []
    unparsed: list[UnparsedLine] = []

    for index, line in enumerate(output.split("\n")):
        line_number = index + 1
        trimmed = line.strip()
        if not trimmed:
            continue

        if is_comment(trimmed):
            unparsed.append(
                UnparsedLine(line_number=line_number, content=line, reason="Comment line")
            )
            continue

        eq_index = trimmed.find("=")
        if eq_index <= 0:
            unparsed.append(
                UnparsedLine(
                    line_number=line_number,
                    content=line,
                    reason="Does not match property format (missing = delimiter)",
                )
            )
            continue

        pairs.append((line_number, line, trimmed[:eq_index], trimmed[eq_index + 1 :]))

    duplicates = find_duplicates(name for _, _, name, _ in pairs)

    properties: list[PropertyEntry] = []
    for position, (line_number, line, name, value) in enumerate(pairs):
        issues = []
        if not name:
            issues.append(error("Property name cannot be empty", line_number, "name"))
        elif not PROPERTY_NAME_RE.fullmatch(name):
            issues.append(
                warning(
                    f'Property name "{name}" contains non-standard characters',
                    line_number,
                    "name",
                )
            )
        if position in duplicates:
            issues.append(warning(f'Duplicate property name "{name}"', line_number, "name"))

        properties.append(
            PropertyEntry(
                name=name,
                value=value,
                issues=issues,
                line_number=line_number,
                raw_line=line,
            )
        )

    return PropertyParseResult(
        properties=properties,
        unparsed_lines=unparsed,
        summary=summarize(properties),
    )
