"""Active Discovery output parser.

Each instance line looks like::

    id##name##description####auto.prop=value&other.prop=value

Only ``id`` is mandatory. The ``####`` properties section is optional.
"""

from __future__ import annotations

import re

from workbench.validator.models import ADInstance, ADParseResult, UnparsedLine, ValidationIssue
from workbench.validator.rules import (
    check_instance_id,
    check_instance_name,
    error,
    is_comment,
)
from workbench.validator.summary import summarize

FIELD_DELIMITER = "##"
PROPERTIES_DELIMITER = "####"
_HASHES_ONLY_RE = re.compile(r"#+")


def _parse_properties(
    props_part: str, line_number: int
) -> tuple[dict[str, str | None], list[ValidationIssue]]:
    properties: dict[str, str | None] = {}
    issues: list[ValidationIssue] = []

    for pair in props_part.split("&"):
        # Trailing "######" padding leaves fragments of bare hashes
        trimmed_pair = pair.strip()
        if not trimmed_pair or _HASHES_ONLY_RE.fullmatch(trimmed_pair):
            continue

        eq_index = pair.find("=")
        if eq_index > 0:
            properties[pair[:eq_index]] = pair[eq_index + 1 :]
        else:
            issues.append(
                error(
                    f'Invalid property format: "{pair}" (expected key=value)',
                    line_number,
                    "properties",
                )
            )

    return properties, issues


def _check_properties(properties: dict[str, str | None], line_number: int) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for key, value in properties.items():
        if not key.strip():
            issues.append(error("Property key cannot be empty", line_number, "properties"))
        if value is None:
            issues.append(
                error(f'Property "{key}" is missing a value', line_number, "properties")
            )
    return issues


def parse_ad_line(line: str, line_number: int) -> ADInstance:
    """Parse one instance line. The caller filters blanks and comments."""
    trimmed = line.strip()

    props_split = trimmed.split(PROPERTIES_DELIMITER)
    main_part = props_split[0]
    props_part = props_split[1] if len(props_split) > 1 else ""

    parts = main_part.split(FIELD_DELIMITER)
    instance_id = parts[0]
    name = parts[1] if len(parts) > 1 else ""
    description = parts[2] if len(parts) > 2 else None

    issues: list[ValidationIssue] = []
    properties: dict[str, str | None] | None = None
    if props_part:
        properties, issues = _parse_properties(props_part, line_number)

    issues.extend(check_instance_id(instance_id, line_number))
    issues.extend(check_instance_name(name, line_number))
    if properties:
        issues.extend(_check_properties(properties, line_number))

    return ADInstance(
        id=instance_id,
        name=name,
        description=description,
        properties=properties,
        issues=issues,
        line_number=line_number,
        raw_line=line,
    )


def parse_ad_output(output: str) -> ADParseResult:
    """Parse Active Discovery output, one ``id##name[##description][####properties]`` per line."""
    instances: list[ADInstance] = []
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

        if FIELD_DELIMITER not in trimmed:
            unparsed.append(
                UnparsedLine(
                    line_number=line_number,
                    content=line,
                    reason="Does not match AD format (missing ## delimiter)",
                )
            )
            continue

        instances.append(parse_ad_line(line, line_number))

    return ADParseResult(
        instances=instances,
        unparsed_lines=unparsed,
        summary=summarize(instances),
    )
