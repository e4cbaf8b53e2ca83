"""Strip the execution-harness header from raw script output."""

from __future__ import annotations

import re

from workbench.validator.rules import strip_text

RETURNS_LINE_RE = re.compile(r"returns\s+\d+", re.IGNORECASE | re.ASCII)
OUTPUT_LABEL_RE = re.compile(r"output:", re.IGNORECASE)
WARNING_PREFIX = "[Warning:"


def _is_header_line(trimmed: str) -> bool:
    return (
        trimmed == ""
        or trimmed.startswith(WARNING_PREFIX)
        or RETURNS_LINE_RE.fullmatch(trimmed) is not None
        or OUTPUT_LABEL_RE.fullmatch(trimmed) is not None
    )


def normalize_script_output(output: str) -> str:
    """Drop leading header lines: exit code, ``output:`` label, warnings, blanks.

    Only the leading run is stripped. Once a content line is seen every later
    line is kept verbatim, even one that looks like a header.
    """
    lines = output.split("\n")
    kept: list[str] = []
    in_header = True

    for line in lines:
        if in_header:
            if _is_header_line(strip_text(line)):
                continue
            in_header = False
        kept.append(line)

    return "\n".join(kept)
