"""Shared test fixtures and configuration."""

import os
import sys
from pathlib import Path

# Add script_workbench/ to Python path so `from workbench.xxx` imports work
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "script_workbench"))

import pytest

os.environ["WORKBENCH_DEV_MODE"] = "true"

from workbench.validator.models import ValidationSeverity


def _recount(records) -> tuple[int, int]:
    errors = warnings = 0
    for record in records:
        for issue in record.issues:
            if issue.severity == ValidationSeverity.error:
                errors += 1
            elif issue.severity == ValidationSeverity.warning:
                warnings += 1
    return errors, warnings


@pytest.fixture
def recount():
    """Count (errors, warnings) across records without trusting the summary."""
    return _recount


@pytest.fixture
def harness_header() -> str:
    return "returns 0\noutput:\n[Warning: Property fetch failed]\n\n"
