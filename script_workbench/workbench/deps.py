"""Shared FastAPI dependencies."""

from __future__ import annotations

from workbench.settings import WorkbenchOptions

_options: WorkbenchOptions | None = None


def get_options() -> WorkbenchOptions:
    """FastAPI dependency: return the loaded WorkbenchOptions."""
    assert _options is not None, "WorkbenchOptions not initialised"
    return _options
