"""Workbench options, loaded from the options file or the environment."""

from __future__ import annotations

import json
import os
from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_OPTIONS_PATH = "/data/options.json"


class WorkbenchOptions(BaseModel):
    max_output_chars: int = Field(5_000_000, gt=0)
    log_level: str = "INFO"


def load_options() -> WorkbenchOptions:
    """Load options from WORKBENCH_OPTIONS_PATH or env fallback."""
    opts_path = os.environ.get("WORKBENCH_OPTIONS_PATH", DEFAULT_OPTIONS_PATH)
    if Path(opts_path).exists():
        return WorkbenchOptions.model_validate(json.loads(Path(opts_path).read_text()))
    return WorkbenchOptions(
        max_output_chars=int(os.environ.get("MAX_OUTPUT_CHARS", "5000000")),
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
    )
