"""POST /api/parse endpoint and parse option listings."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from workbench.deps import get_options
from workbench.settings import WorkbenchOptions
from workbench.validator import (
    ModuleType,
    ParseOptions,
    ParseResult,
    ScriptMode,
    ScriptType,
    has_errors,
    has_warnings,
    parse_output,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["parse"])

# Same casing as the result models; snake_case input is still accepted
_CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ParseRequest(BaseModel):
    """Request body for POST /api/parse."""

    model_config = _CAMEL_CONFIG

    output: str = Field(..., description="Captured stdout of a script run")
    mode: ScriptMode = Field(..., description="Script mode selected in the editor")
    module_type: ModuleType | None = Field(
        None, description="Module type, used to pick a grammar in collection mode"
    )
    script_type: ScriptType | None = Field(
        None, description="Which of the module's scripts produced the output"
    )


class ParseResponse(BaseModel):
    """Response body for POST /api/parse."""

    model_config = _CAMEL_CONFIG

    result: ParseResult | None = Field(None, description="Null for freeform mode")
    has_errors: bool = False
    has_warnings: bool = False


class ParseModesResponse(BaseModel):
    model_config = _CAMEL_CONFIG

    modes: list[str] = Field(default_factory=list)
    module_types: list[str] = Field(default_factory=list)
    script_types: list[str] = Field(default_factory=list)


@router.post("/parse", response_model=ParseResponse)
def parse(
    body: ParseRequest,
    options: WorkbenchOptions = Depends(get_options),
) -> ParseResponse:
    """Parse and validate script output for the selected mode."""
    if len(body.output) > options.max_output_chars:
        raise HTTPException(
            status_code=413,
            detail=(
                f"Output is {len(body.output)} characters; "
                f"the limit is {options.max_output_chars}"
            ),
        )

    result = parse_output(
        body.output,
        ParseOptions(
            mode=body.mode,
            module_type=body.module_type,
            script_type=body.script_type,
        ),
    )
    if result is None:
        return ParseResponse()

    logger.info(
        "Parsed %s output: %d records, %d errors, %d warnings",
        result.type,
        result.summary.total,
        result.summary.errors,
        result.summary.warnings,
    )
    return ParseResponse(
        result=result,
        has_errors=has_errors(result),
        has_warnings=has_warnings(result),
    )


@router.get("/parse/modes", response_model=ParseModesResponse)
async def list_parse_modes() -> ParseModesResponse:
    """Return the accepted mode, module type and script type values."""
    return ParseModesResponse(
        modes=[m.value for m in ScriptMode],
        module_types=[m.value for m in ModuleType],
        script_types=[s.value for s in ScriptType],
    )
