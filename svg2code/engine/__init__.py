"""svg2code batch engine — run context and orchestrator."""

from svg2code.engine.context import (
    ConversionFailure,
    GeneratedGroup,
    GroupContext,
    Icon,
    ParsingResult,
    RunContext,
    RunResult,
)

__all__ = [
    "ConversionFailure",
    "GeneratedGroup",
    "GroupContext",
    "Icon",
    "ParsingResult",
    "RunContext",
    "RunResult",
]
