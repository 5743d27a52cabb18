"""svg2code — SVG and Android vector drawables → Compose / SwiftUI source."""

from svg2code.engine.context import GeneratedGroup, Icon, ParsingResult, RunResult
from svg2code.engine.orchestrator import parse_directory, parse_files, parse_icon
from svg2code.errors import (
    FilesystemError,
    InputFormatError,
    MalformedVectorError,
    Svg2CodeError,
    UnresolvedReferenceError,
)
from svg2code.models.artifact import GeneratedArtifact
from svg2code.models.options import ConvertOptions, OutputBackend, VectorType

__version__ = "0.1.0"

__all__ = [
    "ConvertOptions",
    "FilesystemError",
    "GeneratedArtifact",
    "GeneratedGroup",
    "Icon",
    "InputFormatError",
    "MalformedVectorError",
    "OutputBackend",
    "ParsingResult",
    "RunResult",
    "Svg2CodeError",
    "UnresolvedReferenceError",
    "VectorType",
    "parse_directory",
    "parse_files",
    "parse_icon",
]
