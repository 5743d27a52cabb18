"""Error taxonomy for conversion failures.

Per-icon errors are caught by the orchestrator and recorded; only a failure
to resolve the batch's own input is raised to the caller.
"""

from __future__ import annotations


class Svg2CodeError(Exception):
    """Base class for every conversion error."""


class InputFormatError(Svg2CodeError):
    """The file extension is not a supported vector format."""


class MalformedVectorError(Svg2CodeError):
    """The document is not a well-formed vector drawable."""


class UnresolvedReferenceError(Svg2CodeError):
    """A color or gradient reference points at nothing."""


class FilesystemError(Svg2CodeError):
    """Reading, copying or writing a file failed."""
