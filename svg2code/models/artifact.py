"""Generated artifact — the unit a caller lists, selects and displays."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel

from svg2code.models.options import OutputBackend


class GeneratedArtifact(BaseModel):
    name: str
    group: str
    backend: OutputBackend
    source_text: str
    file_name: str
    source_file: Path | None = None
    # The original SVG, shown next to the generated code; None for XML inputs
    preview_image_file: Path | None = None
    # Set when the run writes files
    output_file: Path | None = None
