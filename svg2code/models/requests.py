"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from svg2code.config import settings
from svg2code.models.options import ConvertOptions

# Last path segment must hold something besides dots: rejects "", ".", "..", "dir/"
UPLOAD_NAME_PATTERN = r"^(?:.*/)?[^/]*[^/.][^/]*$"


class UploadedFile(BaseModel):
    name: str = Field(
        ...,
        min_length=1,
        pattern=UPLOAD_NAME_PATTERN,
        description="File name, including the .svg or .xml extension",
    )
    content: str = Field(..., description="Raw SVG or vector-drawable XML")


class ConvertRequest(BaseModel):
    accessor_name: str = Field(
        default_factory=lambda: settings.default_accessor_name,
        description="Name of the generated group object (e.g. Icons)",
    )
    files: list[UploadedFile] = Field(..., description="Files to convert, as one flat group")
    options: ConvertOptions = Field(default_factory=ConvertOptions)
