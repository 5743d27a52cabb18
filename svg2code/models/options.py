"""Conversion options shared by the library, CLI and HTTP API."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field

from svg2code.config import settings


class OutputBackend(str, enum.Enum):
    COMPOSE = "compose"
    SWIFTUI = "swiftui"


class VectorType(str, enum.Enum):
    """Input format; the value is the file extension."""

    SVG = "svg"
    DRAWABLE = "xml"


class ConvertOptions(BaseModel):
    generate_preview: bool = True
    output_backend: OutputBackend = OutputBackend.COMPOSE
    # None accepts both .svg and .xml inputs
    vector_type: VectorType | None = None
    package_name: str = Field(default_factory=lambda: settings.default_package)
    all_assets_property_name: str = Field(default_factory=lambda: settings.all_assets_property_name)
    color_resources: dict[str, str] = Field(
        default_factory=dict,
        description="Color resource references (e.g. '@color/primary') → color value",
    )

    def accepts(self, extension: str) -> VectorType | None:
        """Return the input format for a file extension, or None if filtered out."""
        ext = extension.lower().lstrip(".")
        for vector_type in VectorType:
            if vector_type.value == ext and self.vector_type in (None, vector_type):
                return vector_type
        return None
