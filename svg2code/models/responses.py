"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from svg2code.models.artifact import GeneratedArtifact


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    env: str = "development"
    backends: list[str] = Field(default_factory=list)


class FailureOut(BaseModel):
    file: str
    error: str
    message: str


class ConvertResponse(BaseModel):
    artifacts: list[GeneratedArtifact] = Field(default_factory=list)
    failures: list[FailureOut] = Field(default_factory=list)
    processing_time_ms: float = 0.0
