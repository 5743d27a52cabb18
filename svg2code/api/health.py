"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from svg2code import __version__
from svg2code.config import Settings
from svg2code.dependencies import get_settings
from svg2code.emitters import get_registry
from svg2code.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(config: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        env=config.env,
        version=__version__,
        backends=[spec.backend.value for spec in get_registry().all()],
    )
