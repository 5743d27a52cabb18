"""FastAPI dependency injection."""

from __future__ import annotations

from svg2code.config import settings


def get_settings():
    return settings
