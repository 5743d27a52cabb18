"""Emitter registry — each backend registers itself via decorator.

Usage:
    @emitter(OutputBackend.COMPOSE, description="Jetpack Compose ImageVector")
    class ComposeEmitter(SourceEmitter):
        ...

Adding a backend = one module with the decorator, imported from
``svg2code.emitters``. Nothing else changes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from svg2code.emitters.base import SourceEmitter
from svg2code.models.options import OutputBackend

logger = logging.getLogger(__name__)


@dataclass
class EmitterSpec:
    backend: OutputBackend
    cls: type[SourceEmitter]
    experimental: bool = False
    description: str = ""


class EmitterRegistry:
    """Singleton registry of all backends."""

    def __init__(self) -> None:
        self._emitters: dict[OutputBackend, EmitterSpec] = {}

    def register(self, spec: EmitterSpec) -> None:
        if spec.backend in self._emitters:
            raise ValueError(f"Duplicate emitter for backend: {spec.backend.value}")
        self._emitters[spec.backend] = spec
        logger.debug("Registered emitter %s (%s)", spec.backend.value, spec.cls.__name__)

    def get(self, backend: OutputBackend) -> EmitterSpec:
        return self._emitters[backend]

    def create(self, backend: OutputBackend) -> SourceEmitter:
        try:
            spec = self._emitters[backend]
        except KeyError:
            raise ValueError(f"No emitter registered for backend: {backend}") from None
        return spec.cls()

    def all(self) -> list[EmitterSpec]:
        return sorted(self._emitters.values(), key=lambda s: s.backend.value)

    @property
    def count(self) -> int:
        return len(self._emitters)


# Module-level singleton
_registry = EmitterRegistry()


def get_registry() -> EmitterRegistry:
    return _registry


def get_emitter(backend: OutputBackend) -> SourceEmitter:
    return _registry.create(backend)


def emitter(backend: OutputBackend, *, experimental: bool = False, description: str = ""):
    """Class decorator to register a backend."""

    def decorator(cls: type[SourceEmitter]):
        cls.backend = backend
        _registry.register(EmitterSpec(backend, cls, experimental, description))
        return cls

    return decorator
