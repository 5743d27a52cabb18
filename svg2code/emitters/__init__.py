"""Code emitters. Importing this package registers every backend."""

from svg2code.emitters import compose, swiftui  # noqa: F401
from svg2code.emitters.base import CodeBlock, SourceEmitter, SourceFile
from svg2code.emitters.registry import get_emitter, get_registry

__all__ = ["CodeBlock", "SourceEmitter", "SourceFile", "get_emitter", "get_registry"]
