"""Emitter interface and the small text builder the backends share."""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from pathlib import PurePosixPath

from svg2code.engine.context import GeneratedGroup, GroupContext
from svg2code.models.options import OutputBackend
from svg2code.vector.model import Vector


@dataclass(frozen=True)
class SourceFile:
    """One generated source file, not yet written anywhere."""

    name: str
    file_name: str
    text: str
    # Directory relative to the output root, e.g. com/example/icons/icons
    relative_dir: PurePosixPath = PurePosixPath(".")

    @property
    def relative_path(self) -> PurePosixPath:
        return self.relative_dir / self.file_name


@dataclass
class CodeBlock:
    """Line-oriented source builder with brace-aware indentation."""

    indent_unit: str = "    "
    lines: list[str] = field(default_factory=list)
    _level: int = 0

    def add(self, line: str = "") -> "CodeBlock":
        self.lines.append(f"{self.indent_unit * self._level}{line}" if line else "")
        return self

    def begin(self, opener: str) -> "CodeBlock":
        """Add ``opener`` (which should end in ``{``) and indent."""
        self.add(opener)
        self._level += 1
        return self

    def end(self, closer: str = "}") -> "CodeBlock":
        if self._level == 0:
            raise ValueError("end() without matching begin()")
        self._level -= 1
        return self.add(closer)

    def indent(self) -> "CodeBlock":
        """Indent following lines without opening a brace (e.g. a property getter)."""
        self._level += 1
        return self

    def dedent(self) -> "CodeBlock":
        if self._level == 0:
            raise ValueError("dedent() below column 0")
        self._level -= 1
        return self

    def render(self) -> str:
        if self._level:
            raise ValueError(f"{self._level} unclosed block(s)")
        return "\n".join(self.lines) + "\n"


class SourceEmitter(abc.ABC):
    """Turns a Vector into source text for one target language."""

    backend: OutputBackend
    extension: str

    @abc.abstractmethod
    def emit(
        self,
        vector: Vector,
        symbol_name: str,
        group_context: GroupContext,
        generate_preview: bool = True,
    ) -> SourceFile: ...

    def emit_group(self, group: GeneratedGroup, all_assets_property_name: str) -> SourceFile | None:
        """Source declaring the group itself. Backends without group files return None."""
        return None
