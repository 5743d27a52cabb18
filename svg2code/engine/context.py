"""Run-scoped state for one orchestrator invocation.

Icon → one input file queued for conversion.
GeneratedGroup → immutable tree mirroring the input directory structure.
RunContext → owns the temp directory for normalized XML; released on exit.
RunResult → everything a run produced, including per-file failures.
"""

from __future__ import annotations

import logging
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from types import TracebackType

from svg2code.models.artifact import GeneratedArtifact
from svg2code.models.options import ConvertOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Icon:
    """A named, raw-text-backed unit of work."""

    name: str
    original_file_name: str
    raw_xml: str
    # The user's input file (the SVG, not the normalized XML)
    source_file: Path | None = None


@dataclass(frozen=True)
class GroupContext:
    """Where a generated symbol lives: its group object and package."""

    group_name: str
    group_path: str
    icons_package: str
    # Receiver type of the generated icon properties, and where it is declared
    class_name: str = ""
    package: str = ""

    @classmethod
    def for_root(cls, accessor_name: str, package: str) -> "GroupContext":
        return cls(
            group_name=accessor_name,
            group_path=accessor_name,
            icons_package=f"{package}.{accessor_name.lower()}",
            class_name=accessor_name,
            package=package,
        )

    def child(self, name: str) -> "GroupContext":
        """Context of a nested group; it is declared in this group's icons package."""
        return GroupContext(
            group_name=name,
            group_path=f"{self.group_path}.{name.lower()}",
            icons_package=f"{self.icons_package}.{name.lower()}",
            class_name=f"{name}Group",
            package=self.icons_package,
        )


@dataclass(frozen=True)
class GeneratedGroup:
    """One directory's worth of generated icons, plus its child groups."""

    context: GroupContext
    directory: Path
    icons: dict[Path, str] = field(default_factory=dict)
    children: tuple["GeneratedGroup", ...] = ()
    parent: GroupContext | None = None

    @property
    def name(self) -> str:
        return self.context.group_name

    @property
    def group_path(self) -> str:
        return self.context.group_path

    @property
    def package(self) -> str:
        return self.context.package

    @property
    def icons_package(self) -> str:
        return self.context.icons_package

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def all_icons(self) -> dict[Path, str]:
        """Every generated symbol in this subtree, keyed by source file."""
        found: dict[Path, str] = {}
        for group in self.walk():
            found.update(group.icons)
        return found

    def walk(self):
        """Yield this group and every descendant, depth-first, parents first."""
        yield self
        for child in self.children:
            yield from child.walk()


# Public name of the result tree
ParsingResult = GeneratedGroup


@dataclass
class ConversionFailure:
    file: Path
    error: str
    message: str


@dataclass
class RunResult:
    artifacts: list[GeneratedArtifact] = field(default_factory=list)
    failures: list[ConversionFailure] = field(default_factory=list)
    root_group: GeneratedGroup | None = None
    written_files: list[Path] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return bool(self.artifacts)


class RunContext:
    """Scoped resources of one batch: options, output dir, temp dir.

    Use as a context manager; the temp directory is removed on every exit
    path, including exceptions.
    """

    def __init__(
        self,
        options: ConvertOptions,
        output_dir: Path | None = None,
        temp_prefix: str = "svg2code-",
    ) -> None:
        self.options = options
        self.output_dir = output_dir
        self._temp_prefix = temp_prefix
        self._temp: tempfile.TemporaryDirectory | None = None

    @property
    def temp_dir(self) -> Path:
        if self._temp is None:
            raise RuntimeError("RunContext is not active")
        return Path(self._temp.name)

    @property
    def writes_files(self) -> bool:
        return self.output_dir is not None

    def __enter__(self) -> "RunContext":
        self._temp = tempfile.TemporaryDirectory(prefix=self._temp_prefix)
        logger.debug("Run temp dir: %s", self._temp.name)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._temp is not None:
            self._temp.cleanup()
            self._temp = None
