"""Batch orchestrator — input files → generated artifacts, one icon at a time.

Two entry modes share the same per-icon path:

    parse_directory(root, "Icons")   # directory tree → nested groups
    parse_files([a, b], "Icons")     # flat list → one group

Failures are isolated per icon: a broken file is logged, recorded in
``RunResult.failures`` and the batch continues.
"""

from __future__ import annotations

import dataclasses
import logging
import time
from collections.abc import Iterable
from pathlib import Path

from svg2code.config import settings
from svg2code.drawable.parser import parse_icon as parse_vector
from svg2code.emitters import SourceEmitter, SourceFile, get_emitter
from svg2code.engine.context import (
    ConversionFailure,
    GeneratedGroup,
    GroupContext,
    Icon,
    RunContext,
    RunResult,
)
from svg2code.errors import FilesystemError, InputFormatError, MalformedVectorError, Svg2CodeError
from svg2code.models.artifact import GeneratedArtifact
from svg2code.models.options import ConvertOptions, OutputBackend, VectorType
from svg2code.svg.normalizer import normalize_svg
from svg2code.utils.names import KOTLIN_KEYWORDS, SWIFT_KEYWORDS, NameAllocator, to_identifier
from svg2code.vector.model import Vector

logger = logging.getLogger(__name__)


def parse_icon(
    icon: Icon,
    options: ConvertOptions,
    group_context: GroupContext,
    emitter: SourceEmitter | None = None,
) -> GeneratedArtifact:
    """Parse one icon's drawable XML and emit it with the configured backend."""
    emitter = emitter or get_emitter(options.output_backend)
    vector = parse_vector(icon, options.color_resources)
    artifact, _ = _emit(icon, vector, options, group_context, emitter)
    return artifact


def _emit(
    icon: Icon,
    vector: Vector,
    options: ConvertOptions,
    group_context: GroupContext,
    emitter: SourceEmitter,
) -> tuple[GeneratedArtifact, SourceFile]:
    source = emitter.emit(vector, icon.name, group_context, options.generate_preview)
    is_svg = icon.source_file is not None and icon.source_file.suffix.lower() == ".svg"
    artifact = GeneratedArtifact(
        name=icon.name,
        group=group_context.group_path,
        backend=options.output_backend,
        source_text=source.text,
        file_name=source.file_name,
        source_file=icon.source_file,
        preview_image_file=icon.source_file if is_svg else None,
    )
    return artifact, source


class Orchestrator:
    """Runs one batch. Create one per run; it holds per-run naming state."""

    def __init__(
        self,
        options: ConvertOptions | None = None,
        output_dir: Path | None = None,
        max_depth: int | None = None,
    ) -> None:
        self.options = options or ConvertOptions()
        self.output_dir = output_dir
        self.max_depth = settings.max_depth if max_depth is None else max_depth
        self.emitter = get_emitter(self.options.output_backend)
        swift = self.options.output_backend is OutputBackend.SWIFTUI
        self.reserved = SWIFT_KEYWORDS if swift else KOTLIN_KEYWORDS
        # Swift structs share one module namespace, so names are unique per run
        self._run_names = NameAllocator() if swift else None

    # ── Entry points ──────────────────────────────────────────────────────

    def run_directory(self, root: Path, accessor_name: str) -> RunResult:
        root = Path(root)
        if not root.is_dir():
            raise FilesystemError(f"{root}: not a directory")

        start = time.perf_counter()
        result = RunResult()
        context = GroupContext.for_root(to_identifier(accessor_name, self.reserved), self.options.package_name)
        with RunContext(self.options, self.output_dir, settings.temp_dir_prefix) as run:
            result.root_group = self._fold(root, context, None, 0, run, result)
            self._write_groups(result.root_group, run, result)
        self._log_summary(result, start)
        return result

    def run_files(self, files: Iterable[Path], accessor_name: str) -> RunResult:
        start = time.perf_counter()
        result = RunResult()
        context = GroupContext.for_root(to_identifier(accessor_name, self.reserved), self.options.package_name)
        files = [Path(f) for f in files]
        with RunContext(self.options, self.output_dir, settings.temp_dir_prefix) as run:
            icons = self._convert_group(files, context, NameAllocator(), run, result)
            result.root_group = GeneratedGroup(context=context, directory=Path("."), icons=icons)
            self._write_groups(result.root_group, run, result)
        self._log_summary(result, start)
        return result

    # ── Directory fold ────────────────────────────────────────────────────

    def _fold(
        self,
        directory: Path,
        context: GroupContext,
        parent: GroupContext | None,
        depth: int,
        run: RunContext,
        result: RunResult,
    ) -> GeneratedGroup:
        try:
            entries = sorted(e for e in directory.iterdir() if not e.name.startswith("."))
        except OSError as e:
            if parent is None:
                raise FilesystemError(f"{directory}: {e}") from e
            self._fail(result, directory, FilesystemError(f"{directory}: {e}"))
            return GeneratedGroup(context=context, directory=directory, parent=parent)

        names = NameAllocator()
        icons = self._convert_group([e for e in entries if e.is_file()], context, names, run, result)

        children: list[GeneratedGroup] = []
        for sub in (e for e in entries if e.is_dir()):
            if depth + 1 > self.max_depth:
                logger.warning("Skipping %s: deeper than %d levels", sub, self.max_depth)
                continue
            child_name = names.allocate(to_identifier(sub.name, self.reserved))
            children.append(self._fold(sub, context.child(child_name), context, depth + 1, run, result))

        return GeneratedGroup(
            context=context,
            directory=directory,
            icons=icons,
            children=tuple(children),
            parent=parent,
        )

    # ── Per-icon work ─────────────────────────────────────────────────────

    def _select_inputs(self, files: list[Path], result: RunResult) -> list[tuple[Path, VectorType]]:
        """Classify files by extension; rejected files are recorded as failures."""
        selected: list[tuple[Path, VectorType]] = []
        for file in files:
            vector_type = self.options.accepts(file.suffix)
            if vector_type is None:
                accepted = self.options.vector_type.value if self.options.vector_type else "svg or xml"
                self._fail(result, file, InputFormatError(f"{file.name}: expected a .{accepted} file"))
                continue
            selected.append((file, vector_type))
        return selected

    def _convert_group(
        self,
        files: list[Path],
        context: GroupContext,
        names: NameAllocator,
        run: RunContext,
        result: RunResult,
    ) -> dict[Path, str]:
        icons: dict[Path, str] = {}
        allocator = self._run_names or names
        for file, vector_type in self._select_inputs(files, result):
            t0 = time.perf_counter()
            try:
                icon = self._load_icon(file, vector_type, context, run)
                vector = parse_vector(icon, self.options.color_resources)
                icon = dataclasses.replace(icon, name=allocator.allocate(icon.name))
                artifact, source = _emit(icon, vector, self.options, context, self.emitter)
                if run.writes_files:
                    artifact.output_file = self._write(source, run, result)
            except (Svg2CodeError, OSError) as e:
                error = e if isinstance(e, Svg2CodeError) else FilesystemError(f"{file}: {e}")
                self._fail(result, file, error)
                continue

            icons[file] = icon.name
            result.artifacts.append(artifact)
            logger.debug("  %s → %s in %.1fms", file.name, icon.name, (time.perf_counter() - t0) * 1000)
        return icons

    def _load_icon(self, file: Path, vector_type: VectorType, context: GroupContext, run: RunContext) -> Icon:
        if vector_type is VectorType.SVG:
            xml_file = run.temp_dir.joinpath(*context.group_path.split("."), f"{file.stem}.xml")
            drawable = normalize_svg(file, xml_file)
        else:
            drawable = file
        try:
            raw_xml = drawable.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise MalformedVectorError(f"{file.name}: not UTF-8 text") from e
        return Icon(
            name=to_identifier(file.stem.strip(), self.reserved),
            original_file_name=drawable.name,
            raw_xml=raw_xml,
            source_file=file,
        )

    # ── Output ────────────────────────────────────────────────────────────

    def _write(self, source: SourceFile, run: RunContext, result: RunResult) -> Path:
        out = run.output_dir / source.relative_path
        try:
            out.parent.mkdir(parents=True, exist_ok=True)
            out.write_text(source.text, encoding="utf-8")
        except OSError as e:
            raise FilesystemError(f"{out}: {e}") from e
        result.written_files.append(out)
        return out

    def _write_groups(self, root: GeneratedGroup, run: RunContext, result: RunResult) -> None:
        if not run.writes_files:
            return
        for group in root.walk():
            source = self.emitter.emit_group(group, self.options.all_assets_property_name)
            if source is None:
                continue
            try:
                self._write(source, run, result)
            except FilesystemError as e:
                self._fail(result, group.directory, e)

    # ── Bookkeeping ───────────────────────────────────────────────────────

    @staticmethod
    def _fail(result: RunResult, file: Path, error: Svg2CodeError) -> None:
        logger.warning("Skipping %s: %s", file, error)
        result.failures.append(ConversionFailure(file=file, error=type(error).__name__, message=str(error)))

    @staticmethod
    def _log_summary(result: RunResult, start: float) -> None:
        logger.info(
            "Run complete: %d generated, %d failed in %.0fms",
            len(result.artifacts),
            len(result.failures),
            (time.perf_counter() - start) * 1000,
        )


def parse_directory(
    root: Path,
    accessor_name: str,
    options: ConvertOptions | None = None,
    output_dir: Path | None = None,
) -> RunResult:
    """Convert every vector under ``root``; subdirectories become nested groups."""
    return Orchestrator(options, output_dir).run_directory(root, accessor_name)


def parse_files(
    files: Iterable[Path],
    accessor_name: str,
    options: ConvertOptions | None = None,
    output_dir: Path | None = None,
) -> RunResult:
    """Convert a flat list of files into one group named ``accessor_name``."""
    return Orchestrator(options, output_dir).run_files(files, accessor_name)
