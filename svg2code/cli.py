"""Command-line entry point.

    svg2code icons/ --package com.example.app.icons --out build/generated
    svg2code add.svg remove.xml --backend swiftui
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from svg2code.config import settings
from svg2code.drawable.parser import parse_color_resources
from svg2code.engine.orchestrator import parse_directory, parse_files
from svg2code.errors import Svg2CodeError
from svg2code.models.options import ConvertOptions, OutputBackend, VectorType

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="svg2code",
        description="Convert SVG / Android vector drawables to Compose ImageVector or SwiftUI Shape source",
    )
    parser.add_argument("inputs", nargs="+", type=Path, help="One directory, or a list of .svg/.xml files")
    parser.add_argument("-a", "--accessor", default=settings.default_accessor_name, help="Root group name")
    parser.add_argument("-p", "--package", default=settings.default_package, help="Base package for generated code")
    parser.add_argument(
        "-b",
        "--backend",
        choices=[b.value for b in OutputBackend],
        default=OutputBackend.COMPOSE.value,
        help="Target language",
    )
    parser.add_argument(
        "-t",
        "--type",
        choices=[t.value for t in VectorType],
        default=None,
        help="Only accept this input format (default: both)",
    )
    parser.add_argument("--no-preview", action="store_true", help="Skip preview code")
    parser.add_argument("--colors", type=Path, help="Android colors.xml for @color/ references")
    parser.add_argument("-o", "--out", type=Path, help="Write files here instead of printing them")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        color_resources = parse_color_resources(args.colors.read_text(encoding="utf-8")) if args.colors else {}
        options = ConvertOptions(
            generate_preview=not args.no_preview,
            output_backend=OutputBackend(args.backend),
            vector_type=VectorType(args.type) if args.type else None,
            package_name=args.package,
            color_resources=color_resources,
        )
        if len(args.inputs) == 1 and args.inputs[0].is_dir():
            result = parse_directory(args.inputs[0], args.accessor, options, args.out)
        else:
            result = parse_files(args.inputs, args.accessor, options, args.out)
    except (Svg2CodeError, OSError, UnicodeDecodeError) as e:
        print(f"svg2code: {e}", file=sys.stderr)
        return 2

    if args.out is None:
        for artifact in result.artifacts:
            print(f"// {artifact.group}.{artifact.name} ({artifact.file_name})")
            print(artifact.source_text)
    else:
        for path in result.written_files:
            print(path)

    for failure in result.failures:
        print(f"FAILED {failure.file}: {failure.error}: {failure.message}", file=sys.stderr)

    print(
        f"Done: {len(result.artifacts)} generated, {len(result.failures)} failed",
        file=sys.stderr,
    )
    return 0 if result.ok else 1
