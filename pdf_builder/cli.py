#!/usr/bin/env python3
"""
CLI wrapper for generating PDF documents.

Usage:
    python -m pdf_builder.cli retirement data.json                 # -> retirement-analysis.pdf
    python -m pdf_builder.cli invoice data.json exports/inv-42.pdf
    python -m pdf_builder.cli template layout.yml data.json out.pdf
    python -m pdf_builder.cli --config generator.yml report data.json
    python -m pdf_builder.cli list
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .data_sources import DataFileError
from .logging_utils import get_logger, setup_logging
from .pipelines import DEFAULT_OUTPUTS, TemplateConfigError, build_generator, build_pdf
from .surface import SurfaceClosedError

logger = get_logger(__name__)

DOCUMENT_COMMANDS = {
    "retirement": "Retirement analysis",
    "invoice": "Invoice",
    "report": "Report",
    "resume": "Resume",
    "letter": "Letter",
    "contract": "Contract",
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="pdf_builder", description="Generate PDF documents from JSON data")
    p.add_argument("--config", dest="config_path", type=Path, help="YAML file with generator settings, styles and templates")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    p.add_argument("--log-file", dest="log_file", type=Path)

    sub = p.add_subparsers(dest="command", metavar="command")
    for command, label in DOCUMENT_COMMANDS.items():
        cp = sub.add_parser(command, help=f"{label} (default output: {DEFAULT_OUTPUTS[command]})")
        cp.add_argument("data_path", type=Path, help="JSON data file")
        cp.add_argument("output_path", type=Path, nargs="?", help="Output PDF path")

    tp = sub.add_parser("template", help="Render a declarative JSON/YAML template file")
    tp.add_argument("template_path", type=Path)
    tp.add_argument("data_path", type=Path)
    tp.add_argument("output_path", type=Path, nargs="?")

    sub.add_parser("list", help="List registered templates")
    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, args.log_file, force=True)

    try:
        if args.command == "list":
            generator = build_generator(args.config_path)
            for name in generator.templates.list():
                print(name)
            return 0

        if args.command == "template":
            name = args.template_path.stem
            output = args.output_path or Path(f"{name}.pdf")
            result = build_pdf(name, args.data_path, output, args.config_path, template_path=args.template_path)
            label = f"Document from {args.template_path.name}"
        else:
            result = build_pdf(args.command, args.data_path, args.output_path, args.config_path)
            label = DOCUMENT_COMMANDS[args.command]
    except (DataFileError, TemplateConfigError, SurfaceClosedError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if result.errors:
        for diagnostic in result.errors:
            print(f"Error: {diagnostic.message}", file=sys.stderr)
        return 1

    for diagnostic in result.warnings:
        print(f"Warning: {diagnostic.message}", file=sys.stderr)
    print(f"{label} generated: {result.output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
