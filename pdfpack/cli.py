"""Command-line interface for assembling a pack into one PDF."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pdfpack.assembler import assemble
from pdfpack.errors import PackError
from pdfpack.file_manager import item_from_path, items_from_paths
from pdfpack.logging_utils import configure_logger
from pdfpack.models import Item
from pdfpack.settings import (
    load_settings,
    options_from_settings,
    save_settings,
    settings_from_options,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdfpack",
        description=(
            "Combine PDFs, images, text and Word files into one PDF with a "
            "linked table of contents and running headers."
        ),
    )
    parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="Source file; its name without extension becomes the title",
    )
    parser.add_argument(
        "--item",
        action="append",
        nargs="+",
        default=[],
        metavar="VALUE",
        help="PATH [TITLE [DESCRIPTION]]; may be repeated, added after FILE arguments",
    )
    parser.add_argument("-o", "--output", required=True, help="Output PDF path")
    parser.add_argument("--config", help="JSON settings file with default options")
    parser.add_argument("--save-config", help="Write the effective options to this JSON file")
    parser.add_argument("--title", help="PDF metadata title")
    parser.add_argument("--author", help="PDF metadata author")
    parser.add_argument("--subject", help="PDF metadata subject")
    parser.add_argument("--keywords", help="PDF metadata keywords")
    parser.add_argument(
        "--no-compress",
        action="store_true",
        help="Skip garbage collection and stream compression on save",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose progress logs")
    return parser


def collect_items(parser: argparse.ArgumentParser, args: argparse.Namespace) -> List[Item]:
    items, unsupported = items_from_paths(args.files)
    if unsupported:
        logger.warning("Unsupported file types: %s", ", ".join(unsupported))

    for values in args.item:
        if len(values) > 3:
            parser.error(f"--item takes PATH [TITLE [DESCRIPTION]], got {len(values)} values")
        path = values[0]
        title = values[1] if len(values) > 1 else None
        description = values[2] if len(values) > 2 else ""
        items.append(item_from_path(path, title=title, description=description))

    return items


def _print_progress(index: int, total: int, message: str) -> None:
    logger.info("[%d/%d] %s", min(index + 1, total), total, message)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logger(logging.INFO if args.verbose else logging.WARNING)

    settings = load_settings(Path(args.config)) if args.config else {}
    options = options_from_settings(settings)

    metadata_flags = {
        "pdf_title": args.title,
        "pdf_author": args.author,
        "pdf_subject": args.subject,
        "pdf_keywords": args.keywords,
    }
    for name, value in metadata_flags.items():
        if value is not None:
            setattr(options, name, value)
            options.metadata_enabled = True
    if args.no_compress:
        options.compress = False

    if args.save_config:
        save_settings(Path(args.save_config), settings_from_options(options))

    items = collect_items(parser, args)

    try:
        result = assemble(items, options, progress_callback=_print_progress)
        try:
            result.save(args.output)
        finally:
            result.close()
    except PackError as e:
        print(f"pdfpack: {e}", file=sys.stderr)
        return 1

    print(f"Wrote {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
