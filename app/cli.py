"""Command-line front end: one subcommand per catalog operation."""

from __future__ import annotations

import argparse
from pathlib import Path

from loguru import logger

from app.viewmodels.main_vm import MainVM
from app.views.console import render_batch, render_photos
from core.models import OutputFormat
from core.services.interfaces import MAX_QUALITY, MIN_QUALITY, ExportOptions
from infrastructure.logging import find_latest_log_file


def _quality(text: str) -> int:
    try:
        value = int(text)
    except ValueError as ex:
        raise argparse.ArgumentTypeError(f"quality must be an integer, got {text!r}") from ex
    if not MIN_QUALITY <= value <= MAX_QUALITY:
        raise argparse.ArgumentTypeError(
            f"quality must be between {MIN_QUALITY} and {MAX_QUALITY}, got {value}"
        )
    return value


def _output_format(text: str) -> OutputFormat:
    try:
        return OutputFormat.parse(text)
    except ValueError as ex:
        raise argparse.ArgumentTypeError(str(ex)) from ex


def _rename(text: str) -> tuple[str, str]:
    old, sep, new = text.partition("=")
    if not sep or not old.strip() or not new.strip():
        raise argparse.ArgumentTypeError(f"rename must look like OLD=NEW, got {text!r}")
    return old.strip(), new.strip()


def _workers(text: str) -> int:
    try:
        value = int(text)
    except ValueError as ex:
        raise argparse.ArgumentTypeError(f"workers must be an integer, got {text!r}") from ex
    if value < 1:
        raise argparse.ArgumentTypeError("workers must be at least 1")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gallery-builder",
        description="Extract camera metadata and export web-sized variants of photos.",
    )
    parser.add_argument("--settings", help="Path to settings.json")
    parser.add_argument("--catalog", help="Catalog JSON document (default from settings)")
    parser.add_argument("--log-level", help="Log level for file and console output")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("process", help="Extract metadata and resize images in a directory")
    p.add_argument("folder")
    p.add_argument("--quality", type=_quality, help="Encoder quality (25-100)")
    p.add_argument(
        "--format",
        dest="output_format",
        type=_output_format,
        help="Output format: " + ", ".join(f.extension for f in OutputFormat),
    )
    p.add_argument("--base-dir", help="Directory under which img/ is written")
    assets = p.add_mutually_exclusive_group()
    assets.add_argument("--assets", dest="add_assets", action="store_true", default=None)
    assets.add_argument("--no-assets", dest="add_assets", action="store_false")
    p.add_argument(
        "--rename",
        type=_rename,
        action="append",
        default=[],
        metavar="OLD=NEW",
        help="Name resized outputs of OLD after NEW (repeatable)",
    )
    p.add_argument("--workers", type=_workers, help="Files processed in parallel")

    sub.add_parser("show", help="Display photos and their values")

    p = sub.add_parser("tag", help="Append tags to a photo")
    p.add_argument("file_name")
    p.add_argument("tags", nargs="+")

    p = sub.add_parser("alt", help="Set the alt text of a photo")
    p.add_argument("file_name")
    p.add_argument("text")

    p = sub.add_parser("export", help="Save the catalog to another JSON file")
    p.add_argument("path")
    p.add_argument("--force", action="store_true", help="Overwrite an existing file")

    p = sub.add_parser("import", help="Merge a JSON file into the catalog")
    p.add_argument("path")

    sub.add_parser("logs", help="Print the latest log file path")
    return parser


def options_from_args(args: argparse.Namespace, defaults: ExportOptions) -> ExportOptions:
    """Overlay `process` flags on the settings-derived defaults."""
    return ExportOptions(
        quality=args.quality if args.quality is not None else defaults.quality,
        output_format=args.output_format or defaults.output_format,
        base_dir=args.base_dir if args.base_dir is not None else defaults.base_dir,
        add_assets=args.add_assets if args.add_assets is not None else defaults.add_assets,
        renames={**defaults.renames, **dict(args.rename)},
        workers=args.workers or defaults.workers,
    )


def run(
    args: argparse.Namespace,
    vm: MainVM,
    catalog_path: str,
    defaults: ExportOptions,
    log_dir: str | None = None,
) -> int:
    """Execute the parsed command; returns the process exit status."""
    command = args.command
    if command == "logs":
        latest = find_latest_log_file(log_dir)
        print(latest if latest else "No log files found.")
        return 0

    try:
        vm.load_if_exists(catalog_path)
    except (OSError, ValueError) as ex:
        logger.error("Cannot load catalog {}: {}", catalog_path, ex)
        print(f"Error: cannot load catalog {catalog_path}: {ex}")
        return 1

    if command == "show":
        print(render_photos(vm.photos()))
        return 0

    if command == "process":
        folder = Path(args.folder)
        if not folder.is_dir():
            print(f"Invalid or empty folder path: {folder}")
            return 1
        result = vm.process_folder(str(folder), options_from_args(args, defaults))
        print(render_batch(result))
    elif command == "tag":
        if not vm.catalog.contains(args.file_name):
            print(f"No photo named {args.file_name} in catalog.")
            return 1
        added = vm.add_tags(args.file_name, args.tags)
        print(f"Added {added} tag(s) to {args.file_name}.")
    elif command == "alt":
        if not vm.set_alt(args.file_name, args.text):
            print(f"No photo named {args.file_name} in catalog.")
            return 1
        print(f"Alt text set for {args.file_name}.")
    elif command == "export":
        if Path(args.path).exists() and not args.force:
            print(f"{args.path} already exists. Use --force to overwrite.")
            return 1
        try:
            vm.save_catalog(args.path)
        except OSError as ex:
            print(f"Error: {ex}")
            return 1
        print(f"Data saved to {args.path}")
        return 0
    elif command == "import":
        try:
            added = vm.import_catalog(args.path)
        except (OSError, ValueError) as ex:
            print(f"Error reading file: {ex}")
            return 1
        print(f"Imported {added} record(s) from {args.path}; catalog holds {vm.record_count}.")

    try:
        saved = vm.save_catalog(catalog_path)
    except OSError as ex:
        logger.error("Saving catalog failed: {}", ex)
        print(f"Error: {ex}")
        return 1
    print(f"Data saved to {saved}")
    return 0
