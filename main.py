from __future__ import annotations

from pathlib import Path

from loguru import logger

from app.cli import build_parser, run
from app.viewmodels.main_vm import MainVM
from core.services.catalog import PhotoCatalog
from infrastructure.batch_processor import BatchProcessor
from infrastructure.json_repository import JsonCatalogRepository
from infrastructure.logging import init_logging
from infrastructure.settings import (
    DEFAULT_CATALOG_PATH,
    JsonSettings,
    export_options_from_settings,
)

BASE_DIR = Path(__file__).parent


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.settings:
        settings = JsonSettings(args.settings)
    else:
        settings = JsonSettings(BASE_DIR / "settings.json", required=False)

    log_dir = settings.get("logging.dir")
    level = (args.log_level or settings.get("logging.level", "INFO") or "INFO").upper()
    init_logging(log_dir if isinstance(log_dir, str) and log_dir else None, level=level)
    logger.info("Command {} (settings: {})", args.command, settings.path)

    catalog = PhotoCatalog()
    vm = MainVM(JsonCatalogRepository(), catalog=catalog, processor=BatchProcessor(catalog))
    catalog_path = args.catalog or settings.get("catalog.path", DEFAULT_CATALOG_PATH)
    defaults = export_options_from_settings(settings)

    return run(args, vm, str(catalog_path), defaults, log_dir=log_dir or None)


if __name__ == "__main__":
    raise SystemExit(main())
