"""loguru sinks for batch runs: a rotating daily file plus optional stderr echo."""

from __future__ import annotations

from pathlib import Path
import sys

from loguru import logger

LOG_FILE_GLOB = "app_*.log"
CONSOLE_FORMAT = "<level>{level: <8}</level> | {message}"


def get_log_directory() -> str:
    """Default location of the run logs, under the user's home directory."""
    return str(Path.home() / ".gallery_builder" / "logs")


def init_logging(log_dir: str | None = None, level: str = "INFO", console: bool = True) -> None:
    """Replace loguru's default handler with the application sinks.

    The file sink rolls over at 10 MB, keeps ten days of history and is
    enqueued so worker threads never block on disk writes. When `console` is
    set, records at `level` and above are echoed to stderr as well.
    """
    target = Path(log_dir or get_log_directory())
    target.mkdir(parents=True, exist_ok=True)

    logger.remove()
    logger.add(
        str(target / "app_{time:YYYYMMDD}.log"),
        level=level,
        rotation="10 MB",
        retention="10 days",
        compression="zip",
        enqueue=True,
        backtrace=False,
        diagnose=False,
    )
    if console:
        logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)


def find_latest_log_file(log_dir: str | None = None) -> Path | None:
    """Most recently written run log in `log_dir`, or None if there is none."""
    folder = Path(log_dir or get_log_directory())
    if not folder.is_dir():
        return None
    try:
        candidates = [(p.stat().st_mtime, p) for p in folder.glob(LOG_FILE_GLOB)]
    except OSError as ex:
        logger.warning("Cannot scan log directory {}: {}", folder, ex)
        return None
    return max(candidates)[1] if candidates else None
