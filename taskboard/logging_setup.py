from __future__ import annotations

import logging
import sys
from pathlib import Path


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the console readable:
    - all taskboard logs pass
    - uvicorn access/error logs pass at INFO+
    - any other third party only at WARNING+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name.startswith("taskboard"):
            return True
        if name.startswith("uvicorn"):
            return record.levelno >= logging.INFO
        return record.levelno >= logging.WARNING


def setup_logging(
    *,
    level: str | int = logging.INFO,
    log_dir: str | Path | None = None,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Configure the root logger with a console handler and, when log_dir is
    given, a file handler that keeps everything.

    Call this ONCE, before the server starts.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_dir / "taskboard.log"), encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    logging.captureWarnings(True)
