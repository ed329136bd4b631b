from __future__ import annotations

import argparse
import logging

import uvicorn

from .config import get_settings
from .logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    settings = get_settings()

    parser = argparse.ArgumentParser(prog="taskboard", description="Run the taskboard API server.")
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    args = parser.parse_args(argv)

    setup_logging(level=settings.log_level, log_dir=settings.log_dir)
    logger.info("Starting %s on http://%s:%s", settings.app_name, args.host, args.port)

    uvicorn.run("taskboard.main:app", host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":
    main()
