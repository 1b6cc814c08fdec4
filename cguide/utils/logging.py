from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool = False, quiet: bool = False, log_file: str | None = None) -> None:
    # Rendered documents own stdout; diagnostics go to stderr.
    level = logging.WARNING
    if verbose:
        level = logging.DEBUG
    if quiet:
        level = logging.ERROR

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        handlers.append(file_handler)

    logging.basicConfig(
        level=min(level, logging.INFO) if log_file else level,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
    handlers[0].setLevel(level)
