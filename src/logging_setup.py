"""Logging configuration.

The shell owns the terminal, so logs go to a file only.
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Union

LOG_FILE_NAME = 'todo.log'


def setup_logging(*, log_dir: Union[str, Path] = '.local/todo', level: Union[int, str] = logging.INFO) -> Path:
    """Attach a single file handler to the root logger and return the log path.

    Call once, before the first log record. Existing root handlers are
    removed so repeated calls do not duplicate output.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(level)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setFormatter(fmt)
    root.addHandler(fh)

    logging.captureWarnings(True)
    return log_file
