"""
Run logging helpers.

Each generation run gets its own timestamped log file; warnings are echoed to
stderr unless the run is quiet.
"""

import logging
from datetime import datetime
from pathlib import Path

_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_STREAM_FORMAT = "%(levelname)s %(message)s"


def resolve_log_dir(log_dir=None):
    default_log_dir = Path.cwd() / "logs"
    if log_dir is None:
        return default_log_dir
    text = str(log_dir).strip()
    return Path(text).expanduser() if text else default_log_dir


def _reset_handlers(logger):
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        try:
            handler.close()
        except Exception:
            # A broken handler must not block a new run from logging.
            pass


def setup_run_logger(log_dir=None, name="corrgen", quiet=False):
    """Configure ``name`` for one run and return ``(logger, log_path)``."""

    resolved_log_dir = resolve_log_dir(log_dir)
    resolved_log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_path = resolved_log_dir / f"run_{timestamp}.log"

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    _reset_handlers(logger)

    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
    logger.addHandler(file_handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(logging.ERROR if quiet else logging.WARNING)
    stream_handler.setFormatter(logging.Formatter(_STREAM_FORMAT))
    logger.addHandler(stream_handler)

    return logger, str(log_path)


def get_logger(logger=None):
    """Return ``logger`` or the package logger for engine-level messages."""

    if logger is not None:
        return logger
    return logging.getLogger("corrgen")
