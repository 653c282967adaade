# leveler/infra/logging_config.py
from __future__ import annotations
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from leveler.infra.path import user_data_dir
from leveler.infra.operational_support import TraceIdLogFilter

LOG_FILE_NAME = "leveler.log"
FILE_FORMAT = "%(asctime)s [%(levelname)s] trace=%(trace_id)s %(name)s - %(message)s"
CONSOLE_FORMAT = "%(levelname)s [trace=%(trace_id)s]: %(message)s"


def _handler(handler: logging.Handler, fmt: str, trace_filter: logging.Filter) -> logging.Handler:
    handler.addFilter(trace_filter)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def setup_logging(log_dir: Optional[Path] = None, level: int = logging.INFO) -> Path:
    """
    Route root logging to a rotating file and the console.

    The file lives in `<user data dir>/logs` unless `log_dir` is given.
    Calling this again replaces the handlers it installed before.
    Returns the log file path.
    """
    target_dir = log_dir or (user_data_dir() / "logs")
    target_dir.mkdir(parents=True, exist_ok=True)
    log_file = target_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(level)
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()

    trace_filter = TraceIdLogFilter()
    root.addHandler(
        _handler(
            RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=5, encoding="utf-8"),
            FILE_FORMAT,
            trace_filter,
        )
    )
    root.addHandler(_handler(logging.StreamHandler(), CONSOLE_FORMAT, trace_filter))

    # engine SQL echo is noise at INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    root.info("Logging initialized. Log file at %s", log_file)
    return log_file
