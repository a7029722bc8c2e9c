# src/printlite/shared/logging_conf.py
"""
Logging Setup - Root Logger for the PrintLite Core

Every PrintLite module logs through ``logging.getLogger(__name__)``; this
module configures where those records end up. The command line prints its
JSON responses on stdout, so log records go to stderr unless stdout logging
is requested, and can additionally be written to a size-rotated
``printlite.log`` file.

Files that USE this module:
- printlite.app (main calls setup_logging with values from Settings)
- tests.test_settings (unit tests)

Files that this module USES:
- None (standard library logging only)
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s :: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "printlite.log"


def _resolve_log_path(
    log_file: Optional[Union[str, Path]],
    log_dir: Optional[Union[str, Path]],
) -> Optional[Path]:
    # LOG_DIR wins over LOG_FILE; both create missing parent directories
    if log_dir:
        path = Path(log_dir) / LOG_FILE_NAME
    elif log_file:
        path = Path(log_file)
    else:
        return None
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def setup_logging(
    level=logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    log_dir: Optional[Union[str, Path]] = None,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
    log_stdout: Optional[bool] = None,
) -> Optional[Path]:
    """
    Configure the root logger for PrintLite.

    Args:
        level: Root log level (default: logging.INFO)
        log_file: Path of a rotating log file
        log_dir: Directory for ``printlite.log`` (takes precedence over log_file)
        max_bytes: Size at which the log file is rotated (default: 10MB)
        backup_count: Rotated files to keep (default: 5)
        log_stdout: Log to stdout instead of stderr; when None, read
            PRINTLITE_LOG_STDOUT (default false)

    Returns:
        Path of the log file, or None when logging only to a stream
    """
    if log_stdout is None:
        log_stdout = os.environ.get("PRINTLITE_LOG_STDOUT", "false").strip().lower() in ("1", "true", "yes")

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    stream_handler = logging.StreamHandler(sys.stdout if log_stdout else sys.stderr)
    handlers: List[logging.Handler] = [stream_handler]

    log_path = _resolve_log_path(log_file, log_dir)
    if log_path is not None:
        handlers.append(RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        ))

    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    logging.getLogger(__name__).info(
        "Logging to %s%s at level %s",
        "stdout" if log_stdout else "stderr",
        f" and {log_path}" if log_path else "",
        logging.getLevelName(level),
    )
    return log_path
