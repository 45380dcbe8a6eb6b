"""Configure application logging using the Python standard library.

The root logger gets a rotating file handler that records every event as a
JSON line, plus a console handler on stderr that only shows warnings so the
interactive menu on stdout stays readable.  Context fields (``order_id``,
``payment_method`` and an ``extra`` dict) are lifted into the JSON object.
"""

import json
import logging
import logging.handlers
import os
from datetime import datetime, UTC

LOG_FILE_NAME = "checkout_sim.log"
_CONTEXT_FIELDS = ("order_id", "payment_method")


class JsonFormatter(logging.Formatter):
    """Format log records as JSON strings."""

    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "module": record.module,
            "message": record.getMessage(),
        }
        for name in _CONTEXT_FIELDS:
            if hasattr(record, name):
                log_record[name] = getattr(record, name)
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            # Merge into top level rather than nesting under "extra"
            log_record.update(extra)
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_record, default=str, ensure_ascii=False)


def configure_logging(
    log_dir: str = "logs",
    level: int = logging.INFO,
    console_level: int = logging.WARNING,
) -> str:
    """Configure the root logger with JSON formatting.

    Args:
        log_dir: Directory where the log file is written.  Created if missing.
        level: Level for the root logger and the file handler.
        console_level: Level for the stderr handler.

    Returns:
        Path of the log file.
    """
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, LOG_FILE_NAME)
    logger = logging.getLogger()
    logger.setLevel(level)
    # Drop handlers from earlier calls (or basicConfig) so repeated calls don't duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    formatter = JsonFormatter()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(max(level, console_level))
    logger.addHandler(console_handler)

    file_handler = logging.handlers.RotatingFileHandler(
        filename=log_path,
        maxBytes=5 * 1024 * 1024,  # 5 MB per log file
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(level)
    logger.addHandler(file_handler)
    return log_path
