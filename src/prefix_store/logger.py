"""Structured debug logging (timestamp, query, result count, etc.)."""

import logging
import logging.handlers
from pathlib import Path
from typing import Union

LOG_FILE_PATH = Path("logs/prefix_store.log")
_LOG_LEVEL = logging.INFO

LOG_FORMAT = (
    "level=%(levelname)s | time=%(asctime)s | process=%(process)d | "
    "thread=%(thread)d | module=%(module)s | funcName=%(funcName)s | "
    "lineno=%(lineno)d | message=%(message)s"
)
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    log_file: Union[Path, None] = None,
    level: int = _LOG_LEVEL,
) -> logging.Handler:
    """Configure the root logger to write to a rotating log file.

    Any handler already attached to the root logger is removed, so
    calling this twice does not duplicate records.

    Args:
        log_file (Path, optional): Where to write the log. Defaults to
        `LOG_FILE_PATH`.
        level (int): The root logger level.

    Returns:
        logging.Handler: The file handler that was installed.

    """
    log_file = LOG_FILE_PATH if log_file is None else log_file
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(file_handler)
    return file_handler


def log_query(
    time_stamp: str,
    operation: str,
    query: str,
    result_count: int,
    execution_time_ms: float,
) -> None:
    """Log the details of a query execution using the configured
    logging system.

    Args:
        time_stamp (str): The timestamp of the query execution.
        operation (str): The trie operation ("exists" or "prefix").
        query (str): The query key or prefix, as displayed to the user.
        result_count (int): How many keys matched.
        execution_time_ms (float): The execution time in milliseconds.

    """
    logging.info(
        "Timestamp: %s, Operation: %s, Query: '%s', Results: %d, "
        "Execution Time: %.2f ms",
        time_stamp,
        operation,
        query,
        result_count,
        execution_time_ms,
    )
