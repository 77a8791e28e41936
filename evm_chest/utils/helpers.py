"""
Helper utilities for evm-chest

Logging setup and small timing helpers shared by the test helpers.
"""

import logging
import time
from pathlib import Path
from typing import Optional

import structlog


LOG_FORMAT = '%(asctime)s %(levelname)-7s %(name)s: %(message)s'

# web3 and its HTTP stack log every request at DEBUG
QUIET_LOGGERS = ('web3', 'urllib3', 'aiohttp')


def setup_logging(level: str = "INFO",
                  log_file: Optional[str] = None,
                  structured: bool = True) -> None:
    """
    Route evm-chest output (storage dumps, RPC traces) for a test run

    Args:
        level: Log level name for the root logger
        log_file: Also write records to this file
        structured: Render structlog events as JSON lines
    """
    log_level = getattr(logging, level.upper())
    root = logging.getLogger()

    logging.basicConfig(level=log_level, format=LOG_FORMAT)
    root.setLevel(log_level)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    if structured:
        structlog.configure(
            processors=[
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer()
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )


class Timer:
    """Context manager for timing code execution"""

    def __init__(self, name: str = "Operation"):
        self.name = name
        self.start_time = None
        self.end_time = None

    def __enter__(self):
        self.start_time = time.monotonic()
        return self

    def __exit__(self, *args):
        self.end_time = time.monotonic()
        logging.getLogger(__name__).debug(
            f"{self.name} completed in {self.duration:.3f} seconds"
        )

    @property
    def duration(self) -> float:
        """Get duration in seconds"""
        if self.start_time is None:
            return 0.0
        end = self.end_time if self.end_time is not None else time.monotonic()
        return end - self.start_time
