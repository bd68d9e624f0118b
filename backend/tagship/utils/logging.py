"""
TagShip — Release step logger with duration tracking.

Remote operations are announced with ``log_exec`` before they run; payload
details go through ``log_verbose`` and only show up with --verbose.
"""

import logging
import time
from contextlib import contextmanager
from typing import Generator

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-7s | %(message)s",
    datefmt="%H:%M:%S",
)

logger = logging.getLogger("tagship")


def set_verbose(enabled: bool) -> None:
    logger.setLevel(logging.DEBUG if enabled else logging.INFO)


def log_exec(operation: str) -> None:
    """Announce a remote operation that is about to be issued."""
    logger.info("$ %s", operation)


def log_verbose(message: str, *args: object) -> None:
    logger.debug(message, *args)


def dry_run_notice() -> None:
    logger.info("! Dry run — no remote calls were made")


@contextmanager
def step_timer(step_name: str) -> Generator[None, None, None]:
    """Context manager that logs the start and duration of a release step."""
    logger.info("▶ %s — started", step_name)
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info("✔ %s — completed in %.0f ms", step_name, elapsed_ms)
